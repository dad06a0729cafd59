"""Domain-specific library modules.

Modules here import trackbridge domain models and implement the matching
logic (query generation, candidate scoring, confidence). Pure utilities
that don't depend on domain models live in ``trackbridge.utils`` instead.

Consumers should import directly from submodules::

    from trackbridge.lib.matching import score_candidate
    from trackbridge.lib.queries import generate_queries
"""

"""Infrastructure Layer — IO adapters behind the core protocols.

Invariants:
    - Adapters satisfy core.protocols structurally; core never imports this package
"""

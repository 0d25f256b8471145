"""Core Layer — graph accumulation, derived metrics, and session flow. No IO.

Invariants:
    - No module in core/ imports from api/, schemas/, or infrastructure/
    - Outbound notifications and timers cross the boundary only through core.protocols

Design Decisions:
    - Functional core separated from imperative shell: metrics are pure functions
      over GraphStore, the engine is the only mutator
"""

"""API Layer — FastAPI routes, WebSocket endpoint, and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Routes never contain session logic: they translate to SessionEngine calls

Design Decisions:
    - Thin routes delegate to the engine (functional core, imperative shell)
"""

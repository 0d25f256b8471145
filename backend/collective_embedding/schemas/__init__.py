"""Pydantic Schemas — request/response validation for the HTTP and WebSocket boundary.

Invariants:
    - Schemas validate at system boundary (admin requests, participant frames, API responses)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core: schemas are wire contracts, core holds dataclasses and dicts
"""

"""Core Layer - pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, db/ or models/
    - All functions are pure and deterministic given their inputs (ids and clocks injectable)

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""

"""Core Layer — pure path synthesis logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, schemas/, infrastructure/, or config
    - All functions are pure and deterministic over their inputs

Design Decisions:
    - Functional core separated from imperative shell (ADR: impureim sandwich)
"""

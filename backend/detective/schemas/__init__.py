"""Pydantic Schemas — validation of the JSON contract at the engine boundary.

Invariants:
    - Schemas validate at system boundary (caller JSON in, JSON out)
    - Domain types from core/ used for enum fields

Design Decisions:
    - Separate from core: schemas are wire contracts, core types are
      frozen dataclasses the algorithm runs on
"""

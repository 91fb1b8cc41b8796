"""Pydantic Schemas: request validation contracts and response transformers.

Invariants:
    - Request schemas validate at the system boundary via core/validation.py
    - Response schemas are the only path from ORM rows to wire dicts

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - camelCase on the wire, snake_case in Python (alias generator)
"""

"""API Layer: FastAPI routes, request-validation dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - Every endpoint returns a response envelope (core/envelope.py)
"""

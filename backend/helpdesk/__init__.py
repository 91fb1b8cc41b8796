"""Helpdesk API Package: tickets, products and users over a REST boundary.

Invariants:
    - Package root contains no executable code (import side-effects prohibited)

Design Decisions:
    - Explicit imports only, no star exports
"""

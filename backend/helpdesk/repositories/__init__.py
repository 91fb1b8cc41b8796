"""Repositories: SQLAlchemy implementations of core/repository_protocols.py.

Invariants:
    - One repository per aggregate, bound to one AsyncSession per request
    - Writes commit before returning; returned rows are refreshed
    - Unknown sort keys never reach SQL (schemas restrict sortBy to a Literal)
"""

"""Database Infrastructure: SQLAlchemy declarative Base and standalone session factory.

Invariants:
    - Single async engine per process (owned by AppResources)
    - All sessions are async (AsyncSession)
"""

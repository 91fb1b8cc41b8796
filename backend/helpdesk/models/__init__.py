"""ORM Models: SQLAlchemy declarative models for users, tickets and products.

Invariants:
    - All models inherit from Base (db/base.py)
    - Integer surrogate keys; wire identifiers are the same integers

Design Decisions:
    - One file per entity
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from helpdesk.models.user import User  # noqa: F401
from helpdesk.models.ticket import Ticket  # noqa: F401
from helpdesk.models.product import Product  # noqa: F401

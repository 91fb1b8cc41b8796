"""Service Layer: imperative shell around the pure core (health aggregation, accounts).

Invariants:
    - Services receive their collaborators explicitly (constructor or arguments)
    - Services raise HelpdeskError subclasses; routes never catch them
"""

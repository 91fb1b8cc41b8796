"""Infrastructure Layer: external service clients and cross-cutting concerns.

Invariants:
    - Infrastructure never imports from api/ or services/
    - Every external handle is created by AppResources and closed at shutdown
"""

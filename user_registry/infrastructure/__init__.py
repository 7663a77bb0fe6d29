"""Infrastructure Layer — database access and cross-cutting concerns.

Invariants:
    - Infrastructure implements core/ protocols; core/ never imports infrastructure
    - All SQLAlchemy exceptions are mapped to core/errors.py types before leaving this layer
"""

"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - One file per entity; all models imported here so Base.metadata is
      complete for alembic and create_all
"""

from user_registry.models.user import User  # noqa: F401

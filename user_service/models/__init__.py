"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)
    - Imported here so Base.metadata is complete before create_all or autogenerate
"""

from user_service.models.user import UserRecord  # noqa: F401

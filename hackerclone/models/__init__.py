"""ORM Models — SQLAlchemy declarative models for users, posts and comments.

Invariants:
    - All models inherit from Base (db/base.py)
    - Integer primary keys are assigned by the database

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all or autogenerate
"""

from hackerclone.models.user import User  # noqa: F401
from hackerclone.models.post import Post  # noqa: F401
from hackerclone.models.comment import Comment  # noqa: F401

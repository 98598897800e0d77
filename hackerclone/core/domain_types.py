"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, PostId, CommentId wrap the integer primary keys the store assigns
    - Password hashes travel as PasswordHash, never as bare str

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
"""

from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", int)
PostId = NewType("PostId", int)
CommentId = NewType("CommentId", int)


# ─── Value Types ─────────────────────────────────────────────────

PasswordHash = NewType("PasswordHash", str)     # argon2 encoded string
SessionToken = NewType("SessionToken", str)     # itsdangerous signed payload

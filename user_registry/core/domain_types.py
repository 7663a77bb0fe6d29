"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the opaque string key; the API never parses it
    - UserField enumerates the fields that must stay unique across users

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class UserField(str, Enum):
    """Unique user fields. Value is the wire name used in error payloads."""
    EMAIL = "email"
    PHONE_NUMBER = "phoneNumber"

    @property
    def error_code(self) -> str:
        return f"DUPLICATE_{self.name}"


class UserLookup(str, Enum):
    """How a user was looked up — surfaces in not-found messages."""
    ID = "id"
    EMAIL = "email"
    FIRST_NAME = "first name"

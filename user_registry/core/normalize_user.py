"""User Normalization — pure rules for case-folding, first-name matching and uniqueness scans.

Invariants:
    - Names are stored upper-cased, emails lower-cased, phone numbers as given
    - First name = text before the first single space of the stored name
    - find_taken_field checks email before phone number

Design Decisions:
    - split(" ") rather than split(): a leading space or double space yields an
      empty first token, matching how stored names have always been compared
    - find_taken_field works on an already-loaded user list: the update path
      scans the whole table in memory instead of issuing per-field queries
"""

from typing import Iterable

from user_registry.core.domain_types import UserField
from user_registry.core.repository_protocols import UserLike


def normalize_name(name: str) -> str:
    return name.upper()


def normalize_email(email: str) -> str:
    return email.lower()


def first_name_of(name: str) -> str:
    """First space-separated token of a name."""
    return name.split(" ")[0]


def filter_by_first_name(
    users: Iterable[UserLike], first_name: str,
) -> list[UserLike]:
    """Users whose stored first name equals first_name (case-folded to upper)."""
    wanted = normalize_name(first_name)
    return [u for u in users if first_name_of(u.name) == wanted]


def find_taken_field(
    users: Iterable[UserLike],
    email: str,
    phone_number: str,
    exclude_id: str | None = None,
) -> UserField | None:
    """Return the first unique field already held by another user, or None.

    email is compared after lower-casing; the user with exclude_id is ignored
    so that a user may keep its own email and phone number.
    """
    others = [u for u in users if u.id != exclude_id]
    wanted_email = normalize_email(email)
    if any(u.email == wanted_email for u in others):
        return UserField.EMAIL
    if any(u.phone_number == phone_number for u in others):
        return UserField.PHONE_NUMBER
    return None

# school_scheduler/services/identity.py
"""
Who is making the request.

Profile lookup is optional. Without one, requests run as a placeholder
identity instead of failing.
"""

from dataclasses import dataclass
from typing import Optional

ANONYMOUS_USER_ID = "anonymous"
ANONYMOUS_DISPLAY_NAME = "匿名ユーザー"


@dataclass(frozen=True)
class Profile:
    """What a profile provider returns. Either field may be missing."""
    user_id: Optional[str] = None
    display_name: Optional[str] = None


@dataclass(frozen=True)
class Identity:
    user_id: str
    display_name: str

    @property
    def is_anonymous(self) -> bool:
        return self.user_id == ANONYMOUS_USER_ID


def resolve_identity(profile: Optional[Profile]) -> Identity:
    if profile is None:
        return Identity(ANONYMOUS_USER_ID, ANONYMOUS_DISPLAY_NAME)

    user_id = (profile.user_id or "").strip() or ANONYMOUS_USER_ID
    display_name = (profile.display_name or "").strip() or ANONYMOUS_DISPLAY_NAME
    return Identity(user_id, display_name)

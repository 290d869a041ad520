"""
SIMS Dashboard - Access Control
Client-side role flag, demo users and the guards the views call
"""

from enum import Enum
from typing import Dict, List, Union

from store.seed import MOCK_USERS as _SEED_USERS


class UserRole(str, Enum):
    USER = "user"
    OFFICER = "officer"
    ADMIN = "admin"


RoleLike = Union[UserRole, str, None]

MOCK_USERS: Dict[UserRole, dict] = {UserRole(user["role"]): user for user in _SEED_USERS}

NAV_PAGES = [
    {"name": "Dashboard", "page": "dashboard", "icon": "🏠", "roles": list(UserRole)},
    {"name": "Leaderboard", "page": "leaderboard", "icon": "🏆", "roles": list(UserRole)},
    {"name": "Events", "page": "events", "icon": "📅", "roles": list(UserRole)},
    {"name": "Rules & Guidelines", "page": "rules", "icon": "📜", "roles": list(UserRole)},
    {"name": "Profile", "page": "profile", "icon": "👤", "roles": list(UserRole)},
    {"name": "Admin Panel", "page": "admin", "icon": "⚙️", "roles": [UserRole.ADMIN]},
]


def normalize_role(role: RoleLike) -> UserRole:
    """Coerce a role flag to UserRole; anything unknown is a plain user"""
    try:
        return UserRole(role)
    except ValueError:
        return UserRole.USER


def can_edit_events(role: RoleLike) -> bool:
    """Officers and admins may add, edit and delete events"""
    return normalize_role(role) in (UserRole.OFFICER, UserRole.ADMIN)


def can_view_sensitive(role: RoleLike) -> bool:
    """Officers and admins see who a demerit was recorded against"""
    return normalize_role(role) in (UserRole.OFFICER, UserRole.ADMIN)


def can_access_admin(role: RoleLike) -> bool:
    return normalize_role(role) == UserRole.ADMIN


def visible_pages(role: RoleLike) -> List[dict]:
    """Navigation entries available to a role"""
    role = normalize_role(role)
    return [page for page in NAV_PAGES if role in page["roles"]]


def user_for_role(role: RoleLike) -> dict:
    return MOCK_USERS[normalize_role(role)]

"""Role helpers and capability mapping for portal users."""
from __future__ import annotations

import enum
from typing import Dict, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from adcert.models.user import User


class RoleCode(str, enum.Enum):
    ADVERTISER = "advertiser"
    REVIEWER = "reviewer"
    ADMIN = "admin"


ROLE_CODE_TO_DISPLAY: Dict[str, str] = {
    RoleCode.ADVERTISER.value: "Advertiser",
    RoleCode.REVIEWER.value: "Reviewer",
    RoleCode.ADMIN.value: "Administrator",
}

ROLE_DISPLAY_TO_CODE: Dict[str, str] = {
    "advertiser": RoleCode.ADVERTISER.value,
    "reviewer": RoleCode.REVIEWER.value,
    "admin": RoleCode.ADMIN.value,
    "administrator": RoleCode.ADMIN.value,
}


def normalize_role_code(value: str | None) -> Optional[str]:
    if not value:
        return None
    return ROLE_DISPLAY_TO_CODE.get(value.strip().lower())


def get_role_display(role_code: str | None, fallback: str | None = None) -> Optional[str]:
    if not role_code:
        return fallback
    return ROLE_CODE_TO_DISPLAY.get(role_code, fallback)


def get_user_role_code(user: "User") -> Optional[str]:
    role = user.role
    if role is None:
        return None
    return role.value if isinstance(role, RoleCode) else normalize_role_code(role)


def is_admin(user: "User") -> bool:
    return get_user_role_code(user) == RoleCode.ADMIN.value


def is_advertiser(user: "User") -> bool:
    return get_user_role_code(user) == RoleCode.ADVERTISER.value


def can_review(user: "User") -> bool:
    """Reviewers and administrators may move submissions through review."""
    return get_user_role_code(user) in {RoleCode.REVIEWER.value, RoleCode.ADMIN.value}


def build_capabilities(role_code: str | None) -> dict:
    return {
        "is_admin": role_code == RoleCode.ADMIN.value,
        "is_reviewer": role_code == RoleCode.REVIEWER.value,
        "can_submit": role_code == RoleCode.ADVERTISER.value,
        "can_review_submissions": role_code in {RoleCode.REVIEWER.value, RoleCode.ADMIN.value},
        "can_view_all_submissions": role_code in {RoleCode.REVIEWER.value, RoleCode.ADMIN.value},
        "can_view_audit_logs": role_code in {RoleCode.REVIEWER.value, RoleCode.ADMIN.value},
        "can_manage_users": role_code == RoleCode.ADMIN.value,
        "can_revoke_certificates": role_code == RoleCode.ADMIN.value,
        "can_reissue_certificates": role_code == RoleCode.ADMIN.value,
    }

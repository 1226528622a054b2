"""Dashboard and block permission builders, plus level/expiry helpers.

Builders only insist on their key field (sharing mode, block id). Everything
else is checked by PermissionHelper.validate(), which collects errors instead
of raising so a caller can show them all at once.
"""

from datetime import datetime, timedelta
from typing import Optional

from .types import (
    BlockPermission, DashboardPermission, PermissionEntity, PermissionLevel, SharingMode,
)
from .validation import ValidationError, ValidationResult

# Lowest to highest
PERMISSION_ORDER = (
    PermissionLevel.NONE,
    PermissionLevel.COMMENT,
    PermissionLevel.VIEW,
    PermissionLevel.EDIT,
    PermissionLevel.ADMIN,
    PermissionLevel.OWNER,
)

MIN_LINK_PASSWORD_LENGTH = 6


class _EntityMixin:
    """add_user / add_team / add_department for both permission builders."""

    def add_entity(self, entity: PermissionEntity):
        self._entities.append(entity)
        return self

    def add_user(self, user_id: str, level: PermissionLevel):
        return self.add_entity(PermissionEntity("user", user_id, level))

    def add_team(self, team_id: str, level: PermissionLevel):
        return self.add_entity(PermissionEntity("team", team_id, level))

    def add_department(self, department_id: str, level: PermissionLevel):
        return self.add_entity(PermissionEntity("department", department_id, level))


class DashboardPermissionBuilder(_EntityMixin):
    def __init__(self):
        self._fields = {}
        self._entities = []

    def sharing_mode(self, mode: SharingMode):
        self._fields["sharing_mode"] = mode
        return self

    def private(self):
        return self.sharing_mode(SharingMode.PRIVATE)

    def public(self):
        return self.sharing_mode(SharingMode.PUBLIC)

    def share_via_link(self, password: Optional[str] = None):
        self.sharing_mode(SharingMode.LINK)
        return self.enable_public_link(True, password)

    def share_with_team(self):
        return self.sharing_mode(SharingMode.TEAM)

    def share_with_users(self):
        return self.sharing_mode(SharingMode.SPECIFIC_USERS)

    def allow_comments(self, allow: bool = True):
        self._fields["allow_comments"] = allow
        return self

    def allow_export(self, allow: bool = True):
        self._fields["allow_export"] = allow
        return self

    def allow_share(self, allow: bool = True):
        self._fields["allow_share"] = allow
        return self

    def enable_public_link(self, enabled: bool = True, password: Optional[str] = None):
        self._fields["public_link_enabled"] = enabled
        if password:
            self._fields["public_link_password"] = password
        return self

    def expires_at(self, when: datetime):
        self._fields["expires_at"] = when
        return self

    def expires_in_days(self, days: int):
        return self.expires_at(datetime.now() + timedelta(days=days))

    def build(self) -> DashboardPermission:
        """Raises ValidationError without a sharing mode. Other rules: PermissionHelper.validate."""
        if self._fields.get("sharing_mode") is None:
            raise ValidationError("Sharing mode is required")
        return DashboardPermission(entities=tuple(self._entities), **self._fields)


class BlockPermissionBuilder(_EntityMixin):
    def __init__(self):
        self._block_id = None
        self._entities = []
        self._inherit = None

    def block_id(self, block_id: str):
        self._block_id = block_id
        return self

    def inherit_from_dashboard(self, inherit: bool = True):
        self._inherit = inherit
        return self

    def build(self) -> BlockPermission:
        if not self._block_id:
            raise ValidationError("Block ID is required")
        return BlockPermission(self._block_id, tuple(self._entities), self._inherit)


class PermissionHelper:
    """Stateless checks over permission levels and dashboard permissions."""

    @staticmethod
    def has_permission(user_level: PermissionLevel, required_level: PermissionLevel) -> bool:
        return (PERMISSION_ORDER.index(PermissionLevel(user_level))
                >= PERMISSION_ORDER.index(PermissionLevel(required_level)))

    @staticmethod
    def get_highest_level(levels) -> PermissionLevel:
        """Highest of `levels`; NONE when empty."""
        return max((PermissionLevel(lv) for lv in levels),
                   key=PERMISSION_ORDER.index, default=PermissionLevel.NONE)

    @staticmethod
    def is_expired(permission: DashboardPermission, now: Optional[datetime] = None) -> bool:
        if permission.expires_at is None:
            return False
        return _now_for(permission.expires_at, now) > permission.expires_at

    @staticmethod
    def validate(permission: DashboardPermission, now: Optional[datetime] = None) -> ValidationResult:
        errors = []
        if permission.sharing_mode is None:
            errors.append("Sharing mode is required")
        if permission.sharing_mode == SharingMode.SPECIFIC_USERS and not permission.entities:
            errors.append("At least one entity is required for specific user sharing")
        if (permission.public_link_enabled and permission.public_link_password
                and len(permission.public_link_password) < MIN_LINK_PASSWORD_LENGTH):
            errors.append("Public link password must be at least 6 characters")
        if (permission.expires_at is not None
                and permission.expires_at < _now_for(permission.expires_at, now)):
            errors.append("Expiration date cannot be in the past")
        return ValidationResult(valid=not errors, errors=errors)


def _now_for(moment: datetime, now: Optional[datetime]) -> datetime:
    # naive and aware datetimes do not compare
    if now is not None:
        return now
    return datetime.now(moment.tzinfo)

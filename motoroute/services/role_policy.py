"""
Role Policy - maps a role to its capability set
"""
from dataclasses import dataclass
from typing import Dict

from motoroute.models.user import UserRole


@dataclass(frozen=True)
class RoleCapabilities:
    can_create_trips: bool
    can_manage_users: bool
    can_access_admin_panel: bool


_CAPABILITIES: Dict[UserRole, RoleCapabilities] = {
    UserRole.EXPLORER: RoleCapabilities(
        can_create_trips=False, can_manage_users=False, can_access_admin_panel=False
    ),
    UserRole.RANGER: RoleCapabilities(
        can_create_trips=True, can_manage_users=False, can_access_admin_panel=False
    ),
    UserRole.SENTINEL: RoleCapabilities(
        can_create_trips=True, can_manage_users=True, can_access_admin_panel=True
    ),
}


def capabilities_for(role: UserRole) -> RoleCapabilities:
    return _CAPABILITIES[UserRole(role)]


def can_create_trips(role: UserRole) -> bool:
    return capabilities_for(role).can_create_trips


def can_manage_users(role: UserRole) -> bool:
    return capabilities_for(role).can_manage_users


def can_access_admin_panel(role: UserRole) -> bool:
    return capabilities_for(role).can_access_admin_panel

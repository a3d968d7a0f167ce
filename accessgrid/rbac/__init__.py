"""RBAC (Role-Based Access Control) module for accessgrid.

This module defines the permission model, the role table, and the
permission check.
"""

from .permissions import (
    Permission,
    Resource,
    Action,
    DataObjectAction,
    EvidenceAction,
    PERMISSION_DEFINITIONS,
)
from .rules import PermissionRule, RuleKind, GRANTED, DENIED, conditional
from .roles import Role, User, ROLE_DEFINITIONS
from .registry import (
    PermissionRegistry,
    DEFAULT_REGISTRY,
    get_registry,
    init_registry,
    load_registry_file,
    registry_from_dict,
)
from .checker import PermissionChecker, has_permission
from .errors import AccessGridError, InvalidPermissionError, RegistryConfigurationError

__all__ = [
    "Permission",
    "Resource",
    "Action",
    "DataObjectAction",
    "EvidenceAction",
    "PERMISSION_DEFINITIONS",
    "PermissionRule",
    "RuleKind",
    "GRANTED",
    "DENIED",
    "conditional",
    "Role",
    "User",
    "ROLE_DEFINITIONS",
    "PermissionRegistry",
    "DEFAULT_REGISTRY",
    "get_registry",
    "init_registry",
    "load_registry_file",
    "registry_from_dict",
    "PermissionChecker",
    "has_permission",
    "AccessGridError",
    "InvalidPermissionError",
    "RegistryConfigurationError",
]

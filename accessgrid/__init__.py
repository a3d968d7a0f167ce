"""accessgrid: static role -> resource -> action permission table."""

from .rbac import (
    DEFAULT_REGISTRY,
    DENIED,
    GRANTED,
    AccessGridError,
    DataObjectAction,
    EvidenceAction,
    InvalidPermissionError,
    Permission,
    PermissionChecker,
    PermissionRegistry,
    PermissionRule,
    RegistryConfigurationError,
    Resource,
    Role,
    RuleKind,
    User,
    conditional,
    get_registry,
    has_permission,
    init_registry,
    load_registry_file,
)

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_REGISTRY",
    "DENIED",
    "GRANTED",
    "AccessGridError",
    "DataObjectAction",
    "EvidenceAction",
    "InvalidPermissionError",
    "Permission",
    "PermissionChecker",
    "PermissionRegistry",
    "PermissionRule",
    "RegistryConfigurationError",
    "Resource",
    "Role",
    "RuleKind",
    "User",
    "conditional",
    "get_registry",
    "has_permission",
    "init_registry",
    "load_registry_file",
]

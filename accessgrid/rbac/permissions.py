"""Permission model for accessgrid.

Defines the protected resources and the actions each one supports.
Every resource owns its own action enum, so an action that belongs to one
resource cannot be paired with another.

Permission string format: "resource:action"
Examples:
  - data_objects:inventory
  - data_objects:metadata
  - evidence:create_data_firewall
"""

from enum import Enum
from typing import Dict, FrozenSet, List, NamedTuple, Type, Union

from .errors import InvalidPermissionError


class Resource(str, Enum):
    """Resources that can be protected by permissions."""

    DATA_OBJECTS = "data_objects"  # Catalogued data objects
    EVIDENCE = "evidence"          # Collected evidence and firewall rules


class DataObjectAction(str, Enum):
    """Actions on data objects."""

    INVENTORY = "inventory"
    EVIDENCE = "evidence"
    METADATA = "metadata"
    TABLE = "table"


class EvidenceAction(str, Enum):
    """Actions on evidence."""

    EVIDENCE = "evidence"
    CREATE_DATA_FIREWALL = "create_data_firewall"


Action = Union[DataObjectAction, EvidenceAction]


# Maps each resource to the enum holding its valid actions
RESOURCE_ACTIONS: Dict[Resource, Type[Enum]] = {
    Resource.DATA_OBJECTS: DataObjectAction,
    Resource.EVIDENCE: EvidenceAction,
}


# Permission matrix: each resource to its frozen set of actions
PERMISSION_MATRIX: Dict[Resource, FrozenSet[Enum]] = {
    resource: frozenset(action_enum)
    for resource, action_enum in RESOURCE_ACTIONS.items()
}


def coerce_resource(resource: Union[Resource, str]) -> Resource:
    """Return the Resource for an enum member or its string value.

    Raises:
        InvalidPermissionError: If the value names no resource
    """
    try:
        return Resource(resource)
    except ValueError:
        raise InvalidPermissionError(f"Unknown resource: {resource!r}") from None


def coerce_action(resource: Union[Resource, str], action: Union[Action, str]) -> Action:
    """Return the action member of ``resource`` for an enum member or string.

    Enum members must belong to the action enum of ``resource``, so
    ``DataObjectAction.EVIDENCE`` is rejected for ``Resource.EVIDENCE`` even
    though ``EvidenceAction.EVIDENCE`` shares its value. Plain strings are
    matched by value.

    Raises:
        InvalidPermissionError: If the resource or the pairing does not exist
    """
    resource = coerce_resource(resource)
    action_enum = RESOURCE_ACTIONS[resource]
    if isinstance(action, Enum):
        if not isinstance(action, action_enum):
            raise InvalidPermissionError(
                f"{type(action).__name__}.{action.name} is not defined "
                f"for resource {resource.value!r}"
            )
        return action
    value = action
    try:
        return action_enum(value)
    except ValueError:
        raise InvalidPermissionError(
            f"Action {value!r} is not defined for resource {resource.value!r}"
        ) from None


class Permission(NamedTuple):
    """A permission is a resource paired with one of its actions."""
    resource: Resource
    action: Action

    def __str__(self) -> str:
        return f"{self.resource.value}:{self.action.value}"

    @classmethod
    def of(cls, resource: Union[Resource, str], action: Union[Action, str]) -> "Permission":
        """Build a validated permission from enum members or string values."""
        resource = coerce_resource(resource)
        return cls(resource, coerce_action(resource, action))

    @classmethod
    def from_string(cls, perm_str: str) -> "Permission":
        """Parse a permission string like 'data_objects:metadata'."""
        parts = perm_str.split(":")
        if len(parts) != 2:
            raise InvalidPermissionError(f"Invalid permission format: {perm_str}")
        return cls.of(parts[0], parts[1])


def _generate_permission_definitions() -> Dict[str, Permission]:
    """Generate all valid permission combinations from the matrix."""
    permissions = {}
    for resource, action_enum in RESOURCE_ACTIONS.items():
        for action in action_enum:
            perm = Permission(resource, action)
            permissions[str(perm)] = perm
    return permissions


# All valid permissions as a dictionary: "resource:action" -> Permission
PERMISSION_DEFINITIONS = _generate_permission_definitions()


def is_valid_permission(perm_str: str) -> bool:
    """Check if a permission string is valid."""
    return perm_str in PERMISSION_DEFINITIONS


def get_actions_for_resource(resource: Union[Resource, str]) -> List[Action]:
    """Get the actions of a resource in declaration order."""
    return list(RESOURCE_ACTIONS[coerce_resource(resource)])


def get_permissions_for_resource(resource: Union[Resource, str]) -> List[str]:
    """Get all valid permission strings for a resource."""
    resource = coerce_resource(resource)
    return [str(Permission(resource, action)) for action in RESOURCE_ACTIONS[resource]]


def get_all_permissions() -> List[str]:
    """Get all valid permission strings."""
    return list(PERMISSION_DEFINITIONS.keys())

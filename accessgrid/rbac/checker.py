"""Permission checking for accessgrid.

``has_permission`` is the single decision function. A user is allowed an
action on a resource when at least one of their roles allows it. Checks
are fail-closed: an unknown role, an invalid resource/action pairing, a
missing rule or a failing predicate all resolve to a denial and are
logged, never raised.
"""

from enum import Enum
from typing import Any, Iterable, List, Literal, Optional, Union, overload

from ..common.logger import get_logger
from .errors import InvalidPermissionError
from .permissions import (
    RESOURCE_ACTIONS,
    Action,
    DataObjectAction,
    EvidenceAction,
    Permission,
    Resource,
    coerce_action,
    coerce_resource,
)
from .registry import PermissionRegistry, active_registry

logger = get_logger(__name__)


@overload
def has_permission(
    user: Any,
    resource: Literal[Resource.DATA_OBJECTS],
    action: DataObjectAction,
    *,
    registry: Optional[PermissionRegistry] = None,
) -> bool: ...


@overload
def has_permission(
    user: Any,
    resource: Literal[Resource.EVIDENCE],
    action: EvidenceAction,
    *,
    registry: Optional[PermissionRegistry] = None,
) -> bool: ...


def has_permission(user, resource, action, *, registry=None):
    """
    Check if a user may perform an action on a resource.

    The overloads tie each resource to its own action enum so a type
    checker rejects mismatched pairings. At runtime the string values
    ("data_objects", "metadata") are accepted as well.

    Args:
        user: User (or any object with a ``roles`` collection)
        resource: Resource being accessed
        action: Action of that resource
        registry: Registry to evaluate against; the process-wide one by default

    Returns:
        True if any of the user's roles grants the action, False otherwise
    """
    try:
        resource = coerce_resource(resource)
        action = coerce_action(resource, action)
    except InvalidPermissionError as e:
        logger.warning(f"Denying permission check: {e}")
        return False

    if registry is None:
        registry = active_registry()
        if registry is None:
            logger.error(
                "Permission registry is not initialised, denying; "
                "call init_registry() at startup"
            )
            return False

    roles = getattr(user, "roles", None) or ()
    try:
        roles = list(roles)
    except TypeError:
        logger.warning(f"User roles are not iterable ({type(roles).__name__}), denying")
        return False

    for role in roles:
        rule = registry.get_rule(role, resource, action)
        if rule is None:
            # Unreachable for a validated registry unless the role is unknown
            logger.warning(
                f"No rule for role {role!r} on {resource.value}:{action.value}, denying"
            )
            continue
        if rule.resolve(user):
            return True
    return False


class PermissionChecker:
    """Answers permission questions for one user."""

    def __init__(self, user: Any, registry: Optional[PermissionRegistry] = None):
        """
        Initialize with the user to check.

        Args:
            user: User whose roles are evaluated
            registry: Registry to evaluate against; the process-wide one by default,
                read at each check
        """
        self.user = user
        self.registry = registry

    def has_permission(self, resource: Union[Resource, str], action: Union[Action, str]) -> bool:
        """Check if the user can perform action on resource."""
        return has_permission(self.user, resource, action, registry=self.registry)

    def check(self, permission: Union[str, Permission]) -> bool:
        """Check a Permission or a "resource:action" string."""
        if not isinstance(permission, Permission):
            try:
                permission = Permission.from_string(permission)
            except (InvalidPermissionError, AttributeError) as e:
                logger.warning(f"Denying unparseable permission {permission!r}: {e}")
                return False
        return self.has_permission(permission.resource, permission.action)

    def has_any_permission(self, permissions: Iterable[Union[str, Permission]]) -> bool:
        """Check if the user has any of the given permissions."""
        return any(self.check(p) for p in permissions)

    def has_all_permissions(self, permissions: Iterable[Union[str, Permission]]) -> bool:
        """Check if the user has all of the given permissions."""
        return all(self.check(p) for p in permissions)

    def get_allowed_actions(self, resource: Union[Resource, str]) -> List[Action]:
        """Get the actions the user may perform on a resource."""
        resource = coerce_resource(resource)
        return [
            action for action in RESOURCE_ACTIONS[resource]
            if self.has_permission(resource, action)
        ]

    def get_accessible_resources(self, action: Union[Action, str]) -> List[Resource]:
        """Get resources on which an action with this name is allowed.

        Resources that do not define the action are skipped.
        """
        value = action.value if isinstance(action, Enum) else action
        accessible = []
        for resource, action_enum in RESOURCE_ACTIONS.items():
            if value in {a.value for a in action_enum} and self.has_permission(resource, value):
                accessible.append(resource)
        return accessible

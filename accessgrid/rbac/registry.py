"""Permission registry for accessgrid.

The registry is the total table role -> resource -> action -> rule.
It is validated when it is built: every Role x Resource x Action triple
must carry a PermissionRule, and no unknown key may appear. A failed
build raises RegistryConfigurationError listing every problem found.

Once built the registry is read-only and may be shared between threads
without locking.
"""

import threading
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional, Tuple

from ..common.config import get_settings, load_config
from ..common.logger import get_logger
from .errors import InvalidPermissionError, RegistryConfigurationError
from .permissions import RESOURCE_ACTIONS, Resource, coerce_action
from .roles import ROLE_DEFINITIONS, Role
from .rules import PermissionRule, conditional, rule_from_bool

logger = get_logger(__name__)


RuleTable = Mapping[Role, Mapping[Resource, Mapping[Enum, PermissionRule]]]


def _normalize(definitions: Mapping[Any, Any]) -> Tuple[Dict, List[str]]:
    """Coerce declaration keys to enums and collect every problem."""
    problems: List[str] = []
    table: Dict[Role, Dict[Resource, Dict[Enum, PermissionRule]]] = {}

    if not isinstance(definitions, Mapping):
        return table, [f"Role table must be a mapping, got {type(definitions).__name__}"]

    for role_key, resources in definitions.items():
        try:
            role = Role(role_key)
        except ValueError:
            problems.append(f"Unknown role: {role_key!r}")
            continue
        if not isinstance(resources, Mapping):
            problems.append(f"{role.value}: definition must be a mapping")
            continue

        role_table = table.setdefault(role, {})
        for resource_key, actions in resources.items():
            try:
                resource = Resource(resource_key)
            except ValueError:
                problems.append(f"{role.value}: unknown resource {resource_key!r}")
                continue
            if not isinstance(actions, Mapping):
                problems.append(f"{role.value} -> {resource.value}: actions must be a mapping")
                continue

            resource_table = role_table.setdefault(resource, {})
            for action_key, rule in actions.items():
                try:
                    action = coerce_action(resource, action_key)
                except InvalidPermissionError:
                    problems.append(
                        f"{role.value} -> {resource.value}: unknown action {action_key!r}"
                    )
                    continue
                if not isinstance(rule, PermissionRule):
                    problems.append(
                        f"{role.value} -> {resource.value}:{action.value}: "
                        f"expected a PermissionRule, got {type(rule).__name__}"
                    )
                    continue
                resource_table[action] = rule

    # Totality: every role x resource x action must be declared
    for role in Role:
        suffix = "" if role in table else " (role not declared)"
        role_table = table.get(role, {})
        for resource, action_enum in RESOURCE_ACTIONS.items():
            resource_table = role_table.get(resource, {})
            for action in action_enum:
                if action not in resource_table:
                    problems.append(
                        f"{role.value} -> {resource.value}:{action.value}: missing rule{suffix}"
                    )

    return table, problems


def validate_definitions(definitions: Mapping[Any, Any]) -> List[str]:
    """Return the list of problems in a role table, empty if it is total."""
    return _normalize(definitions)[1]


class PermissionRegistry:
    """Immutable, validated table of role definitions."""

    def __init__(self, definitions: Mapping[Any, Any]):
        """
        Build and validate the registry.

        Args:
            definitions: Mapping of role -> resource -> action -> PermissionRule.
                Keys may be enum members or their string values.

        Raises:
            RegistryConfigurationError: If any triple is missing or any key is unknown
        """
        table, problems = _normalize(definitions)
        if problems:
            raise RegistryConfigurationError(problems)

        self._table: RuleTable = MappingProxyType({
            role: MappingProxyType({
                resource: MappingProxyType(dict(actions))
                for resource, actions in resources.items()
            })
            for role, resources in table.items()
        })
        logger.debug(
            f"Built permission registry: {len(self._table)} roles, "
            f"{sum(1 for _ in self.iter_rules())} rules"
        )

    @property
    def roles(self) -> List[Role]:
        return list(self._table.keys())

    def __contains__(self, role: Any) -> bool:
        try:
            return role in self._table
        except TypeError:
            return False

    def __len__(self) -> int:
        return len(self._table)

    def get_definition(self, role: Any) -> Optional[Mapping[Resource, Mapping[Enum, PermissionRule]]]:
        """Get the read-only definition of a role, or None if it is unknown."""
        try:
            return self._table.get(role)
        except TypeError:
            return None

    def get_rule(self, role: Any, resource: Any, action: Any) -> Optional[PermissionRule]:
        """Look up one rule. Returns None instead of raising on any miss."""
        try:
            return self._table.get(role, {}).get(resource, {}).get(action)
        except TypeError:
            return None

    def iter_rules(self) -> Iterator[Tuple[Role, Resource, Enum, PermissionRule]]:
        """Iterate over every (role, resource, action, rule) entry."""
        for role, resources in self._table.items():
            for resource, actions in resources.items():
                for action, rule in actions.items():
                    yield role, resource, action, rule

    def __repr__(self) -> str:
        return f"PermissionRegistry(roles={[r.value for r in self._table]})"


def registry_from_dict(
    data: Mapping[str, Any],
    predicates: Optional[Mapping[str, Callable[[Any], bool]]] = None,
) -> PermissionRegistry:
    """Build a registry from a plain declaration such as a parsed YAML file.

    The declaration holds a ``roles`` mapping of role -> resource -> action
    -> value, where the value is ``true`` (granted), ``false`` (denied) or
    the name of an entry in ``predicates`` (conditional).

    Args:
        data: Parsed declaration
        predicates: Named predicates available to conditional rules

    Returns:
        Validated PermissionRegistry

    Raises:
        RegistryConfigurationError: If the declaration is malformed or incomplete
    """
    predicates = predicates or {}
    roles = data.get("roles") if isinstance(data, Mapping) else None
    if not isinstance(roles, Mapping):
        raise RegistryConfigurationError(["Registry declaration must contain a 'roles' mapping"])

    problems: List[str] = []
    definitions: Dict[Any, Any] = {}
    for role_key, resources in roles.items():
        if not isinstance(resources, Mapping):
            definitions[role_key] = resources
            continue
        definitions[role_key] = {}
        for resource_key, actions in resources.items():
            if not isinstance(actions, Mapping):
                definitions[role_key][resource_key] = actions
                continue
            converted = definitions[role_key].setdefault(resource_key, {})
            for action_key, value in actions.items():
                where = f"{role_key} -> {resource_key}:{action_key}"
                if isinstance(value, bool):
                    converted[action_key] = rule_from_bool(value)
                elif isinstance(value, str):
                    if value not in predicates:
                        problems.append(f"{where}: unknown predicate {value!r}")
                        continue
                    if not callable(predicates[value]):
                        problems.append(f"{where}: predicate {value!r} is not callable")
                        continue
                    converted[action_key] = conditional(predicates[value], name=value)
                else:
                    problems.append(
                        f"{where}: expected true, false or a predicate name, "
                        f"got {type(value).__name__}"
                    )

    if problems:
        # Report value errors together with whatever else is wrong
        raise RegistryConfigurationError(problems + validate_definitions(definitions))
    return PermissionRegistry(definitions)


def load_registry_file(
    path: str,
    predicates: Optional[Mapping[str, Callable[[Any], bool]]] = None,
) -> PermissionRegistry:
    """Load and validate a registry declared in a YAML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        yaml.YAMLError: If the file is invalid YAML
        RegistryConfigurationError: If the declaration is malformed or incomplete
    """
    registry = registry_from_dict(load_config(path), predicates)
    logger.info(f"Loaded permission registry from {path}")
    return registry


# Built-in registry. Building it here makes an incomplete table fail at import.
DEFAULT_REGISTRY = PermissionRegistry(ROLE_DEFINITIONS)

_registry_lock = threading.Lock()

# Without a configured file the built-in table is active from import.
# A configured file is loaded by init_registry() at startup.
_registry: Optional[PermissionRegistry] = (
    None if get_settings().registry_file else DEFAULT_REGISTRY
)


def init_registry(
    predicates: Optional[Mapping[str, Callable[[Any], bool]]] = None,
) -> PermissionRegistry:
    """Resolve the process-wide registry. Call once at startup, before any check.

    Uses the file named by ``Settings.registry_file`` when set, otherwise
    DEFAULT_REGISTRY. Once resolved the registry is never reloaded; later
    calls return it unchanged.

    Args:
        predicates: Named predicates available to a configured registry file

    Raises:
        FileNotFoundError: If the configured file doesn't exist
        yaml.YAMLError: If the configured file is invalid YAML
        RegistryConfigurationError: If the configured declaration is malformed or incomplete
    """
    global _registry
    with _registry_lock:
        if _registry is None:
            registry_file = get_settings().registry_file
            if registry_file:
                _registry = load_registry_file(registry_file, predicates)
            else:
                _registry = DEFAULT_REGISTRY
        return _registry


def get_registry() -> PermissionRegistry:
    """Get the process-wide registry, initialising it if startup has not."""
    if _registry is None:
        return init_registry()
    return _registry


def active_registry() -> Optional[PermissionRegistry]:
    """Get the resolved process-wide registry without loading anything.

    Returns None while a configured registry is still uninitialised.
    """
    return _registry

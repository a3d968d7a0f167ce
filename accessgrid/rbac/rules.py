"""Permission rules.

A rule decides one (role, resource, action) cell of the registry:

- GRANTED: always allow
- DENIED: always deny
- CONDITIONAL: ask a predicate about the requesting user

Predicates must be pure: they may read the user's fields but must not
mutate state or perform I/O. They are called without any locking.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

from ..common.logger import get_logger

logger = get_logger(__name__)


UserPredicate = Callable[[Any], bool]


class RuleKind(str, Enum):
    """Tag of a permission rule."""

    GRANTED = "granted"
    DENIED = "denied"
    CONDITIONAL = "conditional"


@dataclass(frozen=True)
class PermissionRule:
    """A tagged permission rule. Only CONDITIONAL rules carry a predicate."""

    kind: RuleKind
    predicate: Optional[UserPredicate] = None
    name: Optional[str] = None

    def __post_init__(self):
        if self.kind is RuleKind.CONDITIONAL and self.predicate is None:
            raise ValueError("Conditional rules require a predicate")
        if self.kind is not RuleKind.CONDITIONAL and self.predicate is not None:
            raise ValueError(f"{self.kind.value} rules take no predicate")

    def resolve(self, user: Any) -> bool:
        """Resolve the rule for ``user``. Never raises."""
        if self.kind is RuleKind.GRANTED:
            return True
        if self.kind is RuleKind.DENIED:
            return False
        if self.kind is RuleKind.CONDITIONAL:
            try:
                return self.predicate(user) is True
            except Exception as e:
                logger.warning(f"Permission predicate {self.label} failed, denying: {e}")
                return False
        return False

    @property
    def label(self) -> str:
        if self.kind is RuleKind.CONDITIONAL:
            return self.name or getattr(self.predicate, "__name__", "<predicate>")
        return self.kind.value

    def __repr__(self) -> str:
        if self.kind is RuleKind.CONDITIONAL:
            return f"PermissionRule(conditional: {self.label})"
        return f"PermissionRule({self.kind.value})"


GRANTED = PermissionRule(RuleKind.GRANTED)
DENIED = PermissionRule(RuleKind.DENIED)


def conditional(predicate: UserPredicate, name: Optional[str] = None) -> PermissionRule:
    """Build a rule that asks ``predicate(user)`` at query time."""
    return PermissionRule(RuleKind.CONDITIONAL, predicate=predicate, name=name)


def rule_from_bool(allowed: bool) -> PermissionRule:
    """Map a plain boolean to GRANTED or DENIED."""
    return GRANTED if allowed else DENIED

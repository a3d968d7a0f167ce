"""Role definitions for accessgrid.

Defines the 3 built-in roles and the rule each one applies to every
(resource, action) pair:
1. Admin - Full access to data objects and evidence
2. Read-only user - Data object inventory only, plus evidence
3. Read-only with data objects - Read-only user widened to all data object actions
"""

from enum import Enum
from typing import Dict, List, Mapping

from pydantic import BaseModel, ConfigDict, Field

from .permissions import DataObjectAction, EvidenceAction, Resource
from .rules import DENIED, GRANTED, PermissionRule


class Role(str, Enum):
    """Roles that can be assigned to a user."""

    ADMIN = "admin"
    READ_ONLY_USER = "readOnlyUser"
    READ_ONLY_WITH_DATA_OBJECT = "read OnlyWithDataObject"


class User(BaseModel):
    """The requesting user, as supplied by the authentication layer."""

    model_config = ConfigDict(frozen=True)

    id: str
    roles: List[Role] = Field(default_factory=list)


RoleDefinition = Mapping[Resource, Mapping[Enum, PermissionRule]]


# Admin: everything
ADMIN_DEFINITION: RoleDefinition = {
    Resource.DATA_OBJECTS: {
        DataObjectAction.INVENTORY: GRANTED,
        DataObjectAction.EVIDENCE: GRANTED,
        DataObjectAction.METADATA: GRANTED,
        DataObjectAction.TABLE: GRANTED,
    },
    Resource.EVIDENCE: {
        EvidenceAction.EVIDENCE: GRANTED,
        EvidenceAction.CREATE_DATA_FIREWALL: GRANTED,
    },
}

# Read-only user: data object inventory only
READ_ONLY_USER_DEFINITION: RoleDefinition = {
    Resource.DATA_OBJECTS: {
        DataObjectAction.INVENTORY: GRANTED,
        DataObjectAction.EVIDENCE: DENIED,
        DataObjectAction.METADATA: DENIED,
        DataObjectAction.TABLE: DENIED,
    },
    Resource.EVIDENCE: {
        EvidenceAction.EVIDENCE: GRANTED,
        EvidenceAction.CREATE_DATA_FIREWALL: GRANTED,
    },
}

# Read-only with data objects: full data object access
READ_ONLY_WITH_DATA_OBJECT_DEFINITION: RoleDefinition = {
    Resource.DATA_OBJECTS: {
        DataObjectAction.INVENTORY: GRANTED,
        DataObjectAction.EVIDENCE: GRANTED,
        DataObjectAction.METADATA: GRANTED,
        DataObjectAction.TABLE: GRANTED,
    },
    Resource.EVIDENCE: {
        EvidenceAction.EVIDENCE: GRANTED,
        EvidenceAction.CREATE_DATA_FIREWALL: GRANTED,
    },
}


# Built-in role table, validated into DEFAULT_REGISTRY at import
ROLE_DEFINITIONS: Dict[Role, RoleDefinition] = {
    Role.ADMIN: ADMIN_DEFINITION,
    Role.READ_ONLY_USER: READ_ONLY_USER_DEFINITION,
    Role.READ_ONLY_WITH_DATA_OBJECT: READ_ONLY_WITH_DATA_OBJECT_DEFINITION,
}

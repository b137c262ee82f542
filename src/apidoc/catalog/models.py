"""Catalog record models.

Manifesto:
    Modules and endpoints are persisted as opaque keyed JSON documents.
    The dataclasses here are the typed view used by the store, the tree
    mutator, the sync engine and the operation layer.

Serialized field names follow the api-doc JSON record format
(``moduleId``, ``apis``, ``subModules``, ...) so an existing data
directory loads without migration.

Tags:
    apidoc, models, dataclasses, catalog

Doc-Types:
    api-reference, data-model
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from apidoc.core.errors import ValidationError

PATH_SEPARATOR = "/"


@dataclass
class EntityRef:
    """Denormalized ``{id, name}`` reference stored on the owning side."""

    id: str
    name: str


# ---------------------------------------------------------------------------
# modules
# ---------------------------------------------------------------------------


@dataclass
class Module:
    """A hierarchical container of endpoints and child modules.

    ``parent_id`` of ``None`` means the module is currently a root.
    """

    id: str
    name: str
    description: str = ""
    endpoints: list[EntityRef] = field(default_factory=list)
    children: list[EntityRef] = field(default_factory=list)
    parent_id: str | None = None
    created_at: str = ""
    updated_at: str = ""

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def ref(self) -> EntityRef:
        return EntityRef(id=self.id, name=self.name)

    def find_child(self, child_id: str) -> int | None:
        """Index of the child entry for ``child_id`` in stored order."""
        for i, child in enumerate(self.children):
            if child.id == child_id:
                return i
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "moduleId": self.id,
            "moduleName": self.name,
            "description": self.description,
            "apis": [{"apiId": e.id, "apiName": e.name} for e in self.endpoints],
            "subModules": [{"moduleId": c.id, "moduleName": c.name} for c in self.children],
            "parentModuleId": self.parent_id,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Module:
        return cls(
            id=data["moduleId"],
            name=data["moduleName"],
            description=data.get("description") or "",
            endpoints=[EntityRef(id=a["apiId"], name=a["apiName"]) for a in data.get("apis") or []],
            children=[
                EntityRef(id=c["moduleId"], name=c["moduleName"])
                for c in data.get("subModules") or []
            ],
            parent_id=data.get("parentModuleId"),
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )


# ---------------------------------------------------------------------------
# endpoints
# ---------------------------------------------------------------------------


@dataclass
class Endpoint:
    """A leaf documentation record owned by exactly one module."""

    id: str
    module_id: str
    name: str
    declaration: str = ""
    description: str = ""
    created_at: str = ""
    updated_at: str = ""

    def ref(self) -> EntityRef:
        return EntityRef(id=self.id, name=self.name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "apiId": self.id,
            "moduleId": self.module_id,
            "apiName": self.name,
            "functionDeclaration": self.declaration,
            "description": self.description,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Endpoint:
        return cls(
            id=data["apiId"],
            module_id=data["moduleId"],
            name=data["apiName"],
            declaration=data.get("functionDeclaration") or "",
            description=data.get("description") or "",
            created_at=data.get("createdAt", ""),
            updated_at=data.get("updatedAt", ""),
        )


# ---------------------------------------------------------------------------
# root index
# ---------------------------------------------------------------------------


def index_to_dict(refs: list[EntityRef]) -> dict[str, Any]:
    return {"modules": [{"moduleId": r.id, "moduleName": r.name} for r in refs]}


def index_from_dict(data: dict[str, Any] | None) -> list[EntityRef]:
    if not data:
        return []
    return [EntityRef(id=m["moduleId"], name=m["moduleName"]) for m in data.get("modules", [])]


def validate_name(name: Any, *, field_name: str = "name") -> str:
    """Reject names that cannot appear as a path segment."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError(f"{field_name} must be a non-empty string", field=field_name, value=name)
    if PATH_SEPARATOR in name:
        raise ValidationError(
            f"{field_name} must not contain '{PATH_SEPARATOR}'", field=field_name, value=name
        )
    return name

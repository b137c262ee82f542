"""
Typed response objects for operations.

Each dataclass represents the *output* of a single operation beyond the
generic :class:`OperationResult` envelope. Responses carry only domain
data, no CLI formatting.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from apidoc.catalog.models import EntityRef, Endpoint, Module
from apidoc.sync.engine import SyncReport


@dataclass(frozen=True, slots=True)
class RefSummary:
    """``{id, name}`` pair for list output."""

    id: str
    name: str

    @classmethod
    def from_ref(cls, ref: EntityRef) -> RefSummary:
        return cls(id=ref.id, name=ref.name)


@dataclass(frozen=True, slots=True)
class Created:
    """Result payload for create operations."""

    id: str
    path: str | None = None
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class ModuleDetail:
    """Result payload for :func:`apidoc.ops.modules.get_module_details`."""

    id: str
    name: str
    path: str
    description: str = ""
    parent_id: str | None = None
    endpoints: list[RefSummary] = field(default_factory=list)
    children: list[RefSummary] = field(default_factory=list)
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_module(cls, module: Module, path: str) -> ModuleDetail:
        return cls(
            id=module.id,
            name=module.name,
            path=path,
            description=module.description,
            parent_id=module.parent_id,
            endpoints=[RefSummary.from_ref(r) for r in module.endpoints],
            children=[RefSummary.from_ref(r) for r in module.children],
            created_at=module.created_at,
            updated_at=module.updated_at,
        )


@dataclass(frozen=True, slots=True)
class EndpointDetail:
    """Result payload for :func:`apidoc.ops.endpoints.get_endpoint_details`."""

    id: str
    module_id: str
    module_path: str
    name: str
    declaration: str = ""
    description: str = ""
    created_at: str = ""
    updated_at: str = ""

    @classmethod
    def from_endpoint(cls, endpoint: Endpoint, module_path: str) -> EndpointDetail:
        return cls(
            id=endpoint.id,
            module_id=endpoint.module_id,
            module_path=module_path,
            name=endpoint.name,
            declaration=endpoint.declaration,
            description=endpoint.description,
            created_at=endpoint.created_at,
            updated_at=endpoint.updated_at,
        )


@dataclass(frozen=True, slots=True)
class SyncSummary:
    """Result payload for the sync operations."""

    documents: list[str]
    modules: int = 0
    endpoints: int = 0

    @classmethod
    def from_report(cls, report: SyncReport) -> SyncSummary:
        return cls(
            documents=list(report.documents),
            modules=report.modules,
            endpoints=report.endpoints,
        )


@dataclass(frozen=True, slots=True)
class Updated:
    """Result payload for update / move / detach operations."""

    id: str
    changed: list[str] = field(default_factory=list)
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class SampleLoaded:
    """Result payload for :func:`apidoc.ops.samples.load_sample_data`."""

    modules: list[RefSummary] = field(default_factory=list)
    endpoints: int = 0
    documents: list[str] = field(default_factory=list)
    dry_run: bool = False

"""
Typed request objects for operations.

Each dataclass represents the *input* contract for a single operation
function. Requests carry only transport-agnostic data: no Typer params,
no raw tool payloads.
"""

from __future__ import annotations

from dataclasses import dataclass

# ------------------------------------------------------------------ #
# Module operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class AddModuleRequest:
    """Request for :func:`apidoc.ops.modules.add_module`.

    Attributes:
        name: Module name; becomes one path segment.
        description: Free-form description.
        parent_path: Slash-delimited path of the parent. ``None`` creates a
            root module.
    """

    name: str
    description: str = ""
    parent_path: str | None = None


@dataclass(frozen=True, slots=True)
class ModuleSelector:
    """Addresses a module by id or by path; the id wins when both are set."""

    module_id: str | None = None
    path: str | None = None


@dataclass(frozen=True, slots=True)
class UpdateModuleRequest:
    """Request for :func:`apidoc.ops.modules.update_module`.

    Fields left as ``None`` are not changed.
    """

    target: ModuleSelector
    name: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class MoveModuleRequest:
    """Request for :func:`apidoc.ops.modules.move_module`."""

    module_id: str
    new_parent_id: str


@dataclass(frozen=True, slots=True)
class DetachModuleRequest:
    """Request for :func:`apidoc.ops.modules.detach_module`."""

    parent_id: str
    module_id: str


# ------------------------------------------------------------------ #
# Endpoint operations
# ------------------------------------------------------------------ #


@dataclass(frozen=True, slots=True)
class AddEndpointRequest:
    """Request for :func:`apidoc.ops.endpoints.add_endpoint`."""

    module_id: str
    name: str
    declaration: str = ""
    description: str = ""


@dataclass(frozen=True, slots=True)
class UpdateEndpointRequest:
    """Request for :func:`apidoc.ops.endpoints.update_endpoint`.

    Fields left as ``None`` are not changed.
    """

    endpoint_id: str
    name: str | None = None
    declaration: str | None = None
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ListEndpointsRequest:
    """Request for :func:`apidoc.ops.endpoints.list_endpoints`."""

    module_id: str
    name: str | None = None

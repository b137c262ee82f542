"""
Operation layer.

Transport-agnostic functions that the CLI (and any other front end) call.
Each takes an :class:`OperationContext` and returns an
:class:`OperationResult`; catalog exceptions never escape.
"""

from apidoc.ops.context import OperationContext, operation
from apidoc.ops.endpoints import add_endpoint, get_endpoint_details, list_endpoints, update_endpoint
from apidoc.ops.modules import (
    add_module,
    detach_module,
    get_module_details,
    list_modules,
    move_module,
    rebuild_root_index,
    update_module,
)
from apidoc.ops.result import OperationError, OperationResult
from apidoc.ops.samples import load_sample_data
from apidoc.ops.sync import sync_all, sync_endpoint, sync_module

__all__ = [
    "OperationContext",
    "OperationError",
    "OperationResult",
    "add_endpoint",
    "add_module",
    "detach_module",
    "get_endpoint_details",
    "get_module_details",
    "list_endpoints",
    "list_modules",
    "load_sample_data",
    "move_module",
    "operation",
    "rebuild_root_index",
    "sync_all",
    "sync_endpoint",
    "sync_module",
    "update_endpoint",
    "update_module",
]

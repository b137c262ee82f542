"""
apidoc - hierarchical module/endpoint catalog with a synchronized markdown tree.

- apidoc.core: errors, logging, settings, ids
- apidoc.catalog: entity store, path resolver, tree mutator
- apidoc.sync: document regeneration engine
- apidoc.docs: markdown renderer, document layout and sinks
- apidoc.ops: operation layer returning result envelopes
- apidoc.cli: command-line interface
"""

__version__ = "0.1.0"

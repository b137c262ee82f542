"""Markdown document rendering, layout and sinks."""

from apidoc.docs.renderer import DocumentRenderer, MarkdownRenderer
from apidoc.docs.sink import DirectorySink, DocumentSink, MemorySink

__all__ = [
    "DirectorySink",
    "DocumentRenderer",
    "DocumentSink",
    "MarkdownRenderer",
    "MemorySink",
]

"""Domain primitives for error documentation checks."""

from __future__ import annotations

from .document import ErrorDocument, sort_corpus
from .events import Diagnostic, Problem
from .value_objects import ErrorDocsConfig, ErrorDocsConfigError, LinterConfig

__all__ = [
    "Diagnostic",
    "ErrorDocsConfig",
    "ErrorDocsConfigError",
    "ErrorDocument",
    "LinterConfig",
    "Problem",
    "sort_corpus",
]

"""Application services for checking and rendering an error documentation corpus."""

from .errors import CorpusEmptyError, CorpusError, CorpusValidationError
from .loader import CorpusLoader
from .renderer import DocumentRenderer
from .service import CorpusReport, CorpusService
from .validator import CorpusValidator, lint_sample

__all__ = [
    "CorpusEmptyError",
    "CorpusError",
    "CorpusLoader",
    "CorpusReport",
    "CorpusService",
    "CorpusValidationError",
    "CorpusValidator",
    "DocumentRenderer",
    "lint_sample",
]

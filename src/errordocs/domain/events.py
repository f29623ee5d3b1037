"""Records produced while cross-checking documentation with the linter."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Optional

from .constants import remediation_for


@dataclass(frozen=True)
class Diagnostic:
    """A single issue reported by the linting engine."""

    code: str
    message: str = ""
    severity: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None


@dataclass(frozen=True)
class Problem:
    """Documentation defect found while validating one page."""

    file_path: Path
    code: str
    message: str

    @property
    def remediation(self) -> Optional[str]:
        return remediation_for(self.code)

    def as_dict(self) -> dict:
        payload = asdict(self)
        payload["file_path"] = str(self.file_path)
        payload["remediation"] = self.remediation
        return payload

    def __str__(self) -> str:
        return f"{self.file_path}: error: {self.message}"

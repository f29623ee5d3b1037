"""Value objects for errordocs configuration."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Tuple

from .constants import (
    DEFAULT_DOCS_DIR,
    DEFAULT_LINTER_COMMAND,
    DEFAULT_LINTER_TIMEOUT,
    remediation_for,
)

DEFAULT_VERSION = 1
ALLOWED_KEYS = {"version", "docs_dir", "linter", "known_codes_file"}
ALLOWED_LINTER_KEYS = {"command", "timeout"}


class ErrorDocsConfigError(ValueError):
    """Raised when errordocs configuration is invalid."""

    def __init__(self, message: str, *, code: str = "ERRDOCS_INVALID_CONFIG", remediation: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.remediation = remediation if remediation is not None else remediation_for(code)


@dataclass(frozen=True)
class LinterConfig:
    """How to reach the linting engine."""

    command: Tuple[str, ...] = DEFAULT_LINTER_COMMAND
    timeout: float = DEFAULT_LINTER_TIMEOUT


@dataclass(frozen=True)
class ErrorDocsConfig:
    """Project-level configuration for checking and rendering a corpus."""

    version: int
    docs_dir: Path
    linter: LinterConfig
    known_codes_file: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, object], *, config_path: Path) -> "ErrorDocsConfig":
        """Build config from a raw mapping, validating invariants."""

        if not isinstance(data, Mapping):
            raise ErrorDocsConfigError(f"Configuration in {config_path} must be a mapping")
        unknown = set(data) - ALLOWED_KEYS
        if unknown:
            raise ErrorDocsConfigError(f"Unknown keys {sorted(unknown)} in {config_path}")

        version = int(data.get("version", DEFAULT_VERSION))
        if version != DEFAULT_VERSION:
            raise ErrorDocsConfigError(f"Unsupported errordocs config version {version} in {config_path}")

        docs_dir = data.get("docs_dir", DEFAULT_DOCS_DIR)
        if not isinstance(docs_dir, str) or not docs_dir.strip():
            raise ErrorDocsConfigError("docs_dir must be a non-empty string")

        known_codes = data.get("known_codes_file")
        if known_codes is not None and (not isinstance(known_codes, str) or not known_codes.strip()):
            raise ErrorDocsConfigError("known_codes_file must be a non-empty string")

        return cls(
            version=version,
            docs_dir=Path(docs_dir),
            linter=_parse_linter(data.get("linter", {}), config_path),
            known_codes_file=Path(known_codes) if known_codes else None,
        )

    @classmethod
    def default(cls, docs_dir: str | Path = DEFAULT_DOCS_DIR) -> "ErrorDocsConfig":
        return cls(version=DEFAULT_VERSION, docs_dir=Path(docs_dir), linter=LinterConfig())

    def absolute_docs_dir(self, project_root: Path) -> Path:
        return (project_root / self.docs_dir).resolve()

    def absolute_known_codes_file(self, project_root: Path) -> Optional[Path]:
        if self.known_codes_file is None:
            return None
        return (project_root / self.known_codes_file).resolve()


def _parse_linter(raw: object, config_path: Path) -> LinterConfig:
    if not isinstance(raw, Mapping):
        raise ErrorDocsConfigError(f"'linter' in {config_path} must be a mapping")
    unknown = set(raw) - ALLOWED_LINTER_KEYS
    if unknown:
        raise ErrorDocsConfigError(f"Unknown linter keys {sorted(unknown)} in {config_path}")

    command = raw.get("command", list(DEFAULT_LINTER_COMMAND))
    if isinstance(command, str):
        command = [command]
    if not isinstance(command, list) or not command or not all(isinstance(part, str) and part for part in command):
        raise ErrorDocsConfigError("linter.command must be a non-empty list of strings")

    timeout = raw.get("timeout", DEFAULT_LINTER_TIMEOUT)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ErrorDocsConfigError("linter.timeout must be a positive number of seconds")

    return LinterConfig(command=tuple(command), timeout=float(timeout))

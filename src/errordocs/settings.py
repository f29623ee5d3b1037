"""Runtime settings for the errordocs CLI."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from errordocs import __version__


@dataclass(frozen=True)
class RuntimeSettings:
    home_dir: Path
    log_dir: Path
    cli_version: str = __version__

    @property
    def telemetry_file(self) -> Path:
        return self.log_dir / "telemetry.jsonl"


def _default_home_dir() -> Path:
    override = os.environ.get("ERRORDOCS_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".errordocs"


def load_settings() -> RuntimeSettings:
    base = _default_home_dir()
    return RuntimeSettings(home_dir=base, log_dir=base / "logs")


SETTINGS = load_settings()

"""Loading errordocs.yaml and related project inputs."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

import jsonschema
import yaml

from errordocs.domain.value_objects import ErrorDocsConfig, ErrorDocsConfigError
from errordocs.resources import load_schema

DEFAULT_CONFIG_RELATIVE = Path("errordocs.yaml")
CONFIG_SCHEMA_RESOURCE = "config.schema.json"

_CONFIG_CACHE: Dict[Path, tuple[int, int, ErrorDocsConfig]] = {}


def load_config(project_root: Path, path: Path | None = None) -> Tuple[ErrorDocsConfig, Path]:
    """Load configuration from disk, falling back to defaults when absent."""

    config_path = (path or (project_root / DEFAULT_CONFIG_RELATIVE)).resolve()
    if not config_path.exists():
        if path is not None:
            raise ErrorDocsConfigError(f"Configuration file {config_path} does not exist")
        return ErrorDocsConfig.default(), config_path

    stat = config_path.stat()
    cached = _CONFIG_CACHE.get(config_path)
    if cached and cached[0] == stat.st_mtime_ns and cached[1] == stat.st_size:
        return cached[2], config_path

    try:
        raw = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ErrorDocsConfigError(f"Invalid YAML in {config_path}: {exc}") from exc
    validate_raw_config(raw, config_path)
    config = ErrorDocsConfig.from_dict(raw, config_path=config_path)
    _CONFIG_CACHE[config_path] = (stat.st_mtime_ns, stat.st_size, config)
    return config, config_path


def validate_raw_config(raw: object, config_path: Path) -> None:
    """Raise ErrorDocsConfigError listing every schema violation."""

    validator = jsonschema.Draft202012Validator(load_schema(CONFIG_SCHEMA_RESOURCE))
    errors = sorted(validator.iter_errors(raw), key=lambda e: [str(part) for part in e.path])
    if not errors:
        return
    details = "; ".join(
        f"{'/'.join(str(part) for part in error.path) or '<root>'}: {error.message}" for error in errors
    )
    raise ErrorDocsConfigError(f"{config_path} does not match schema: {details}")


def load_known_codes(path: Path) -> List[str]:
    """Read diagnostic codes, one per line; blank lines and # comments are ignored."""

    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise ErrorDocsConfigError(f"Known codes file {path} does not exist") from exc
    codes: List[str] = []
    for line in text.splitlines():
        stripped = line.split("#", 1)[0].strip()
        if stripped:
            codes.append(stripped)
    return codes

#!/usr/bin/env python3
"""Entry point for the errordocs CLI."""

from __future__ import annotations

import argparse
import json
import os
import sys
import time
from pathlib import Path
from textwrap import dedent
from typing import Any, Dict, List, Optional

from errordocs import __version__
from errordocs.adapters.quick_lint import QuickLintEngine
from errordocs.app.corpus import CorpusError, CorpusReport, CorpusService, CorpusValidationError
from errordocs.domain.value_objects import ErrorDocsConfig, ErrorDocsConfigError
from errordocs.ports.lint_engine import LintEngine, LintEngineError
from errordocs.settings import SETTINGS
from errordocs.utils.config import load_config, load_known_codes
from errordocs.utils.telemetry import record_structured_event

HELP_OVERVIEW = dedent(
    """
    Check error documentation pages against the linter and render them.

    Each docs/errors/<CODE>.md page needs:
      - a title heading `# <CODE>: description` matching the file name
      - a first code sample producing only <CODE> diagnostics
      - further code samples (optional) producing no diagnostics
    """
)


def _default_project_path(path_arg: str | None) -> Path:
    if path_arg:
        return Path(path_arg).expanduser().resolve()
    return Path(os.getcwd())


def _build_engine(config: ErrorDocsConfig) -> LintEngine:
    return QuickLintEngine.from_config(config.linter)


def _resolve_docs_dir(args: argparse.Namespace, project_root: Path, config: ErrorDocsConfig) -> Path:
    override = getattr(args, "docs_dir", None)
    if override:
        candidate = Path(override).expanduser()
        return candidate if candidate.is_absolute() else (project_root / candidate).resolve()
    return config.absolute_docs_dir(project_root)


def _resolve_config_path(args: argparse.Namespace, project_root: Path) -> Optional[Path]:
    override = getattr(args, "config", None)
    if not override:
        return None
    path = Path(override).expanduser()
    return path if path.is_absolute() else project_root / path


def _resolve_known_codes(args: argparse.Namespace, project_root: Path, config: ErrorDocsConfig) -> Optional[List[str]]:
    override = getattr(args, "known_codes", None)
    if override:
        path = Path(override).expanduser()
        return load_known_codes(path if path.is_absolute() else project_root / path)
    configured = config.absolute_known_codes_file(project_root)
    if configured is None:
        return None
    return load_known_codes(configured)


def _corpus_cmd(args: argparse.Namespace) -> int:
    project_root = _default_project_path(getattr(args, "path", None))
    command = args.command
    as_json = getattr(args, "json", False)
    event_name = f"errordocs.{command}"
    event_context: Dict[str, Any] = {"command": command, "path": str(project_root)}
    record_structured_event(SETTINGS, event_name, status="start", component="cli", payload=event_context)
    start = time.perf_counter()

    try:
        config, config_path = load_config(project_root, _resolve_config_path(args, project_root))
        docs_dir = _resolve_docs_dir(args, project_root, config)
        event_context.update({"config": str(config_path), "docs_dir": str(docs_dir)})
        service = CorpusService(_build_engine(config))

        if command == "check":
            known_codes = _resolve_known_codes(args, project_root, config)
            report = service.check(docs_dir, known_codes=known_codes)
            event_context.update({"documents": len(report.documents), "problems": len(report.problems)})
            _emit_check_report(report, as_json)
            exit_code = 0 if report.status == "ok" else 1
        elif command == "render":
            known_codes = _resolve_known_codes(args, project_root, config)
            html = service.render_html(docs_dir, known_codes=known_codes)
            output = getattr(args, "output", None)
            if output:
                output_path = Path(output).expanduser()
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_text(html, encoding="utf-8")
                event_context["output"] = str(output_path)
            else:
                sys.stdout.write(html)
            event_context["bytes"] = len(html.encode("utf-8"))
            exit_code = 0
        elif command == "list":
            entries = service.list_entries(docs_dir)
            event_context["documents"] = len(entries)
            _emit_list(entries, as_json)
            exit_code = 0
        else:
            record_structured_event(
                SETTINGS,
                event_name,
                status="error",
                level="error",
                component="cli",
                payload=event_context | {"message": "unsupported"},
            )
            print(f"Unsupported command: {command}", file=sys.stderr)
            return 2
    except (ErrorDocsConfigError, CorpusError, LintEngineError) as exc:
        duration = (time.perf_counter() - start) * 1000
        record_structured_event(
            SETTINGS,
            event_name,
            status="error",
            level="error",
            component="cli",
            duration_ms=duration,
            payload=event_context | {"code": exc.code, "message": exc.message},
        )
        _emit_error(command, exc, as_json)
        return 1
    except Exception as exc:  # pragma: no cover - propagate unexpected issues
        duration = (time.perf_counter() - start) * 1000
        record_structured_event(
            SETTINGS,
            event_name,
            status="error",
            level="error",
            component="cli",
            duration_ms=duration,
            payload=event_context | {"error": str(exc)},
        )
        raise

    duration = (time.perf_counter() - start) * 1000
    record_structured_event(
        SETTINGS,
        event_name,
        status="success" if exit_code == 0 else "warning",
        level="info" if exit_code == 0 else "warn",
        component="cli",
        duration_ms=duration,
        payload=event_context | {"exit_code": exit_code},
    )
    return exit_code


def _emit_check_report(report: CorpusReport, as_json: bool) -> None:
    if as_json:
        print(json.dumps(report.as_dict(), ensure_ascii=False, indent=2))
        return
    for problem in report.problems:
        print(str(problem), file=sys.stderr)
    print(
        f"errordocs check: status={report.status} "
        f"documents={len(report.documents)} problems={len(report.problems)}"
    )


def _emit_list(entries: List[Dict[str, Any]], as_json: bool) -> None:
    if as_json:
        print(json.dumps(entries, ensure_ascii=False, indent=2))
        return
    width = max((len(entry["code"]) for entry in entries), default=0)
    for entry in entries:
        print(f"{entry['code']:<{width}}  {entry['description'] or '-'} ({entry['code_blocks']} samples)")


def _emit_error(command: str, exc: ErrorDocsConfigError | CorpusError | LintEngineError, as_json: bool) -> None:
    if as_json:
        payload: Dict[str, Any] = {
            "status": "error",
            "error": {"code": exc.code, "message": exc.message, "remediation": exc.remediation},
        }
        if isinstance(exc, CorpusValidationError):
            payload["problems"] = [problem.as_dict() for problem in exc.problems]
        print(json.dumps(payload, ensure_ascii=False, indent=2))
        return
    if isinstance(exc, CorpusValidationError):
        for problem in exc.problems:
            print(str(problem), file=sys.stderr)
    print(f"errordocs {command} error: {exc.code}: {exc.message.splitlines()[0]}", file=sys.stderr)
    if exc.remediation:
        print(f"  remediation: {exc.remediation}", file=sys.stderr)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", nargs="?", help="Project path (default: current directory)")
    parser.add_argument("--config", help="Path to errordocs.yaml, relative to <path> (default: <path>/errordocs.yaml)")
    parser.add_argument("--docs-dir", dest="docs_dir", help="Override the documentation directory")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="errordocs",
        description=HELP_OVERVIEW,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"errordocs {__version__}")

    sub = parser.add_subparsers(dest="command", required=True)

    check_cmd = sub.add_parser("check", help="Validate every page against the linter")
    _add_common_arguments(check_cmd)
    check_cmd.add_argument("--known-codes", dest="known_codes", help="File listing diagnostic codes that need a page")
    check_cmd.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    check_cmd.set_defaults(func=_corpus_cmd)

    render_cmd = sub.add_parser("render", help="Validate, then render the corpus to an HTML fragment")
    _add_common_arguments(render_cmd)
    render_cmd.add_argument("--known-codes", dest="known_codes", help="File listing diagnostic codes that need a page")
    render_cmd.add_argument("--output", help="Write HTML to this file instead of stdout")
    render_cmd.set_defaults(func=_corpus_cmd)

    list_cmd = sub.add_parser("list", help="List documented error codes")
    _add_common_arguments(list_cmd)
    list_cmd.add_argument("--json", action="store_true", help="Emit machine-readable JSON")
    list_cmd.set_defaults(func=_corpus_cmd)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())

"""Constants for the error documentation domain."""

from __future__ import annotations

ERROR_REMEDIATIONS = {
    "ERRDOCS_INVALID_CONFIG": "Update errordocs.yaml to match resources/config.schema.json.",
    "ERRDOCS_CORPUS_EMPTY": "Point docs_dir at the directory holding the <code>.md pages or pass the path explicitly.",
    "ERRDOCS_VALIDATION_FAILED": "Fix the listed pages and rerun `errordocs check`.",
    "ERRDOCS_LINTER_FAILED": "Install the linter or adjust linter.command in errordocs.yaml.",
    "ERRDOCS_LINTER_TIMEOUT": "Simplify the code sample or raise linter.timeout in errordocs.yaml.",
    "ERRDOCS_TITLE_MISMATCH": "Rename the file or fix the `# CODE: description` heading so both agree.",
    "ERRDOCS_MISSING_CODE_BLOCKS": "Add a code sample which triggers the documented diagnostic.",
    "ERRDOCS_EXPECTED_ERROR": "Make the first code sample trigger the documented diagnostic.",
    "ERRDOCS_UNEXPECTED_DIAGNOSTIC": "Make the first code sample trigger only the documented diagnostic.",
    "ERRDOCS_EXPECTED_CLEAN": "Code samples after the first must lint cleanly; fix or remove the sample.",
    "ERRDOCS_UNDOCUMENTED_CODE": "Write a documentation page for the diagnostic code.",
}

DEFAULT_DOCS_DIR = "docs/errors"
DEFAULT_LINTER_COMMAND = ("quick-lint-js",)
DEFAULT_LINTER_TIMEOUT = 10.0
MARKDOWN_SUFFIX = ".md"


def remediation_for(code: str) -> str | None:
    """Return default remediation text for a given error code."""

    return ERROR_REMEDIATIONS.get(code)

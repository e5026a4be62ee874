"""
Smoke-test harness for a compiled plugin.

Loads the same module from a buffer and from a path, formats known inputs
with both request shapes on both instances, and fails loudly on any
difference or on any output that is not the expected text.
"""

import logging
from pathlib import Path

from pydantic import BaseModel, Field

from dprint_json.utils.logging import log_error, log_success

from .host import Formatter
from .loader import load_from_buffer, load_from_path

logger = logging.getLogger(__name__)


class VerificationCase(BaseModel):
    """A known input and the exact output the plugin must produce."""

    file_path: str
    file_text: str
    expected: str


class CaseResult(BaseModel):
    """Outputs for one case across both load paths and both request shapes."""

    case: VerificationCase
    outputs: dict[str, str] = Field(default_factory=dict)

    @property
    def passed(self) -> bool:
        return bool(self.outputs) and all(output == self.case.expected for output in self.outputs.values())


class VerificationReport(BaseModel):
    """Result of verifying a plugin."""

    schema_version: int
    plugin_name: str
    plugin_version: str
    results: list[CaseResult] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.results)


CANONICAL_CASE = VerificationCase(
    file_path="file.json",
    file_text="{ test: 2, }",
    expected='{ "test": 2 }\n',
)


def verify_formatter(formatter: Formatter, case: VerificationCase = CANONICAL_CASE) -> str:
    """
    Format a case and assert the output is exactly the expected text.

    Raises:
        AssertionError: If the output differs
        FormatError: If the plugin rejects the input
    """
    result = formatter.format_text(case.file_path, case.file_text)
    if result != case.expected:
        raise AssertionError(
            f"Unexpected output for {case.file_path}: expected {case.expected!r}, got {result!r}"
        )
    return result


def verify_idempotent(formatter: Formatter, case: VerificationCase = CANONICAL_CASE) -> str:
    """Assert that formatting the expected output yields it unchanged."""
    return verify_formatter(
        formatter,
        VerificationCase(file_path=case.file_path, file_text=case.expected, expected=case.expected),
    )


def _format_both_shapes(label: str, formatter: Formatter, case: VerificationCase) -> dict[str, str]:
    return {
        f"{label}:positional": formatter.format_text(case.file_path, case.file_text),
        f"{label}:structured": formatter.format_text({"filePath": case.file_path, "fileText": case.file_text}),
    }


def verify_plugin(
    data: bytes,
    path: str | Path,
    cases: list[VerificationCase] | None = None,
) -> VerificationReport:
    """
    Verify that buffer and path loading behave identically.

    Args:
        data: Module bytes
        path: File holding the same module
        cases: Cases to run (defaults to the canonical case and its idempotence check)

    Returns:
        Report with every output produced

    Raises:
        AssertionError: If any output differs from the expected text
    """
    if cases is None:
        cases = [
            CANONICAL_CASE,
            VerificationCase(
                file_path=CANONICAL_CASE.file_path,
                file_text=CANONICAL_CASE.expected,
                expected=CANONICAL_CASE.expected,
            ),
        ]

    from_buffer = load_from_buffer(data)
    from_path = load_from_path(path)
    if from_buffer.schema_version != from_path.schema_version:
        raise AssertionError(
            f"Schema version differs: buffer={from_buffer.schema_version}, path={from_path.schema_version}"
        )

    info = from_buffer.get_plugin_info()
    report = VerificationReport(
        schema_version=from_buffer.schema_version,
        plugin_name=info.name,
        plugin_version=info.version,
    )

    for case in cases:
        outputs = _format_both_shapes("buffer", from_buffer, case)
        outputs.update(_format_both_shapes("path", from_path, case))
        result = CaseResult(case=case, outputs=outputs)
        report.results.append(result)

        if not result.passed:
            mismatched = {key: value for key, value in outputs.items() if value != case.expected}
            log_error("Verification failed for %s", case.file_path, logger=logger)
            raise AssertionError(
                f"Unexpected output for {case.file_path}: expected {case.expected!r}, got {mismatched!r}"
            )
        log_success("Verified %s (%d outputs)", case.file_path, len(outputs), logger=logger)

    return report

"""Unit tests for deterministic stage log lines."""

import io

from folio.telemetry.logger import RunLogger


def test_run_logger_emits_sorted_sanitized_context() -> None:
    sink = io.StringIO()
    logger = RunLogger(sink=sink)

    logger.log_stage_start("chapters", chapters=3, book="My Book")
    logger.log_stage_complete("chapters")
    logger.log_stage_failure("version", "UniqueViolationError")

    lines = sink.getvalue().splitlines()
    assert lines == [
        "[phase] level=INFO stage=chapters event=start book=My_Book chapters=3",
        "[phase] level=INFO stage=chapters event=complete",
        "[phase] level=ERROR stage=version event=failure error_type=UniqueViolationError",
    ]

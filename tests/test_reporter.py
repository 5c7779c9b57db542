"""Tests for the console and JSON reporters."""

from __future__ import annotations

import io
import json

import pytest

from usecompass.models import (
    ActionWithoutUsecase,
    CheckResults,
    ParseWarning,
    TaskMissingSpec,
    TaskWithoutUsecase,
    UsecaseMissingSpec,
)
from usecompass.reporter import Reporter


def _results() -> CheckResults:
    return CheckResults(
        controller_violations=[
            ActionWithoutUsecase(file="app/controllers/orders_controller.rb", action_name="index", line=2)
        ],
        usecase_violations=[
            UsecaseMissingSpec(
                file="layered/usecase/orders/cancel_usecase.rb",
                expected_spec="spec/layered/usecase/orders/cancel_usecase_spec.rb",
            )
        ],
        rake_violations=[TaskWithoutUsecase(file="lib/tasks/cleanup.rake", task_name="logs", line=6)],
        rake_spec_violations=None,
    )


def test_console_report_lists_sections() -> None:
    output = io.StringIO()

    Reporter(output=output).report(_results())

    text = output.getvalue()
    assert "Controllers not calling usecases:" in text
    assert "  app/controllers/orders_controller.rb:2 - index" in text
    assert "Usecases without specs:" in text
    assert (
        "  layered/usecase/orders/cancel_usecase.rb - "
        "spec/layered/usecase/orders/cancel_usecase_spec.rb" in text
    )
    assert "Rake tasks not calling usecases:" in text
    assert "  lib/tasks/cleanup.rake:6 - logs" in text
    assert "Rake files without specs:" not in text
    assert "Found 3 violations" in text


def test_console_report_all_passed() -> None:
    output = io.StringIO()

    Reporter(output=output).report(CheckResults(controller_violations=[], usecase_violations=[]))

    assert "All checks passed!" in output.getvalue()


def test_console_report_includes_parse_warnings() -> None:
    output = io.StringIO()
    results = CheckResults(
        controller_violations=[],
        warnings=[
            ParseWarning(
                file="app/controllers/x_controller.rb",
                message="app/controllers/x_controller.rb:3: syntax error",
            )
        ],
    )

    Reporter(output=output).report(results)

    assert "could not parse app/controllers/x_controller.rb:3: syntax error" in output.getvalue()


def test_json_report_distinguishes_absent_and_empty() -> None:
    output = io.StringIO()
    results = _results()
    results.rake_spec_violations = None
    results.usecase_violations = []

    Reporter(format="json", output=output).report(results)

    payload = json.loads(output.getvalue())
    assert list(payload) == [
        "controller_violations",
        "usecase_violations",
        "rake_violations",
        "rake_spec_violations",
        "warnings",
        "total_violations",
    ]
    assert payload["controller_violations"] == [
        {"file": "app/controllers/orders_controller.rb", "action_name": "index", "line": 2}
    ]
    assert payload["usecase_violations"] == []
    assert payload["rake_violations"][0]["task_name"] == "logs"
    assert payload["rake_spec_violations"] is None
    assert payload["warnings"] == []
    assert payload["total_violations"] == 2


def test_rake_spec_section_rendered() -> None:
    output = io.StringIO()
    results = CheckResults(
        rake_spec_violations=[
            TaskMissingSpec(file="lib/tasks/a.rake", expected_spec="spec/lib/tasks/a_spec.rb")
        ]
    )

    Reporter(output=output).report(results)

    assert "Rake files without specs:" in output.getvalue()
    assert "  lib/tasks/a.rake - spec/lib/tasks/a_spec.rb" in output.getvalue()


def test_unknown_format_is_rejected() -> None:
    with pytest.raises(ValueError):
        Reporter(format="xml")

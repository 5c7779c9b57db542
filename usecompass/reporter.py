"""Console and JSON renderers for check results."""

from __future__ import annotations

import json
import sys
from dataclasses import asdict
from typing import Any, Callable, Dict, Optional, Sequence, TextIO, Tuple

from rich.console import Console
from rich.markup import escape

from .models import CheckResults

FORMATS = ("console", "json")


def _located(violation: Any, name: str) -> str:
    line = violation.line if violation.line is not None else "?"
    return f"{violation.file}:{line} - {name}"


# (result attribute, heading, line renderer) in report order.
_SECTIONS: Tuple[Tuple[str, str, Callable[[Any], str]], ...] = (
    (
        "controller_violations",
        "Controllers not calling usecases:",
        lambda v: _located(v, v.action_name),
    ),
    (
        "usecase_violations",
        "Usecases without specs:",
        lambda v: f"{v.file} - {v.expected_spec}",
    ),
    (
        "rake_violations",
        "Rake tasks not calling usecases:",
        lambda v: _located(v, v.task_name),
    ),
    (
        "rake_spec_violations",
        "Rake files without specs:",
        lambda v: f"{v.file} - {v.expected_spec}",
    ),
)


class Reporter:
    """Writes ``CheckResults`` to a stream in the requested format."""

    def __init__(self, format: str = "console", output: Optional[TextIO] = None) -> None:
        if format not in FORMATS:
            raise ValueError(f"Unsupported format: {format}")
        self.format = format
        self.output = output if output is not None else sys.stdout

    def report(self, results: CheckResults) -> None:
        if self.format == "json":
            self._json_report(results)
        else:
            self._console_report(results)

    def _console_report(self, results: CheckResults) -> None:
        console = Console(file=self.output, highlight=False, soft_wrap=True, emoji=False)

        for warning in results.warnings:
            console.print(f"[yellow]Warning: could not parse {escape(warning.message)}[/yellow]")

        if not results.has_violations:
            console.print("[green]✓ All checks passed![/green]")
            return

        for attribute, heading, render in _SECTIONS:
            violations: Optional[Sequence[Any]] = getattr(results, attribute)
            if not violations:
                continue
            console.print(f"\n[bold yellow]⚠ {heading}[/bold yellow]")
            for violation in violations:
                console.print(f"  {escape(render(violation))}")

        console.print("")
        console.print(f"[red]Found {results.total_violations} violations[/red]")

    def _json_report(self, results: CheckResults) -> None:
        payload: Dict[str, Any] = {}
        for attribute, _, _ in _SECTIONS:
            violations = getattr(results, attribute)
            payload[attribute] = None if violations is None else [asdict(v) for v in violations]
        payload["warnings"] = [asdict(w) for w in results.warnings]
        payload["total_violations"] = results.total_violations
        self.output.write(json.dumps(payload, indent=2, ensure_ascii=False))
        self.output.write("\n")


__all__ = ["FORMATS", "Reporter"]

from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from tests._fixtures.repo_builder import RepoBuilder
from usecompass.analyzers.syntax import Node, RubyParser


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture(scope="session")
def ruby_parser() -> RubyParser:
    return RubyParser()


@pytest.fixture
def parse_ruby(ruby_parser: RubyParser) -> Callable[[str], Node]:
    """Parse a dedented Ruby snippet into a syntax tree."""

    def _parse(source: str) -> Node:
        return ruby_parser.parse(textwrap.dedent(source).lstrip("\n"), "snippet.rb")

    return _parse


@pytest.fixture(autouse=True)
def _reset_usecompass_logger():
    """Undo ``configure_logging`` so caplog keeps seeing usecompass records."""
    yield
    logger = logging.getLogger("usecompass")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.propagate = True
    logger.setLevel(logging.NOTSET)

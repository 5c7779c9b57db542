"""Tests for usecompass.repo_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from usecompass.models import ROLE_CONTROLLER, ROLE_TASK, ROLE_USECASE
from usecompass.repo_scanner import RepoScanner


def _touch(root: Path, *relative_paths: str) -> None:
    for relative in relative_paths:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def test_discover_controllers_sorted(tmp_path: Path) -> None:
    _touch(
        tmp_path,
        "app/controllers/users_controller.rb",
        "app/controllers/admin/teams_controller.rb",
        "app/controllers/concerns/auth.rb",
        "app/models/user.rb",
    )

    units = RepoScanner().discover(tmp_path, ROLE_CONTROLLER)

    assert [unit.relative_path for unit in units] == [
        "app/controllers/admin/teams_controller.rb",
        "app/controllers/users_controller.rb",
    ]
    assert all(unit.role == ROLE_CONTROLLER for unit in units)
    assert units[0].absolute_path == tmp_path.resolve() / "app/controllers/admin/teams_controller.rb"


def test_discover_usecases_across_roots_without_duplicates(tmp_path: Path) -> None:
    _touch(
        tmp_path,
        "layered/usecase/orders/create_usecase.rb",
        "app/usecases/billing/charge_usecase.rb",
        "app/services/refund_usecase.rb",
        "lib/other_usecase.rb",
        "layered/usecase/orders/helper.rb",
    )

    units = RepoScanner().discover(tmp_path, ROLE_USECASE)

    assert [unit.relative_path for unit in units] == [
        "app/services/refund_usecase.rb",
        "app/usecases/billing/charge_usecase.rb",
        "layered/usecase/orders/create_usecase.rb",
    ]


def test_discover_rake_files(tmp_path: Path) -> None:
    _touch(tmp_path, "lib/tasks/cleanup.rake", "lib/tasks/orders/archive.rake", "lib/tasks/README")

    units = RepoScanner().discover(tmp_path, ROLE_TASK)

    assert [unit.relative_path for unit in units] == [
        "lib/tasks/cleanup.rake",
        "lib/tasks/orders/archive.rake",
    ]


def test_missing_role_directories_yield_no_files(tmp_path: Path) -> None:
    scanner = RepoScanner()
    assert scanner.discover(tmp_path, ROLE_CONTROLLER) == []
    assert scanner.discover(tmp_path, ROLE_USECASE) == []
    assert scanner.discover(tmp_path, ROLE_TASK) == []


def test_discover_rejects_missing_root(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        RepoScanner().discover(tmp_path / "missing", ROLE_TASK)


def test_discover_rejects_unknown_role(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        RepoScanner().discover(tmp_path, "model")

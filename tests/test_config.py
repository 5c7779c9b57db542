"""Tests for usecompass.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from usecompass.config import (
    ActionExclusion,
    SpecMapping,
    TaskExclusion,
    UsecompassConfig,
    load_config,
)
from usecompass.errors import ConfigError
from usecompass.models import (
    CHECK_CONTROLLERS,
    CHECK_RAKE_SPECS,
    CHECK_RAKES,
    ROLE_TASK,
    ROLE_USECASE,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, UsecompassConfig)
    assert config.source is None
    assert config.exclusions.controllers == []
    assert config.exclusions.controller_actions == []
    assert config.exclusions.usecase_specs == []
    assert config.exclusions.rake_files == []
    assert config.exclusions.rake_tasks == []
    assert config.exclusions.rake_specs == []
    assert config.custom_mappings.usecases == []
    assert config.custom_mappings.rakes == []


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / "usecompass.yml"
    config_file.write_text(
        """
exclusions:
  controllers:
    - "app/controllers/application_controller.rb"
  controller_actions:
    - controller: "app/controllers/admin/dashboard_controller.rb"
      actions: ["index", "show"]
  usecase_specs:
    - "layered/usecase/legacy/migration_usecase.rb"
  rake_files: ["lib/tasks/maintenance.rake"]
  rake_tasks:
    - rake_file: "lib/tasks/cleanup.rake"
      tasks: [purge_logs]
  rake_specs:
    - "lib/tasks/legacy/old_task.rake"
custom_mappings:
  rakes:
    - rake_file: "lib/tasks/hoge_one.rake"
      spec_file: "spec/lib/tasks/hoge_one_1_spec.rb"
  usecases:
    - usecase_file: "layered/usecase/some_usecase.rb"
      spec_file: "spec/layered/usecase/some_custom_spec.rb"
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.source == config_file.resolve()
    exclusions = config.exclusions
    assert exclusions.controllers == ["app/controllers/application_controller.rb"]
    assert exclusions.controller_actions == [
        ActionExclusion(
            controller="app/controllers/admin/dashboard_controller.rb", actions=("index", "show")
        )
    ]
    assert exclusions.usecase_specs == ["layered/usecase/legacy/migration_usecase.rb"]
    assert exclusions.rake_files == ["lib/tasks/maintenance.rake"]
    assert exclusions.rake_tasks == [
        TaskExclusion(rake_file="lib/tasks/cleanup.rake", tasks=("purge_logs",))
    ]
    assert exclusions.rake_specs == ["lib/tasks/legacy/old_task.rake"]

    assert config.custom_mappings.by_role() == {
        ROLE_USECASE: [
            SpecMapping(
                source_file="layered/usecase/some_usecase.rb",
                spec_file="spec/layered/usecase/some_custom_spec.rb",
            )
        ],
        ROLE_TASK: [
            SpecMapping(
                source_file="lib/tasks/hoge_one.rake",
                spec_file="spec/lib/tasks/hoge_one_1_spec.rb",
            )
        ],
    }

    assert exclusions.excludes_file(CHECK_CONTROLLERS, "app/controllers/application_controller.rb")
    assert exclusions.excludes_file(CHECK_RAKES, "lib/tasks/maintenance.rake")
    assert not exclusions.excludes_file(CHECK_RAKES, "lib/tasks/cleanup.rake")
    assert exclusions.excludes_file(CHECK_RAKE_SPECS, "lib/tasks/legacy/old_task.rake")
    assert not exclusions.excludes_file(CHECK_RAKES, "lib/tasks/legacy/old_task.rake")
    assert exclusions.excludes_action("app/controllers/admin/dashboard_controller.rb", "show")
    assert not exclusions.excludes_action("app/controllers/admin/dashboard_controller.rb", "edit")
    assert exclusions.excludes_task("lib/tasks/cleanup.rake", "purge_logs")


def test_load_config_accepts_explicit_file_path(tmp_path: Path) -> None:
    config_file = tmp_path / "custom.yml"
    config_file.write_text("exclusions:\n  controllers: [a.rb]\n", encoding="utf-8")

    config = load_config(config_file)

    assert config.exclusions.controllers == ["a.rb"]


def test_malformed_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    config_file = tmp_path / "usecompass.yml"
    config_file.write_text(
        """
exclusions:
  controllers:
  controller_actions:
    - "not a mapping"
    - actions: [index]
    - controller: app/controllers/x_controller.rb
  usecase_specs: 42
custom_mappings: [1, 2]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.exclusions.controllers == []
    assert config.exclusions.controller_actions == [
        ActionExclusion(controller="app/controllers/x_controller.rb", actions=())
    ]
    assert config.exclusions.usecase_specs == []
    assert config.custom_mappings.usecases == []


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    (tmp_path / "usecompass.yml").write_text("# nothing yet\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.exclusions.controllers == []


def test_non_mapping_root_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "usecompass.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_invalid_yaml_is_rejected(tmp_path: Path) -> None:
    (tmp_path / "usecompass.yml").write_text("exclusions: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)

"""Writes the starter usecompass.yml for ``usecompass init``."""

from __future__ import annotations

from pathlib import Path

CONFIG_TEMPLATE = """\
# Configuration file for usecompass

exclusions:
  controllers:
    # Controllers that don't need to call usecases
    - "app/controllers/application_controller.rb"
    # - "app/controllers/admin/health_check_controller.rb"

  controller_actions:
    # Specific controller actions that don't need to call usecases
    # - controller: "app/controllers/admin/dashboard_controller.rb"
    #   actions: ["index", "show"]

  usecase_specs:
    # Usecases that don't need specs (e.g., legacy code)
    # - "layered/usecase/legacy/migration_usecase.rb"

  rake_files:
    # Rake files whose tasks don't need to call usecases
    # - "lib/tasks/maintenance.rake"

  rake_tasks:
    # Specific rake tasks that don't need to call usecases
    # - rake_file: "lib/tasks/cleanup.rake"
    #   tasks: ["purge_logs"]

  rake_specs:
    # Rake files that don't need specs
    # - "lib/tasks/legacy/old_task.rake"

# Custom spec file mappings for non-standard naming
custom_mappings:
  rakes:
    # - rake_file: "lib/tasks/hoge_one.rake"
    #   spec_file: "spec/lib/tasks/hoge_one_1_spec.rb"

  usecases:
    # - usecase_file: "layered/usecase/some_usecase.rb"
    #   spec_file: "spec/layered/usecase/some_custom_spec.rb"
"""


def write_config(config_path: Path, *, overwrite: bool = False) -> Path:
    """Write the template to ``config_path``; refuses to clobber unless ``overwrite``."""
    if config_path.exists() and not overwrite:
        raise FileExistsError(f"Configuration file already exists at {config_path}")
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(CONFIG_TEMPLATE, encoding="utf-8")
    return config_path


__all__ = ["CONFIG_TEMPLATE", "write_config"]

"""Configuration loading for usecompass (usecompass.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from .errors import ConfigError
from .models import (
    CHECK_CONTROLLERS,
    CHECK_RAKE_SPECS,
    CHECK_RAKES,
    CHECK_USECASE_SPECS,
    ROLE_TASK,
    ROLE_USECASE,
)

CONFIG_FILENAME = "usecompass.yml"


@dataclass(frozen=True)
class ActionExclusion:
    """Controller actions that may skip the usecase rule."""

    controller: str
    actions: tuple[str, ...]


@dataclass(frozen=True)
class TaskExclusion:
    """Rake tasks that may skip the usecase rule."""

    rake_file: str
    tasks: tuple[str, ...]


@dataclass(frozen=True)
class SpecMapping:
    """Explicit spec location for a file whose name breaks the convention."""

    source_file: str
    spec_file: str


@dataclass
class ExclusionConfig:
    """Paths and (file, name) pairs excluded from the checks."""

    controllers: List[str] = field(default_factory=list)
    controller_actions: List[ActionExclusion] = field(default_factory=list)
    usecase_specs: List[str] = field(default_factory=list)
    rake_files: List[str] = field(default_factory=list)
    rake_tasks: List[TaskExclusion] = field(default_factory=list)
    rake_specs: List[str] = field(default_factory=list)

    def excludes_file(self, check: str, relative_path: str) -> bool:
        paths = {
            CHECK_CONTROLLERS: self.controllers,
            CHECK_USECASE_SPECS: self.usecase_specs,
            CHECK_RAKES: self.rake_files,
            CHECK_RAKE_SPECS: self.rake_specs,
        }.get(check, [])
        return relative_path in paths

    def excludes_action(self, relative_path: str, action_name: str) -> bool:
        return any(
            entry.controller == relative_path and action_name in entry.actions
            for entry in self.controller_actions
        )

    def excludes_task(self, relative_path: str, task_name: str) -> bool:
        return any(
            entry.rake_file == relative_path and task_name in entry.tasks
            for entry in self.rake_tasks
        )


@dataclass
class MappingConfig:
    """Custom spec mappings, scoped by file role."""

    usecases: List[SpecMapping] = field(default_factory=list)
    rakes: List[SpecMapping] = field(default_factory=list)

    def by_role(self) -> Dict[str, List[SpecMapping]]:
        return {ROLE_USECASE: list(self.usecases), ROLE_TASK: list(self.rakes)}


@dataclass
class UsecompassConfig:
    """Merged settings from usecompass.yml, with defaults for missing keys."""

    exclusions: ExclusionConfig = field(default_factory=ExclusionConfig)
    custom_mappings: MappingConfig = field(default_factory=MappingConfig)
    source: Optional[Path] = None


def load_config(config_path: Path) -> UsecompassConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    if not config_file.exists():
        return UsecompassConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")

    exclusion_data = _as_dict(data.get("exclusions"))
    exclusions = ExclusionConfig(
        controllers=_as_str_list(exclusion_data.get("controllers")),
        controller_actions=[
            ActionExclusion(controller=owner, actions=tuple(names))
            for owner, names in _named_entries(
                exclusion_data.get("controller_actions"), "controller", "actions"
            )
        ],
        usecase_specs=_as_str_list(exclusion_data.get("usecase_specs")),
        rake_files=_as_str_list(exclusion_data.get("rake_files")),
        rake_tasks=[
            TaskExclusion(rake_file=owner, tasks=tuple(names))
            for owner, names in _named_entries(
                exclusion_data.get("rake_tasks"), "rake_file", "tasks"
            )
        ],
        rake_specs=_as_str_list(exclusion_data.get("rake_specs")),
    )

    mapping_data = _as_dict(data.get("custom_mappings"))
    custom_mappings = MappingConfig(
        usecases=_spec_mappings(mapping_data.get("usecases"), "usecase_file"),
        rakes=_spec_mappings(mapping_data.get("rakes"), "rake_file"),
    )

    return UsecompassConfig(
        exclusions=exclusions,
        custom_mappings=custom_mappings,
        source=config_file,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = Path(config_path).expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _named_entries(value: Any, owner_key: str, names_key: str) -> List[tuple[str, List[str]]]:
    entries: List[tuple[str, List[str]]] = []
    for item in _as_list(value):
        if not isinstance(item, Mapping):
            continue
        owner = _as_str(item.get(owner_key))
        if not owner:
            continue
        entries.append((owner, _as_str_list(item.get(names_key))))
    return entries


def _spec_mappings(value: Any, source_key: str) -> List[SpecMapping]:
    mappings: List[SpecMapping] = []
    for item in _as_list(value):
        if not isinstance(item, Mapping):
            continue
        source = _as_str(item.get(source_key))
        spec = _as_str(item.get("spec_file"))
        if source and spec:
            mappings.append(SpecMapping(source_file=source, spec_file=spec))
    return mappings


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return list(value) if isinstance(value, list) else []


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ActionExclusion",
    "ExclusionConfig",
    "MappingConfig",
    "SpecMapping",
    "TaskExclusion",
    "UsecompassConfig",
    "load_config",
]

"""Role-specific discovery of Ruby files under a project root."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from .logging import get_logger
from .models import ROLE_CONTROLLER, ROLE_TASK, ROLE_USECASE, SourceUnit

_EXCLUDED_DIRS = {
    ".git",
    ".hg",
    ".svn",
    ".bundle",
    "node_modules",
}

# (search root, filename pattern) per role; a file may match several roots.
_ROLE_PATTERNS: Dict[str, Tuple[Tuple[str, str], ...]] = {
    ROLE_CONTROLLER: (("app/controllers", "*_controller.rb"),),
    ROLE_USECASE: (
        ("layered/usecase", "*_usecase.rb"),
        ("app/usecases", "*_usecase.rb"),
        ("app", "*_usecase.rb"),
    ),
    ROLE_TASK: (("lib/tasks", "*.rake"),),
}


def _iter_files(base: Path, pattern: str) -> Iterator[Path]:
    for dirpath, dirnames, filenames in os.walk(base):
        dirnames[:] = sorted(name for name in dirnames if name not in _EXCLUDED_DIRS)
        current_dir = Path(dirpath)
        for filename in filenames:
            if fnmatchcase(filename, pattern):
                yield current_dir / filename


class RepoScanner:
    """Finds controllers, usecases and rake files by their conventional locations."""

    def __init__(self) -> None:
        self.logger = get_logger("repo_scanner")

    def discover(self, root: str | Path, role: str) -> List[SourceUnit]:
        """Return the files playing ``role``, sorted by relative path."""
        root_path = self._validate_root(root)
        patterns = _ROLE_PATTERNS.get(role)
        if patterns is None:
            raise ValueError(f"Unknown file role: {role}")

        found: Dict[str, SourceUnit] = {}
        for base, pattern in patterns:
            search_root = root_path / base
            if not search_root.is_dir():
                self.logger.debug("No %s directory at %s", role, search_root)
                continue
            for path in _iter_files(search_root, pattern):
                relative = path.relative_to(root_path).as_posix()
                if relative not in found:
                    found[relative] = SourceUnit(
                        absolute_path=path, relative_path=relative, role=role
                    )

        units = [found[key] for key in sorted(found)]
        self.logger.debug("Discovered %d %s files", len(units), role)
        return units

    @staticmethod
    def _validate_root(root: str | Path) -> Path:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")
        return root_path


__all__ = ["RepoScanner"]

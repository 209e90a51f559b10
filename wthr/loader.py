"""Locating and reading modules named by `import` statements."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Optional

from .errors import ModuleImportError


class ModuleLoader:
    """Resolves module files and remembers which ones are mid-import.

    One loader is shared by an interpreter and every interpreter it
    creates for imports, so a module that imports itself, directly or
    through other modules, is caught instead of recursing forever.
    """
    def __init__(self):
        self.active: List[Path] = []

    def resolve(self, filename: str, base_dir: Optional[Path] = None) -> Path:
        base = base_dir if base_dir is not None else Path.cwd()
        return (base / filename).resolve()

    def read(self, path: Path, line: Optional[int] = None) -> str:
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            raise ModuleImportError(f"module file {path} not found", line)
        except (OSError, UnicodeDecodeError) as e:
            raise ModuleImportError(f"cannot read module {path}: {e}", line)

    @contextmanager
    def loading(self, path: Path, line: Optional[int] = None) -> Iterator[Path]:
        if path in self.active:
            chain = ' -> '.join(p.name for p in self.active + [path])
            raise ModuleImportError(f"import cycle: {chain}", line)
        self.active.append(path)
        try:
            yield path
        finally:
            self.active.pop()

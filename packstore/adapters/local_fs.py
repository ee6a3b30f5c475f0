"""Local filesystem adapter implementing ``FileSystemPort``."""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import List, Optional

from packstore.domain.ports import FileSystemPort


class LocalFileSystem(FileSystemPort):
    """``pathlib``/``shutil`` backed filesystem primitives."""

    def exists(self, path: Path) -> bool:
        return Path(path).exists()

    def is_dir(self, path: Path) -> bool:
        return Path(path).is_dir()

    def delete(self, path: Path) -> None:
        """Delete a file or directory tree; an absent path is not an error."""
        path = Path(path)
        if path.is_symlink() or path.is_file():
            path.unlink(missing_ok=True)
        elif path.is_dir():
            shutil.rmtree(path)

    def make_dirs(self, path: Path) -> None:
        Path(path).mkdir(parents=True, exist_ok=True)

    def copy_tree(self, source: Path, destination: Path) -> None:
        """Copy ``source`` into ``destination``.

        Directories are merged and same-named files in ``destination`` are
        overwritten. A file ``source`` is copied to the ``destination`` path.
        """
        source = Path(source)
        destination = Path(destination)
        if source.is_dir():
            shutil.copytree(source, destination, dirs_exist_ok=True)
            return
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(source, destination)

    def list_directory(self, path: Path) -> List[str]:
        # Sorted so "first entry" is stable across platforms.
        return sorted(os.listdir(path))

    def rename(self, path: Path, new_name: str) -> Path:
        path = Path(path)
        target = path.with_name(new_name)
        os.replace(path, target)
        return target

    def move(self, source: Path, destination: Path) -> Path:
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        return Path(shutil.move(str(source), str(destination)))

    def find_file(self, root: Path, file_name: str) -> Optional[Path]:
        """Return the first file named ``file_name`` below ``root``, if any."""
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            if file_name in filenames:
                return Path(dirpath) / file_name
        return None


__all__ = ["LocalFileSystem"]

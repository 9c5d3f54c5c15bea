"""Read-only virtual file systems.

Static sites are served from a ``FileSystem`` rather than straight from
disk, so the same handler works for a build directory, an in-memory tree
in tests, or a sub-directory view of either.

Names are slash-separated and unrooted: ``"index.html"``,
``"nested/app.js"``.  ``"."`` names the root.  Any name containing
``..``, empty elements, backslashes, or a leading/trailing slash is
rejected before it touches storage, so no name can escape the tree.
"""

from __future__ import annotations

import stat as stat_module
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol, runtime_checkable


def valid_path(name: str) -> bool:
    """Whether *name* is a valid unrooted slash-separated path."""
    if name == ".":
        return True
    if not name or "\\" in name or "\x00" in name:
        return False
    return all(part not in ("", ".", "..") for part in name.split("/"))


def _check(name: str) -> None:
    if not valid_path(name):
        msg = f"invalid path: {name!r}"
        raise ValueError(msg)


def join(directory: str, name: str) -> str:
    """Join two valid names, treating ``"."`` as the empty prefix."""
    if directory == ".":
        return name
    if name == ".":
        return directory
    return f"{directory}/{name}"


@dataclass(frozen=True, slots=True)
class FileInfo:
    """Metadata for one entry."""

    name: str
    size: int
    modified: datetime
    is_dir: bool = False
    is_symlink: bool = False


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for read-only file trees.

    ``open`` and ``stat`` raise ``FileNotFoundError`` for missing
    entries and ``IsADirectoryError`` when reading a directory.
    """

    def open(self, name: str) -> bytes: ...

    def stat(self, name: str) -> FileInfo: ...

    def listdir(self, name: str) -> list[str]: ...


def walk(fs: FileSystem, top: str = ".") -> Iterator[str]:
    """Yield every file name under *top*, depth-first in sorted order.

    Symlinked directories are not descended into.  Entries that vanish
    during the walk, or are dangling or escaping symlinks, are skipped.
    """
    for entry in sorted(fs.listdir(top)):
        name = join(top, entry)
        try:
            info = fs.stat(name)
        except FileNotFoundError:
            continue
        if not info.is_dir:
            yield name
        elif not info.is_symlink:
            yield from walk(fs, name)


class DirectoryFS:
    """A ``FileSystem`` backed by a directory on disk.

    Symlinks are resolved and must stay inside the root; anything that
    resolves outside it is reported as missing.
    """

    __slots__ = ("_root",)

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).resolve()

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, name: str) -> Path:
        _check(name)
        path = self._root if name == "." else (self._root / name).resolve()
        if not path.is_relative_to(self._root) or not path.exists():
            raise FileNotFoundError(name)
        return path

    def open(self, name: str) -> bytes:
        path = self._resolve(name)
        if path.is_dir():
            raise IsADirectoryError(name)
        return path.read_bytes()

    def stat(self, name: str) -> FileInfo:
        path = self._resolve(name)
        st = path.stat()
        return FileInfo(
            name=path.name if name != "." else ".",
            size=st.st_size,
            modified=datetime.fromtimestamp(st.st_mtime, tz=UTC),
            is_dir=stat_module.S_ISDIR(st.st_mode),
            is_symlink=name != "." and (self._root / name).is_symlink(),
        )

    def listdir(self, name: str) -> list[str]:
        path = self._resolve(name)
        if not path.is_dir():
            raise NotADirectoryError(name)
        return sorted(child.name for child in path.iterdir())

    def __repr__(self) -> str:
        return f"DirectoryFS({str(self._root)!r})"


@dataclass(frozen=True, slots=True)
class MemoryFile:
    """One file in a ``MemoryFS``."""

    data: bytes
    modified: datetime = datetime(1970, 1, 1, tzinfo=UTC)


class MemoryFS:
    """An in-memory ``FileSystem``; directories are implied by file names.

    Usage::

        fs = MemoryFS({
            "index.html": b"<h1>Home</h1>",
            "nested/app.js": MemoryFile(b"export const c = null;"),
        })

    The mapping is copied at construction, so later changes to the
    caller's dict are not visible.
    """

    __slots__ = ("_dirs", "_files")

    def __init__(self, files: Mapping[str, bytes | str | MemoryFile] | None = None) -> None:
        self._files: dict[str, MemoryFile] = {}
        self._dirs: set[str] = {"."}
        for name, value in (files or {}).items():
            _check(name)
            if isinstance(value, str):
                value = value.encode("utf-8")
            if isinstance(value, bytes):
                value = MemoryFile(value)
            self._files[name] = value
            parts = name.split("/")
            for depth in range(1, len(parts)):
                self._dirs.add("/".join(parts[:depth]))

    def open(self, name: str) -> bytes:
        _check(name)
        if name in self._dirs:
            raise IsADirectoryError(name)
        try:
            return self._files[name].data
        except KeyError:
            raise FileNotFoundError(name) from None

    def stat(self, name: str) -> FileInfo:
        _check(name)
        base = name.rsplit("/", 1)[-1]
        if name in self._dirs:
            return FileInfo(name=base, size=0, modified=datetime(1970, 1, 1, tzinfo=UTC), is_dir=True)
        try:
            entry = self._files[name]
        except KeyError:
            raise FileNotFoundError(name) from None
        return FileInfo(name=base, size=len(entry.data), modified=entry.modified)

    def listdir(self, name: str) -> list[str]:
        _check(name)
        if name not in self._dirs:
            if name in self._files:
                raise NotADirectoryError(name)
            raise FileNotFoundError(name)
        prefix = "" if name == "." else name + "/"
        children = {
            entry[len(prefix) :].split("/", 1)[0]
            for entry in (*self._files, *self._dirs)
            if entry != "." and entry.startswith(prefix) and entry != name
        }
        return sorted(children)


class SubFS:
    """A view of another ``FileSystem`` rooted at one of its directories."""

    __slots__ = ("_dir", "_parent")

    def __init__(self, parent: FileSystem, directory: str) -> None:
        self._parent = parent
        self._dir = directory

    def open(self, name: str) -> bytes:
        _check(name)
        return self._parent.open(join(self._dir, name))

    def stat(self, name: str) -> FileInfo:
        _check(name)
        return self._parent.stat(join(self._dir, name))

    def listdir(self, name: str) -> list[str]:
        _check(name)
        return self._parent.listdir(join(self._dir, name))

    def __repr__(self) -> str:
        return f"SubFS({self._parent!r}, {self._dir!r})"


def sub_fs(fs: FileSystem, directory: str) -> FileSystem:
    """Return a view of *fs* rooted at *directory*.

    ``"."`` returns *fs* itself.

    Raises:
        ValueError: If *directory* is not a valid path.
        NotADirectoryError: If *directory* does not name a directory.
        FileNotFoundError: If *directory* does not exist.
    """
    _check(directory)
    if directory == ".":
        return fs
    if not fs.stat(directory).is_dir:
        raise NotADirectoryError(directory)
    return SubFS(fs, directory)

"""Building gzip-compressed tarballs from files or folders."""

from __future__ import annotations

import logging
import os
import stat
import tarfile
import tempfile
from collections.abc import Iterable, Iterator
from typing import BinaryIO

_log = logging.getLogger(__name__)


def _walk(path: str) -> Iterator[str]:
    """Yield path and, depth first in lexical order, everything below it."""
    yield path
    if os.path.isdir(path) and not os.path.islink(path):
        for name in sorted(os.listdir(path)):
            yield from _walk(os.path.join(path, name))


class TarGz:
    """Writes a gzip-compressed tarball into an open binary file."""

    def __init__(self, fileobj: BinaryIO) -> None:
        self._file = fileobj
        self._tar = tarfile.open(fileobj=fileobj, mode="w:gz")
        self._source_dir = ""
        self._ignored: set[str] = set()

    def set_ignore_list(self, ignore_list: Iterable[str]) -> None:
        """Set the relative paths to leave out of the tarball."""
        self._ignored = {entry.strip(os.sep) for entry in ignore_list}

    def _should_ignore(self, rel_path: str) -> bool:
        return rel_path.strip(os.sep) in self._ignored

    def compress_files(self, files: Iterable[str]) -> str:
        """Archive the given files and return the tarball's path.

        Missing files are skipped with a warning; files that fail to be
        added are logged as errors.
        """
        for file in files:
            if not file:
                continue
            try:
                st = os.stat(file)
            except FileNotFoundError:
                _log.warning("file not found, not including on tarball: %s", file)
                continue
            except OSError as err:
                _log.error("failed to add file into archive: %s", err)
                continue
            try:
                self._add(file, st)
            except OSError as err:
                _log.error("failed to add file into archive: %s", err)
        return self._finish()

    def compress_folder(self, directory: str) -> str:
        """Archive everything under directory and return the tarball's path."""
        self._source_dir = directory
        try:
            for path in _walk(directory):
                self._add(path, os.lstat(path))
        except BaseException:
            self._tar.close()
            self._file.close()
            raise
        return self._finish()

    def _finish(self) -> str:
        self._tar.close()
        self._file.flush()
        os.fsync(self._file.fileno())
        self._file.close()
        return self._file.name

    def _add(self, path: str, st: os.stat_result) -> None:
        if stat.S_ISLNK(st.st_mode):
            return

        rel_path = path.removeprefix(self._source_dir)
        if rel_path in ("", "/"):
            return
        if self._should_ignore(rel_path):
            return

        name = rel_path.removeprefix("/")
        if stat.S_ISDIR(st.st_mode):
            info = self._tar.gettarinfo(os.path.realpath(path), arcname=name)
            self._tar.addfile(info)
        elif stat.S_ISREG(st.st_mode):
            with open(path, "rb") as fh:
                info = self._tar.gettarinfo(arcname=name, fileobj=fh)
                self._tar.addfile(info, fh)
        else:
            raise OSError(f"unsupported file type: {path}")


def new_temp() -> TarGz:
    """Return a TarGz writing into a new temporary .tgz file."""
    fileobj = tempfile.NamedTemporaryFile(suffix=".tgz", delete=False)
    return TarGz(fileobj)
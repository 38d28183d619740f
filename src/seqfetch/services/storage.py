"""Storage service for downloaded records."""

import posixpath
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

from seqfetch.config import StorageSettings
from seqfetch.core.exceptions import StorageError, UnsafePathError
from seqfetch.models import MoleculeType


@dataclass(frozen=True)
class OutputLocation:
    """Where one job's record goes."""
    filename: str      # relative, reported back in the callback
    directory: Path    # per-job directory on disk
    path: Path         # record file on disk


class StorageService:
    """Service for laying out and writing per-job record files."""

    def __init__(self, storage: StorageSettings):
        self.base_path = storage.output_dir
        self.chunk_size = storage.chunk_size

    def record_filename(
        self,
        callback_id: str | None,
        accession: str | None,
        molecule_type: MoleculeType,
    ) -> str:
        """
        `{callback_id}/{accession}{extension}`, normalised like a path join.

        Raises:
            UnsafePathError: the inputs would address a file outside the
                output directory (absolute path, `..` segment, NUL byte)
        """
        raw = posixpath.join(callback_id or "", f"{accession or ''}{molecule_type.extension}")
        if "\x00" in raw or posixpath.isabs(raw) or ".." in raw.split("/"):
            raise UnsafePathError(raw)
        return posixpath.normpath(raw)

    def locate(
        self,
        callback_id: str | None,
        accession: str | None,
        molecule_type: MoleculeType,
    ) -> OutputLocation:
        """
        Resolve a job's filename to its directory and file on disk.

        Blocking: resolves symlinks through the filesystem.
        """
        filename = self.record_filename(callback_id, accession, molecule_type)
        directory = self.base_path / posixpath.normpath(callback_id or ".")
        path = self.base_path / filename

        # Symlinks inside the tree must not lead out of it either
        root = self.base_path.resolve()
        if not path.resolve().is_relative_to(root):
            raise UnsafePathError(filename)

        return OutputLocation(filename=filename, directory=directory, path=path)

    async def ensure_directory(self, directory: Path) -> None:
        """Create `directory` and any missing parents."""
        try:
            await aiofiles.os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Failed to create directory: {e}", str(directory)) from e

    @asynccontextmanager
    async def open_output(self, path: Path) -> AsyncIterator[Any]:
        """Create or truncate `path` for binary writing."""
        try:
            out = await aiofiles.open(path, "wb")
        except OSError as e:
            raise StorageError(f"Failed to create file: {e}", str(path)) from e

        try:
            yield out
        finally:
            await out.close()


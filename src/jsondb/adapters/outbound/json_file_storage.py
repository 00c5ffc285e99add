"""File-based table storage adapter.

Implements TableStorage using one JSON file per table in a data directory.

Directory structure:
    data_dir/
        users.json
        orders.json

File format:
    {"columns": [{"name": ..., "type": ...}, ...], "data": [{...}, ...]}

Durability:
    Every save writes the full document to a temporary file in the same
    directory, fsyncs it, then atomically replaces the table file and
    fsyncs the directory. A crash at any point leaves either the old or
    the new file, never a partial one.

Usage:
    storage = JsonFileTableStorage("/path/to/data")
    storage.save("users", Table(columns=[Column("name", "string")]))
    table = storage.load("users")
"""

from __future__ import annotations

import json
import os
import stat
import tempfile
from pathlib import Path

from jsondb.domain.entities import Table
from jsondb.infrastructure.logging import get_logger
from jsondb.infrastructure.metrics import MetricsRegistry
from jsondb.ports.inbound.table_store import CorruptTableError

TABLE_SUFFIX = ".json"

logger = get_logger(__name__)


class JsonFileTableStorage:
    """File-based implementation of TableStorage.

    Attributes:
        data_dir: Directory holding the table files.
    """

    def __init__(
        self,
        data_dir: str | Path,
        sync: bool = True,
        indent: int | None = 2,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize file storage.

        Args:
            data_dir: Directory for table files, created if missing.
            sync: fsync file and directory on every write.
            indent: JSON indentation of table files.
            metrics: Optional metrics registry for write counters.
        """
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._sync = sync
        self._indent = indent
        self._metrics = metrics

        # mkstemp creates 0600 files; new tables get the umask default instead
        umask = os.umask(0)
        os.umask(umask)
        self._new_file_mode = 0o666 & ~umask

    @property
    def data_dir(self) -> Path:
        """Root data directory."""
        return self._data_dir

    def table_path(self, name: str) -> Path:
        """Get the file path for a table."""
        return self._data_dir / f"{name}{TABLE_SUFFIX}"

    def exists(self, name: str) -> bool:
        return self.table_path(name).is_file()

    def load(self, name: str) -> Table | None:
        """Load a table from disk.

        Returns:
            The table, or None if no file exists.

        Raises:
            CorruptTableError: If the file is not a valid table document.
        """
        path = self.table_path(name)
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

        try:
            return Table.from_document(json.loads(raw))
        except ValueError as e:
            logger.error("table_file_corrupt", table=name, path=str(path), error=str(e))
            raise CorruptTableError(name, str(e)) from e

    def save(self, name: str, table: Table) -> None:
        """Atomically replace a table file with the given state.

        Serialization happens before anything touches the disk, so a value
        that cannot be encoded leaves the existing file untouched.

        Raises:
            TypeError: If a record holds a value JSON cannot encode.
            OSError: If the write or replace fails.
        """
        payload = json.dumps(table.to_document(), indent=self._indent, ensure_ascii=False)
        data = payload.encode("utf-8")
        path = self.table_path(name)

        # Leading dot keeps temp files out of list_names()
        fd, tmp_name = tempfile.mkstemp(
            dir=self._data_dir, prefix=f".{name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
                f.flush()
                if self._sync:
                    os.fsync(f.fileno())
            os.chmod(tmp_name, self._file_mode(path))
            os.replace(tmp_name, path)
        except BaseException:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
            raise

        self._sync_directory()

        if self._metrics is not None:
            self._metrics.table_writes_total.inc()
            self._metrics.table_bytes_written_total.inc(len(data))
        logger.debug("table_file_written", table=name, bytes=len(data))

    def delete(self, name: str) -> bool:
        """Delete a table file.

        Returns:
            True if deleted, False if not found.
        """
        try:
            self.table_path(name).unlink()
        except FileNotFoundError:
            return False
        self._sync_directory()
        return True

    def list_names(self) -> list[str]:
        """List table names, sorted."""
        return sorted(
            path.stem
            for path in self._data_dir.glob(f"*{TABLE_SUFFIX}")
            if path.is_file() and not path.name.startswith(".")
        )

    def _file_mode(self, path: Path) -> int:
        """Permission bits for a rewrite of ``path``: kept if it exists."""
        try:
            return stat.S_IMODE(path.stat().st_mode)
        except FileNotFoundError:
            return self._new_file_mode

    def _sync_directory(self) -> None:
        """Persist the directory entry after a replace or unlink."""
        if not self._sync or not hasattr(os, "O_DIRECTORY"):
            return
        dir_fd = os.open(self._data_dir, os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        finally:
            os.close(dir_fd)

    def __len__(self) -> int:
        """Number of stored tables."""
        return len(self.list_names())

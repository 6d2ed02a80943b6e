"""Asynchronous output-file helpers.

Blocking filesystem calls run in a worker thread via :func:`asyncio.to_thread`
so a generation job suspends at every directory creation and file write
instead of stalling the event loop. Each write is atomic on its own; there is
no rollback across files.
"""

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path
from typing import Optional

from discogen.exceptions import OutputWriteError


async def ensure_dir(path: Path) -> None:
    """Create *path* and any missing parents.

    Raises:
        OutputWriteError: If the directory cannot be created.
    """
    try:
        await asyncio.to_thread(path.mkdir, parents=True, exist_ok=True)
    except OSError as exc:
        raise OutputWriteError(f"Cannot create directory {path}: {exc}") from exc


async def write_text(path: Path, data: str) -> None:
    """Write *data* to *path* atomically.

    Raises:
        OutputWriteError: If the file cannot be written.
    """
    try:
        await asyncio.to_thread(_atomic_write, path, data)
    except OSError as exc:
        raise OutputWriteError(f"Cannot write {path}: {exc}") from exc


def _atomic_write(path: Path, data: str) -> None:
    """Write data to file atomically using temp file + rename.

    The temporary file is created in the same directory as *path* so that
    ``os.replace`` is guaranteed to be an atomic rename on POSIX systems.
    On any failure the temp file is cleaned up.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd = None
    tmp_path: Optional[str] = None
    try:
        fd = tempfile.NamedTemporaryFile(
            mode="w",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
            encoding="utf-8",
        )
        tmp_path = fd.name
        fd.write(data)
        fd.flush()
        fd.close()
        fd = None  # prevent double-close below
        os.replace(tmp_path, path)
    except BaseException:
        if fd is not None:
            fd.close()
        if tmp_path is not None:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
        raise

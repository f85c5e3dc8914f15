"""File I/O operations for rendering."""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path

from ..errors import ConfigWriteError

logger = logging.getLogger(__name__)


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def read_existing(path: Path) -> str | None:
    """Return the current file contents, or None when the file is absent.

    Line endings are returned untranslated so CRLF content differs from LF.
    """
    if not path.exists():
        return None
    try:
        with path.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigWriteError(f"Cannot read {path}: {e}") from e


def atomic_write_text(
    path: Path,
    text: str,
    mode: int = 0o644,
    owner: str | None = None,
    group: str | None = None,
) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        mode: File permissions (octal)
        owner: User to own the file, unchanged when None
        group: Group to own the file, unchanged when None

    Raises:
        ConfigWriteError: The file cannot be written, or owner/group is unknown
    """
    tmp_name = None
    try:
        ensure_parent(path)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_name, mode)
        if owner is not None or group is not None:
            shutil.chown(tmp_name, user=owner, group=group)
        os.replace(tmp_name, path)
    except (OSError, LookupError) as e:
        raise ConfigWriteError(f"Cannot write {path}: {e}") from e
    finally:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.remove(tmp_name)


def write_if_changed(
    path: Path,
    text: str,
    mode: int = 0o644,
    owner: str | None = None,
    group: str | None = None,
) -> bool:
    """Write ``text`` to ``path`` unless the file already holds it.

    Returns:
        True when the file was written
    """
    if read_existing(path) == text:
        logger.debug(f"{path} is up to date")
        return False

    atomic_write_text(path, text, mode=mode, owner=owner, group=group)
    logger.info(f"Updated {path}")
    return True

"""Filesystem helpers for staged uploads."""

from __future__ import annotations

import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)


def sanitize_filename(name: str) -> str:
    """Return ``name`` transformed into a filesystem-safe slug, keeping its extension."""

    path = Path(name or "")
    stem = re.sub(r"[^A-Za-z0-9_-]+", "_", path.stem.strip()).strip("_") or "upload"
    suffix = re.sub(r"[^A-Za-z0-9.]+", "", path.suffix)
    return f"{stem}{suffix}"


def remove_file_safely(path: Path | None) -> None:
    """Delete ``path`` if it exists; failures are logged, never raised."""

    if path is None:
        return
    try:
        path.unlink()
    except FileNotFoundError:
        pass
    except OSError as exc:
        logger.warning("Could not delete file %s: %s", path, exc)

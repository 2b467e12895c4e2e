"""Replace-on-write helper for the config file."""

from __future__ import annotations

import os
from pathlib import Path
from tempfile import NamedTemporaryFile


def atomic_write(path: Path, content: str, *, encoding: str = "utf-8") -> None:
    """Write ``content`` to ``path`` through a sibling temp file.

    Readers see either the old file or the complete new one. A file that
    already exists keeps its permission bits.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    mode = path.stat().st_mode & 0o777 if path.exists() else None

    staged = NamedTemporaryFile(
        "w",
        encoding=encoding,
        dir=path.parent,
        prefix=f".{path.name}.",
        suffix=".part",
        delete=False,
    )
    staged_path = Path(staged.name)
    try:
        with staged:
            staged.write(content)
            staged.flush()
            os.fsync(staged.fileno())
        if mode is not None:
            staged_path.chmod(mode)
        staged_path.replace(path)
    except Exception:
        staged_path.unlink(missing_ok=True)
        raise

from __future__ import annotations

import asyncio
import os
import tempfile
from pathlib import Path

import aiofiles
from loguru import logger


async def atomic_write(path: Path, content: str) -> None:
    """Replace ``path`` with ``content`` via a sibling temp file and rename.

    Readers see either the old or the new document, never a partial one.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    fd, temp_path_str = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.stem}_",
        suffix=".tmp",
    )
    temp_path = Path(temp_path_str)

    try:
        async with aiofiles.open(fd, mode="w", encoding="utf-8", closefd=True) as f:
            await f.write(content)
        # os.replace also overwrites an existing target on Windows.
        await asyncio.to_thread(os.replace, temp_path, path)
        logger.debug("Wrote {}", path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise


async def read_text(path: Path) -> str | None:
    """File contents, or None if the file does not exist."""
    try:
        async with aiofiles.open(path, encoding="utf-8") as f:
            return await f.read()
    except FileNotFoundError:
        return None

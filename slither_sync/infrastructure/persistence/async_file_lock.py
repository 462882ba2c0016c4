"""Cross-process lock usable from async code.

Acquiring a filelock.FileLock blocks, so it is done in a worker thread to
keep the event loop responsive.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from filelock import FileLock


@asynccontextmanager
async def async_file_lock(lock_path: Path, timeout_s: float = 30.0) -> AsyncIterator[None]:
    """Hold ``lock_path`` for the duration of the block.

    Raises filelock.Timeout if the lock is not acquired within ``timeout_s``.
    """
    lock_path.parent.mkdir(parents=True, exist_ok=True)
    lock = FileLock(lock_path, timeout=timeout_s)

    await asyncio.to_thread(lock.acquire)
    try:
        yield
    finally:
        await asyncio.to_thread(lock.release)

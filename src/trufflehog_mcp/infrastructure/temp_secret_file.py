"""
Temporary file lifecycle for handing a literal secret to the engine.

The engine only reads secrets from scan targets, so verification writes
the secret to an owner-only file with an unguessable name and removes it
when the scan is done, whatever the outcome.
"""

import asyncio
import logging
import os
import secrets
import tempfile
import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "trufflehog-verify-"
DEFAULT_SUFFIX = ".txt"

# Owner read/write only
_FILE_MODE = 0o600


@dataclass(frozen=True)
class TempSecretFile:
    """
    A temporary file holding one secret.

    Attributes:
        path: Absolute path of the file.
        created_at: Wall-clock creation time.
    """

    path: str
    created_at: float


def _create(secret: str, directory: str, prefix: str, suffix: str) -> TempSecretFile:
    name = f"{prefix}{secrets.token_hex(16)}{suffix}"
    path = os.path.join(directory, name)
    # O_EXCL refuses to follow a pre-planted file or symlink at that name
    fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, _FILE_MODE)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(secret)
    except BaseException:
        _remove(path)
        raise
    return TempSecretFile(path=path, created_at=time.time())


def _remove(path: str) -> None:
    try:
        os.unlink(path)
    except OSError as e:
        logger.debug(f"Failed to remove temporary secret file {path}: {e}")


@asynccontextmanager
async def temp_secret_file(
    secret: str,
    prefix: str = DEFAULT_PREFIX,
    directory: Optional[str | Path] = None,
    suffix: str = DEFAULT_SUFFIX,
) -> AsyncIterator[TempSecretFile]:
    """
    Write a secret to a private temporary file for the duration of a block.

    Exactly one deletion attempt is made when the block exits, on success
    and on error alike. A failed deletion is logged and never replaces the
    block's own result or exception.

    Args:
        secret: Content to write; the file holds nothing else.
        prefix: Fixed filename prefix.
        directory: Parent directory (defaults to the platform temp dir).
        suffix: Filename suffix.

    Yields:
        TempSecretFile describing the created file.
    """
    parent = str(directory) if directory else tempfile.gettempdir()
    handle = await asyncio.to_thread(_create, secret, parent, prefix, suffix)
    try:
        yield handle
    finally:
        await asyncio.to_thread(_remove, handle.path)

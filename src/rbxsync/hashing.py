"""Content fingerprints for change detection."""

from __future__ import annotations

import hashlib
from pathlib import Path


def content_hash(content: bytes) -> str:
    """Return the SHA-256 hex digest of *content*."""
    return hashlib.sha256(content).hexdigest()


def file_hash(path: Path, *, chunk_size: int = 65536) -> str:
    """Return the SHA-256 hex digest of the file at *path*.

    The file name plays no part in the digest, so identical bytes stored under
    different names hash the same.
    """
    hasher = hashlib.sha256()
    with open(path, "rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)
    return hasher.hexdigest()

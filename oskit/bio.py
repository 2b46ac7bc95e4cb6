"""Block-level access to the disk image that backs the file system."""

from __future__ import annotations

import os

from oskit.errors import BfsError, ErrorCode

BYTES_PER_BLOCK = 512
BLOCKS_PER_DISK = 100
BYTES_PER_DISK = BYTES_PER_BLOCK * BLOCKS_PER_DISK


class BlockDevice:
    """A disk image file read and written one whole block at a time."""

    def __init__(self, path: str | os.PathLike = "BFSDISK"):
        self.path = os.fspath(path)

    def _open(self):
        try:
            return open(self.path, "rb+")
        except OSError:
            raise BfsError(ErrorCode.ENODISK, self.path) from None

    def read_block(self, dbn: int) -> bytes:
        """Return the block numbered ``dbn``."""
        if dbn < 0 or dbn > BLOCKS_PER_DISK:
            raise BfsError(ErrorCode.EBADDBN, str(dbn))
        with self._open() as disk:
            disk.seek(dbn * BYTES_PER_BLOCK)
            data = disk.read(BYTES_PER_BLOCK)
        if len(data) != BYTES_PER_BLOCK:
            raise BfsError(ErrorCode.EBADREAD, f"block {dbn}")
        return data

    def write_block(self, dbn: int, data) -> None:
        """Write exactly one block of ``data`` at block number ``dbn``."""
        if dbn < 0:
            raise BfsError(ErrorCode.EBADDBN, str(dbn))
        payload = bytes(data)
        if len(payload) != BYTES_PER_BLOCK:
            raise BfsError(
                ErrorCode.EBADWRITE,
                f"block must be {BYTES_PER_BLOCK} bytes, got {len(payload)}",
            )
        with self._open() as disk:
            disk.seek(dbn * BYTES_PER_BLOCK)
            disk.write(payload)
"""User-level file API over the block file system: format, open, read, write, seek."""

from __future__ import annotations

import os
from enum import IntEnum

from oskit.bfs import Bfs, fd_to_inum, inum_to_fd
from oskit.bio import BYTES_PER_BLOCK, BlockDevice
from oskit.errors import BfsError, ErrorCode


class Whence(IntEnum):
    """Reference point for a seek."""

    SET = os.SEEK_SET
    CUR = os.SEEK_CUR
    END = os.SEEK_END


class FileSystem:
    """Files stored in a disk image, addressed through file descriptors."""

    def __init__(self, path: str | os.PathLike = "BFSDISK"):
        self.path = os.fspath(path)
        self.device = BlockDevice(self.path)
        self.bfs = Bfs(self.device)

    def format(self) -> None:
        """Create a fresh disk: super block, inodes, directory and free list."""
        try:
            with open(self.path, "wb"):
                pass
        except OSError:
            raise BfsError(ErrorCode.EDISKCREATE, self.path) from None
        self.bfs.init_super()
        self.bfs.init_inodes()
        self.bfs.init_dir()
        self.bfs.init_free_list()
        self.bfs.init_oft()

    def mount(self) -> None:
        """Check that the disk image exists."""
        if not os.path.isfile(self.path):
            raise BfsError(ErrorCode.ENODISK, self.path)

    def create(self, fname: str) -> int:
        """Create the file ``fname`` and return its file descriptor."""
        return inum_to_fd(self.bfs.create_file(fname))

    def open(self, fname: str) -> int:
        """Open the existing file ``fname`` and return its file descriptor."""
        return inum_to_fd(self.bfs.lookup_file(fname))

    def close(self, fd: int) -> None:
        """Close the file open on ``fd``."""
        self.bfs.deref_oft(fd_to_inum(fd))

    def tell(self, fd: int) -> int:
        """Return the cursor of the file open on ``fd``."""
        return self.bfs.tell(fd)

    def size(self, fd: int) -> int:
        """Return the size in bytes of the file open on ``fd``."""
        return self.bfs.get_size(fd_to_inum(fd))

    def seek(self, fd: int, offset: int, whence=Whence.SET) -> int:
        """Move the cursor of ``fd`` and return its new position."""
        if offset < 0:
            raise BfsError(ErrorCode.EBADCURS, str(offset))
        try:
            mode = Whence(whence)
        except ValueError:
            raise BfsError(ErrorCode.EBADWHENCE, str(whence)) from None
        inum = fd_to_inum(fd)
        if mode is Whence.SET:
            cursor = offset
        elif mode is Whence.CUR:
            cursor = self.tell(fd) + offset
        else:
            cursor = self.size(fd) + offset
        self.bfs.set_cursor(inum, cursor)
        return cursor

    def read(self, fd: int, numb: int) -> bytes:
        """Read up to ``numb`` bytes from the cursor; fewer are returned at end of file."""
        size = self.size(fd)
        if numb <= 0:
            raise BfsError(ErrorCode.ENEGNUMB, str(numb))
        if numb > size:
            raise BfsError(ErrorCode.EBIGNUMB, f"{numb} bytes from a file of {size}")
        inum = fd_to_inum(fd)
        cursor = self.tell(fd)
        count = min(numb, size - cursor)
        if count <= 0:
            return b""
        first = cursor // BYTES_PER_BLOCK
        last = (cursor + count - 1) // BYTES_PER_BLOCK
        data = b"".join(self.bfs.read(inum, fbn) for fbn in range(first, last + 1))
        start = cursor % BYTES_PER_BLOCK
        self.bfs.set_cursor(inum, cursor + count)
        return data[start:start + count]

    def write(self, fd: int, data) -> int:
        """Write ``data`` at the cursor, growing the file as needed; return its length."""
        payload = bytes(data)
        if not payload:
            raise BfsError(ErrorCode.ENEGNUMB, "0")
        inum = fd_to_inum(fd)
        cursor = self.tell(fd)
        written = 0
        while written < len(payload):
            fbn, offset = divmod(cursor, BYTES_PER_BLOCK)
            dbn = self.bfs.fbn_to_dbn(inum, fbn)
            if dbn is None:
                dbn = self.bfs.alloc_block(inum, fbn)
                block = bytearray(BYTES_PER_BLOCK)
            else:
                block = bytearray(self.device.read_block(dbn))
            take = min(BYTES_PER_BLOCK - offset, len(payload) - written)
            block[offset:offset + take] = payload[written:written + take]
            self.device.write_block(dbn, block)
            written += take
            cursor += take
            self.bfs.set_cursor(inum, cursor)
        if cursor > self.bfs.get_size(inum):
            self.bfs.set_size(inum, cursor)
        return written
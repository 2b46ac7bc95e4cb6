"""On-disk layout and block-level bookkeeping of the block file system.

The disk holds a super block (block 0), the inode table (block 1), the
directory (block 2) and data blocks chained into a free list.  A small open
file table tracks references and cursors of files in use.
"""

from __future__ import annotations

import struct
from dataclasses import dataclass, field

from oskit.bio import BLOCKS_PER_DISK, BYTES_PER_BLOCK, BlockDevice
from oskit.errors import BfsError, ErrorCode

I16_PER_BLOCK = BYTES_PER_BLOCK // 2
NUM_INODES = 8
MAX_INUM = NUM_INODES - 1
NUM_META = 3
MIN_DBN = 3
NUM_DIRECT = 5
NUM_INDIRECT = BYTES_PER_BLOCK // 2
FNAME_SIZE = 16

DBN_SUPER = 0
DBN_INODES = 1
DBN_DIR = 2

INUM_TO_FD = 5
NUM_OFT_ENTRIES = 20

_SUPER_FORMAT = struct.Struct("<hhh")
_INODE_FORMAT = struct.Struct(f"<i{NUM_DIRECT}hh")
_INDIRECT_FORMAT = struct.Struct(f"<{NUM_INDIRECT}h")
_LINK_FORMAT = struct.Struct("<h")

SUPER_SIZE = _SUPER_FORMAT.size
INODE_SIZE = _INODE_FORMAT.size


def _pad(data: bytes) -> bytes:
    return data + bytes(BYTES_PER_BLOCK - len(data))


@dataclass
class Super:
    """The super block: disk geometry and the head of the free list."""

    num_blocks: int = BLOCKS_PER_DISK
    num_inodes: int = NUM_INODES
    first_free: int = NUM_META

    def pack(self) -> bytes:
        """Return the on-disk bytes of the super block record."""
        return _SUPER_FORMAT.pack(self.num_blocks, self.num_inodes, self.first_free)

    @classmethod
    def unpack(cls, data) -> "Super":
        """Build a super block from the start of ``data``."""
        return cls(*_SUPER_FORMAT.unpack_from(bytes(data)))


@dataclass
class Inode:
    """A file's size and the block numbers that hold its data."""

    size: int = 0
    direct: list[int] = field(default_factory=lambda: [0] * NUM_DIRECT)
    indirect: int = 0

    def pack(self) -> bytes:
        """Return the on-disk bytes of this inode."""
        if len(self.direct) != NUM_DIRECT:
            raise ValueError(f"an inode has exactly {NUM_DIRECT} direct blocks")
        return _INODE_FORMAT.pack(self.size, *self.direct, self.indirect)

    @classmethod
    def unpack(cls, data) -> "Inode":
        """Build an inode from the start of ``data``."""
        values = _INODE_FORMAT.unpack_from(bytes(data))
        return cls(values[0], list(values[1:1 + NUM_DIRECT]), values[-1])


@dataclass
class OpenFileEntry:
    """One slot of the open file table; ``inum`` 0 marks an unused slot."""

    inum: int = 0
    refs: int = 0
    curs: int = 0


def fd_to_inum(fd: int) -> int:
    """Convert a user-visible file descriptor to an inode number."""
    inum = fd - INUM_TO_FD
    if inum < 0:
        raise BfsError(ErrorCode.EBADINUM, f"fd {fd}")
    return inum


def inum_to_fd(inum: int) -> int:
    """Convert an inode number to a user-visible file descriptor."""
    return inum + INUM_TO_FD


def _check_inum(inum: int) -> None:
    if inum < 0 or inum > MAX_INUM:
        raise BfsError(ErrorCode.EBADINUM, str(inum))


def _check_fbn(fbn: int) -> None:
    if fbn < 0 or fbn >= NUM_DIRECT + NUM_INDIRECT:
        raise BfsError(ErrorCode.EBADFBN, str(fbn))


class Bfs:
    """Block bookkeeping over a disk image: inodes, directory, free list, OFT."""

    def __init__(self, device: BlockDevice):
        self.device = device
        self.oft: list[OpenFileEntry] = []
        self.init_oft()

    # -- initialisation -------------------------------------------------

    def init_super(self) -> None:
        """Write a fresh super block."""
        self.device.write_block(DBN_SUPER, _pad(Super().pack()))

    def init_inodes(self) -> None:
        """Write an all-zero inode table."""
        self.device.write_block(DBN_INODES, bytes(BYTES_PER_BLOCK))

    def init_dir(self) -> None:
        """Write an empty directory."""
        self.device.write_block(DBN_DIR, bytes(BYTES_PER_BLOCK))

    def init_free_list(self) -> None:
        """Chain every data block into the free list, ending with 0."""
        for dbn in range(NUM_META, BLOCKS_PER_DISK - 1):
            self.device.write_block(dbn, _pad(_LINK_FORMAT.pack(dbn + 1)))
        self.device.write_block(BLOCKS_PER_DISK - 1, bytes(BYTES_PER_BLOCK))

    def init_oft(self) -> None:
        """Empty the open file table."""
        self.oft = [OpenFileEntry() for _ in range(NUM_OFT_ENTRIES)]

    # -- super block and free list ---------------------------------------

    def _read_super(self) -> Super:
        return Super.unpack(self.device.read_block(DBN_SUPER))

    def _write_super(self, sb: Super) -> None:
        block = bytearray(self.device.read_block(DBN_SUPER))
        block[:SUPER_SIZE] = sb.pack()
        self.device.write_block(DBN_SUPER, block)

    def find_free_block(self) -> int:
        """Take the head of the free list and return its block number."""
        sb = self._read_super()
        dbn = sb.first_free
        if dbn == 0:
            raise BfsError(ErrorCode.EDISKFULL)
        (sb.first_free,) = _LINK_FORMAT.unpack_from(self.device.read_block(dbn))
        self._write_super(sb)
        return dbn

    # -- inodes ----------------------------------------------------------

    def read_inode(self, inum: int) -> Inode:
        """Return the inode numbered ``inum``."""
        _check_inum(inum)
        block = self.device.read_block(DBN_INODES)
        return Inode.unpack(block[inum * INODE_SIZE:(inum + 1) * INODE_SIZE])

    def write_inode(self, inum: int, inode: Inode) -> None:
        """Store ``inode`` as inode number ``inum``."""
        _check_inum(inum)
        if inode is None:
            raise BfsError(ErrorCode.ENULLPTR)
        block = bytearray(self.device.read_block(DBN_INODES))
        block[inum * INODE_SIZE:(inum + 1) * INODE_SIZE] = inode.pack()
        self.device.write_block(DBN_INODES, block)

    def get_size(self, inum: int) -> int:
        """Return the size in bytes of file ``inum``."""
        return self.read_inode(inum).size

    def set_size(self, inum: int, size: int) -> None:
        """Set the size in bytes of file ``inum``."""
        inode = self.read_inode(inum)
        inode.size = size
        self.write_inode(inum, inode)

    # -- block mapping ---------------------------------------------------

    def _new_indirect_block(self) -> int:
        dbn = self.find_free_block()
        self.device.write_block(dbn, bytes(BYTES_PER_BLOCK))
        return dbn

    def _read_indirect(self, dbn: int) -> list[int]:
        return list(_INDIRECT_FORMAT.unpack(self.device.read_block(dbn)))

    def alloc_block(self, inum: int, fbn: int) -> int:
        """Give file ``inum`` a free block as its block ``fbn``; return its DBN."""
        _check_inum(inum)
        _check_fbn(fbn)
        dbn = self.find_free_block()
        inode = self.read_inode(inum)
        if fbn < NUM_DIRECT:
            inode.direct[fbn] = dbn
            self.write_inode(inum, inode)
            return dbn
        if inode.indirect == 0:
            inode.indirect = self._new_indirect_block()
            self.write_inode(inum, inode)
        table = self._read_indirect(inode.indirect)
        table[fbn - NUM_DIRECT] = dbn
        self.device.write_block(inode.indirect, _INDIRECT_FORMAT.pack(*table))
        return dbn

    def fbn_to_dbn(self, inum: int, fbn: int) -> int | None:
        """Return the DBN holding block ``fbn`` of file ``inum``, or None if unmapped.

        Looking up an indirect block number for a file that has no indirect
        block yet gives it an empty one.
        """
        _check_inum(inum)
        _check_fbn(fbn)
        inode = self.read_inode(inum)
        if fbn < NUM_DIRECT:
            dbn = inode.direct[fbn]
            return dbn or None
        if inode.indirect == 0:
            inode.indirect = self._new_indirect_block()
            self.write_inode(inum, inode)
            return None
        dbn = self._read_indirect(inode.indirect)[fbn - NUM_DIRECT]
        return dbn or None

    def extend(self, inum: int, fbn: int) -> None:
        """Allocate blocks for file ``inum`` from its current end out to ``fbn``."""
        last = (self.get_size(inum) + 1) // BYTES_PER_BLOCK
        for f in range(last, fbn + 1):
            self.alloc_block(inum, f)

    def read(self, inum: int, fbn: int) -> bytes:
        """Return block ``fbn`` of file ``inum``."""
        _check_inum(inum)
        _check_fbn(fbn)
        dbn = self.fbn_to_dbn(inum, fbn)
        if dbn is None:
            raise BfsError(ErrorCode.ENODBN, f"inum {inum}, fbn {fbn}")
        return self.device.read_block(dbn)

    # -- directory -------------------------------------------------------

    def _read_dir(self) -> list[str]:
        block = self.device.read_block(DBN_DIR)
        names = []
        for inum in range(NUM_INODES):
            raw = block[inum * FNAME_SIZE:(inum + 1) * FNAME_SIZE]
            names.append(raw.split(b"\0", 1)[0].decode("utf-8", errors="replace"))
        return names

    def create_file(self, fname: str) -> int:
        """Give ``fname`` a free directory slot and return its inode number."""
        if fname is None:
            raise BfsError(ErrorCode.ENULLPTR)
        encoded = fname.encode("utf-8")
        if not encoded:
            raise ValueError("file name must not be empty")
        if len(encoded) > FNAME_SIZE - 1:
            raise BfsError(ErrorCode.EBIGFNAME, fname)
        for inum, name in enumerate(self._read_dir()):
            if not name:
                block = bytearray(self.device.read_block(DBN_DIR))
                block[inum * FNAME_SIZE:(inum + 1) * FNAME_SIZE] = encoded.ljust(
                    FNAME_SIZE, b"\0"
                )
                self.device.write_block(DBN_DIR, block)
                self.ref_oft(inum)
                return inum
        raise BfsError(ErrorCode.EDIRFULL)

    def lookup_file(self, fname: str) -> int:
        """Return the inode number of ``fname``, referencing it in the OFT."""
        if fname is None:
            raise BfsError(ErrorCode.ENULLPTR)
        if fname:
            for inum, name in enumerate(self._read_dir()):
                if name == fname:
                    self.ref_oft(inum)
                    return inum
        raise BfsError(ErrorCode.EFNF, fname)

    # -- open file table -------------------------------------------------

    def find_oft_entry(self, inum: int) -> int:
        """Return the OFT index for ``inum``, claiming a free slot if needed."""
        for index, entry in enumerate(self.oft):
            if entry.inum == inum:
                return index
        for index, entry in enumerate(self.oft):
            if entry.inum == 0:
                self.oft[index] = OpenFileEntry(inum=inum, refs=1, curs=0)
                return index
        raise BfsError(ErrorCode.EOFTFULL)

    def ref_oft(self, inum: int) -> None:
        """Add a reference to ``inum`` in the open file table."""
        self.oft[self.find_oft_entry(inum)].refs += 1

    def deref_oft(self, inum: int) -> None:
        """Drop a reference to ``inum``; free its slot when none remain."""
        entry = self.oft[self.find_oft_entry(inum)]
        entry.refs -= 1
        if entry.refs == 0:
            entry.inum = 0
            entry.curs = 0

    def set_cursor(self, inum: int, cursor: int) -> None:
        """Set the cursor of open file ``inum``."""
        _check_inum(inum)
        self.oft[self.find_oft_entry(inum)].curs = cursor

    def tell(self, fd: int) -> int:
        """Return the cursor of the file open on descriptor ``fd``."""
        return self.oft[self.find_oft_entry(fd_to_inum(fd))].curs
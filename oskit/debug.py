"""Text dumps of disk blocks and file system metadata, for debugging."""

from __future__ import annotations

import struct

from oskit.bfs import (
    DBN_DIR,
    DBN_INODES,
    DBN_SUPER,
    FNAME_SIZE,
    INODE_SIZE,
    NUM_DIRECT,
    NUM_INODES,
    SUPER_SIZE,
    Inode,
    Super,
)
from oskit.bio import BYTES_PER_BLOCK, BlockDevice

_WORDS = {2: ("<H", 4, 8), 4: ("<I", 8, 4)}


def _printable(byte: int) -> str:
    return chr(byte) if 32 <= byte < 127 else "."


def dump_block(device: BlockDevice, dbn: int, size: int) -> str:
    """Dump block ``dbn`` as bytes (size 1), 16-bit (2) or 32-bit (4) words in hex."""
    if size not in (1, 2, 4):
        raise ValueError("size must be 1, 2 or 4")
    block = device.read_block(dbn)
    lines = []
    if size == 1:
        for start in range(0, BYTES_PER_BLOCK, 16):
            row = block[start:start + 16]
            lines.append(
                "".join(f"{byte:02x} " for byte in row)
                + "".join(_printable(byte) for byte in row)
            )
    else:
        fmt, width, per_line = _WORDS[size]
        words = [value for (value,) in struct.iter_unpack(fmt, block)]
        for start in range(0, len(words), per_line):
            lines.append(
                "".join(f"{word:0{width}x} " for word in words[start:start + per_line])
            )
    return "\n" + "\n".join(lines) + "\n"


def dump_dir(device: BlockDevice) -> str:
    """Dump the directory: one line per inode number with its file name."""
    block = device.read_block(DBN_DIR)
    lines = ["\n"]
    for inum in range(NUM_INODES):
        raw = block[inum * FNAME_SIZE:(inum + 1) * FNAME_SIZE]
        name = raw.split(b"\0", 1)[0].decode("utf-8", errors="replace")
        lines.append(f"[{inum:02d}]  {name} \n")
    lines.append("\n")
    return "".join(lines)


def dump_inodes(device: BlockDevice) -> str:
    """Dump every inode: its size, direct block numbers and indirect block."""
    block = device.read_block(DBN_INODES)
    lines = ["\n"]
    for inum in range(NUM_INODES):
        inode = Inode.unpack(block[inum * INODE_SIZE:(inum + 1) * INODE_SIZE])
        lines.append(f"[{inum}] size = {inode.size} \n")
        for d in range(NUM_DIRECT):
            lines.append(f"    [{inum}] direct[{d}] = {inode.direct[d]} \n")
        lines.append(f"        indirect  = {inode.indirect} \n")
    lines.append("\n")
    return "".join(lines)


def dump_super(device: BlockDevice) -> str:
    """Dump the super block and report any non-zero bytes after its record."""
    block = device.read_block(DBN_SUPER)
    sb = Super.unpack(block)
    lines = [
        "\n",
        f"Super.numBlocks = {sb.num_blocks} \n",
        f"Super.numInodes = {sb.num_inodes} \n",
        f"Super.firstFree = {sb.first_free} \n",
        "\n",
    ]
    lines.extend(
        f"Super[{offset}] == {byte:02x}, should be 0x00 \n"
        for offset, byte in enumerate(block)
        if offset >= SUPER_SIZE and byte != 0
    )
    return "".join(lines)
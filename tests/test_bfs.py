import pytest

from oskit.bfs import (
    FNAME_SIZE,
    NUM_DIRECT,
    NUM_INODES,
    NUM_META,
    NUM_OFT_ENTRIES,
    Bfs,
    Inode,
    Super,
    fd_to_inum,
    inum_to_fd,
)
from oskit.bio import BLOCKS_PER_DISK, BYTES_PER_BLOCK, BYTES_PER_DISK, BlockDevice
from oskit.errors import BfsError, ErrorCode


@pytest.fixture
def device(tmp_path):
    path = tmp_path / "BFSDISK"
    path.write_bytes(bytes(BYTES_PER_DISK))
    return BlockDevice(path)


@pytest.fixture
def bfs(device):
    fs = Bfs(device)
    fs.init_super()
    fs.init_inodes()
    fs.init_dir()
    fs.init_free_list()
    return fs


def test_super_pack_bytes_and_round_trip():
    sb = Super(BLOCKS_PER_DISK, NUM_INODES, NUM_META)
    assert sb.pack() == b"\x64\x00\x08\x00\x03\x00"
    assert Super.unpack(sb.pack()) == sb


def test_inode_round_trip():
    inode = Inode(size=1234, direct=[3, 4, 5, 6, 7], indirect=8)
    assert Inode.unpack(inode.pack()) == inode
    assert len(inode.pack()) == 16


def test_fresh_super_block(bfs, device):
    sb = Super.unpack(device.read_block(0))
    assert sb.num_blocks == BLOCKS_PER_DISK
    assert sb.num_inodes == NUM_INODES
    assert sb.first_free == NUM_META


def test_find_free_block_walks_free_list(bfs, device):
    assert bfs.find_free_block() == NUM_META
    assert bfs.find_free_block() == NUM_META + 1
    assert Super.unpack(device.read_block(0)).first_free == NUM_META + 2


def test_disk_full(bfs):
    taken = [bfs.find_free_block() for _ in range(BLOCKS_PER_DISK - NUM_META)]
    assert taken == list(range(NUM_META, BLOCKS_PER_DISK))
    with pytest.raises(BfsError) as excinfo:
        bfs.find_free_block()
    assert excinfo.value.code == ErrorCode.EDISKFULL


def test_create_and_lookup(bfs):
    first = bfs.create_file("P5")
    second = bfs.create_file("other")
    assert (first, second) == (0, 1)
    assert bfs.lookup_file("other") == second
    assert bfs.lookup_file("P5") == first


def test_lookup_missing(bfs):
    with pytest.raises(BfsError) as excinfo:
        bfs.lookup_file("absent")
    assert excinfo.value.code == ErrorCode.EFNF


def test_name_length_limit(bfs):
    longest = "n" * (FNAME_SIZE - 1)
    inum = bfs.create_file(longest)
    assert bfs.lookup_file(longest) == inum
    with pytest.raises(BfsError) as excinfo:
        bfs.create_file("n" * FNAME_SIZE)
    assert excinfo.value.code == ErrorCode.EBIGFNAME


def test_directory_full(bfs):
    inums = [bfs.create_file(f"f{i}") for i in range(NUM_INODES)]
    assert inums == list(range(NUM_INODES))
    with pytest.raises(BfsError) as excinfo:
        bfs.create_file("extra")
    assert excinfo.value.code == ErrorCode.EDIRFULL


def test_direct_block_mapping(bfs):
    inum = bfs.create_file("a")
    assert bfs.fbn_to_dbn(inum, 0) is None
    dbn = bfs.alloc_block(inum, 0)
    assert bfs.fbn_to_dbn(inum, 0) == dbn
    assert bfs.read_inode(inum).direct[0] == dbn


def test_indirect_mapping_via_lookup(bfs):
    inum = bfs.create_file("a")
    assert bfs.fbn_to_dbn(inum, NUM_DIRECT) is None
    indirect = bfs.read_inode(inum).indirect
    assert indirect >= NUM_META
    dbn = bfs.alloc_block(inum, NUM_DIRECT)
    assert dbn != indirect
    assert bfs.fbn_to_dbn(inum, NUM_DIRECT) == dbn
    assert bfs.fbn_to_dbn(inum, NUM_DIRECT + 1) is None


def test_indirect_mapping_direct_alloc(bfs):
    inum = bfs.create_file("a")
    dbn = bfs.alloc_block(inum, NUM_DIRECT + 3)
    assert bfs.read_inode(inum).indirect != 0
    assert bfs.fbn_to_dbn(inum, NUM_DIRECT + 3) == dbn


def test_read_returns_block_contents(bfs, device):
    inum = bfs.create_file("a")
    dbn = bfs.alloc_block(inum, 1)
    payload = bytes([7]) * BYTES_PER_BLOCK
    device.write_block(dbn, payload)
    assert bfs.read(inum, 1) == payload


def test_read_unmapped(bfs):
    inum = bfs.create_file("a")
    with pytest.raises(BfsError) as excinfo:
        bfs.read(inum, 2)
    assert excinfo.value.code == ErrorCode.ENODBN


@pytest.mark.parametrize("inum", [-1, NUM_INODES])
def test_bad_inum(bfs, inum):
    with pytest.raises(BfsError) as excinfo:
        bfs.read_inode(inum)
    assert excinfo.value.code == ErrorCode.EBADINUM


@pytest.mark.parametrize("fbn", [-1, NUM_DIRECT + BYTES_PER_BLOCK // 2])
def test_bad_fbn(bfs, fbn):
    inum = bfs.create_file("a")
    with pytest.raises(BfsError) as excinfo:
        bfs.alloc_block(inum, fbn)
    assert excinfo.value.code == ErrorCode.EBADFBN


def test_size_round_trip(bfs):
    inum = bfs.create_file("a")
    assert bfs.get_size(inum) == 0
    bfs.set_size(inum, 4321)
    assert bfs.get_size(inum) == 4321


def test_inode_write_read(bfs):
    inode = Inode(size=99, direct=[10, 11, 0, 0, 0], indirect=0)
    bfs.write_inode(3, inode)
    assert bfs.read_inode(3) == inode
    assert bfs.read_inode(2) == Inode()


def test_fd_conversion():
    for inum in range(NUM_INODES):
        assert fd_to_inum(inum_to_fd(inum)) == inum
    with pytest.raises(BfsError) as excinfo:
        fd_to_inum(inum_to_fd(0) - 1)
    assert excinfo.value.code == ErrorCode.EBADINUM


def test_cursor_and_tell(bfs):
    inum = bfs.create_file("a")
    bfs.set_cursor(inum, 600)
    assert bfs.tell(inum_to_fd(inum)) == 600


def test_references_and_release(bfs):
    inum = bfs.create_file("b")
    bfs.create_file("c")
    c_inum = bfs.lookup_file("c")
    index = bfs.find_oft_entry(c_inum)
    refs = bfs.oft[index].refs
    bfs.ref_oft(c_inum)
    assert bfs.oft[index].refs == refs + 1
    bfs.set_cursor(c_inum, 50)
    for _ in range(refs + 1):
        bfs.deref_oft(c_inum)
    assert bfs.oft[index].inum == 0
    assert bfs.oft[index].curs == 0
    assert inum != c_inum


def test_oft_full(bfs):
    indices = {bfs.find_oft_entry(inum) for inum in range(1, NUM_OFT_ENTRIES + 1)}
    assert len(indices) == NUM_OFT_ENTRIES
    with pytest.raises(BfsError) as excinfo:
        bfs.find_oft_entry(NUM_OFT_ENTRIES + 1)
    assert excinfo.value.code == ErrorCode.EOFTFULL


def test_init_oft_clears_table(bfs):
    bfs.create_file("a")
    bfs.set_cursor(0, 10)
    bfs.init_oft()
    assert all(e.inum == 0 and e.refs == 0 and e.curs == 0 for e in bfs.oft)


def test_extend_maps_blocks(bfs):
    inum = bfs.create_file("a")
    bfs.extend(inum, 2)
    dbns = [bfs.fbn_to_dbn(inum, f) for f in range(3)]
    assert None not in dbns
    assert len(set(dbns)) == 3
    assert bfs.fbn_to_dbn(inum, 3) is None
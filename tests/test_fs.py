import pytest

from oskit.bio import BYTES_PER_BLOCK
from oskit.errors import BfsError, ErrorCode
from oskit.fs import FileSystem, Whence


@pytest.fixture
def fs(tmp_path):
    filesystem = FileSystem(tmp_path / "BFSDISK")
    filesystem.format()
    return filesystem


def test_mount_missing_disk(tmp_path):
    filesystem = FileSystem(tmp_path / "absent")
    with pytest.raises(BfsError) as excinfo:
        filesystem.mount()
    assert excinfo.value.code is ErrorCode.ENODISK


def test_format_makes_mountable_disk(fs):
    fs.mount()
    assert (fs.device.read_block(0))[:2] == (100).to_bytes(2, "little")


def test_create_returns_descriptor_of_first_inode(fs):
    assert fs.create("P5") == 5


def test_write_then_read_round_trip(fs):
    fd = fs.create("data")
    payload = bytes(range(200))
    assert fs.write(fd, payload) == len(payload)
    assert fs.tell(fd) == len(payload)
    assert fs.size(fd) == len(payload)
    fs.seek(fd, 0, Whence.SET)
    assert fs.read(fd, len(payload)) == payload
    assert fs.tell(fd) == len(payload)


def test_spanning_write_into_indirect_blocks(fs):
    fd = fs.create("big")
    payload = bytes((i * 7) % 256 for i in range(BYTES_PER_BLOCK * 8 + 33))
    fs.write(fd, payload)
    fs.seek(fd, 0)
    assert fs.read(fd, len(payload)) == payload


def test_overwrite_in_middle_keeps_neighbours(fs):
    fd = fs.create("f")
    fs.write(fd, b"a" * 1024)
    fs.seek(fd, 500)
    fs.write(fd, b"b" * 30)
    assert fs.size(fd) == 1024
    fs.seek(fd, 0)
    data = fs.read(fd, 1024)
    assert data == b"a" * 500 + b"b" * 30 + b"a" * 494


def test_read_stops_at_end_of_file(fs):
    fd = fs.create("f")
    fs.write(fd, b"x" * 100)
    fs.seek(fd, 60)
    assert fs.read(fd, 100) == b"x" * 40
    assert fs.tell(fd) == 100
    assert fs.read(fd, 10) == b""


def test_seek_modes(fs):
    fd = fs.create("f")
    fs.write(fd, b"z" * 50)
    assert fs.seek(fd, 10, Whence.SET) == 10
    assert fs.seek(fd, 5, Whence.CUR) == 15
    assert fs.seek(fd, 3, Whence.END) == 53
    assert fs.tell(fd) == 53


def test_seek_negative_offset(fs):
    fd = fs.create("f")
    with pytest.raises(BfsError) as excinfo:
        fs.seek(fd, -1, Whence.SET)
    assert excinfo.value.code is ErrorCode.EBADCURS


def test_seek_bad_whence(fs):
    fd = fs.create("f")
    with pytest.raises(BfsError) as excinfo:
        fs.seek(fd, 0, 9)
    assert excinfo.value.code is ErrorCode.EBADWHENCE


def test_read_nonpositive_count(fs):
    fd = fs.create("f")
    fs.write(fd, b"abc")
    with pytest.raises(BfsError) as excinfo:
        fs.read(fd, 0)
    assert excinfo.value.code is ErrorCode.ENEGNUMB


def test_read_more_than_size(fs):
    fd = fs.create("f")
    fs.write(fd, b"abc")
    with pytest.raises(BfsError) as excinfo:
        fs.read(fd, 4)
    assert excinfo.value.code is ErrorCode.EBIGNUMB


def test_write_nothing(fs):
    fd = fs.create("f")
    with pytest.raises(BfsError) as excinfo:
        fs.write(fd, b"")
    assert excinfo.value.code is ErrorCode.ENEGNUMB


def test_open_missing_file(fs):
    with pytest.raises(BfsError) as excinfo:
        fs.open("nothing")
    assert excinfo.value.code is ErrorCode.EFNF


def test_reopen_after_close(fs):
    fd = fs.create("keep")
    fs.write(fd, b"hello world")
    fs.close(fd)
    reopened = fs.open("keep")
    assert reopened == fd
    assert fs.tell(reopened) == 0
    assert fs.read(reopened, 11) == b"hello world"


def test_two_files_hold_separate_data(fs):
    first = fs.create("one")
    fs.write(first, b"1" * 600)
    fs.close(first)
    second = fs.create("two")
    fs.write(second, b"2" * 700)
    fs.close(second)
    fd = fs.open("one")
    fs.seek(fd, 0)
    assert fs.read(fd, 600) == b"1" * 600
    fd2 = fs.open("two")
    fs.seek(fd2, 0)
    assert fs.read(fd2, 700) == b"2" * 700
import pytest

from oskit.debug import dump_block, dump_dir, dump_inodes, dump_super
from oskit.fs import FileSystem


@pytest.fixture
def fs(tmp_path):
    filesystem = FileSystem(tmp_path / "BFSDISK")
    filesystem.format()
    return filesystem


def test_dump_super_fresh(fs):
    text = dump_super(fs.device)
    assert "Super.numBlocks = 100 \n" in text
    assert "Super.numInodes = 8 \n" in text
    assert "Super.firstFree = 3 \n" in text
    assert "should be 0x00" not in text


def test_dump_super_reports_stray_bytes(fs):
    block = bytearray(fs.device.read_block(0))
    block[100] = 0xAB
    fs.device.write_block(0, block)
    assert "Super[100] == ab, should be 0x00 \n" in dump_super(fs.device)


def test_dump_dir_lists_created_file(fs):
    fs.create("P5")
    text = dump_dir(fs.device)
    assert "[00]  P5 \n" in text
    assert text.count("\n[") == 8


def test_dump_inodes_shows_size_and_blocks(fs):
    fd = fs.create("f")
    fs.write(fd, b"q" * 10)
    text = dump_inodes(fs.device)
    assert "[0] size = 10 \n" in text
    assert "    [0] direct[0] = 3 \n" in text
    assert text.count("indirect  =") == 8


def test_dump_block_words(fs):
    text = dump_block(fs.device, 3, 2)
    lines = [line for line in text.split("\n") if line]
    assert len(lines) == 32
    assert lines[0].split()[0] == "0004"


def test_dump_block_dwords_layout(fs):
    text = dump_block(fs.device, 4, 4)
    lines = [line for line in text.split("\n") if line]
    assert len(lines) == 32
    assert all(len(line.split()) == 4 for line in lines)


def test_dump_block_bytes_shows_text(fs):
    fd = fs.create("f")
    fs.write(fd, b"Hello, disk!")
    text = dump_block(fs.device, 3, 1)
    lines = [line for line in text.split("\n") if line]
    assert len(lines) == 32
    assert lines[0].startswith("48 65 6c 6c 6f ")
    assert lines[0].endswith("Hello, disk!....")


def test_dump_block_bad_size(fs):
    with pytest.raises(ValueError):
        dump_block(fs.device, 0, 3)
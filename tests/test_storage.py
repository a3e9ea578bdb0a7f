import pytest

from paradox_db_reader import ByteStream, DecodeError, FileStorage


def test_fixed_width_reads_are_little_endian():
    s = ByteStream(b"\x01\xfe\xff\x34\x12\xff\xff\xff\xff\x78\x56\x34\x12")
    assert s.read_byte() == 1
    assert s.read_int16() == -2
    assert s.read_uint16() == 0x1234
    assert s.read_int32() == -1
    assert s.read_uint32() == 0x12345678
    assert s.remaining == 0


def test_peek_does_not_move():
    s = ByteStream(b"\x00\x00\x05")
    s.seek(1)
    assert s.peek(2) == b"\x00\x05"
    assert s.position == 1
    assert s.read_bytes(2) == b"\x00\x05"
    assert s.position == 3


def test_seek_and_skip_bounds():
    s = ByteStream(b"abcd")
    s.seek(4)
    assert s.remaining == 0
    with pytest.raises(DecodeError):
        s.seek(5)
    with pytest.raises(DecodeError):
        s.seek(-1)
    s.seek(1).skip(2)
    assert s.position == 3
    with pytest.raises(DecodeError):
        s.read_int16()


def test_cstring():
    s = ByteStream(b"ID\x00Name\x00tail")
    assert s.read_cstring() == b"ID"
    assert s.read_cstring() == b"Name"
    assert s.position == 8
    with pytest.raises(DecodeError):
        s.read_cstring()


def test_file_storage(tmp_path):
    p = tmp_path / "X.DB"
    p.write_bytes(b"\x01\x02")
    stream = FileStorage(str(p)).open_stream()
    assert len(stream) == 2
    assert stream.read_uint16() == 0x0201
    with pytest.raises(OSError):
        FileStorage(str(tmp_path / "missing.DB")).read_all()


def test_negative_skip_is_rejected():
    s = ByteStream(b"abcd").seek(3)
    with pytest.raises(DecodeError):
        s.skip(-2)
    assert s.position == 3

import pytest

from dbcstruct.exceptions import TruncatedInputException
from dbcstruct.streams import Stream


def test_bytes_stream_read_exactly():
    data = b'\x01\x02\x03\x04\x05'

    with Stream(data) as stream:
        assert stream.read_exactly(1) == b'\x01'
        assert stream.read_exactly(2) == b'\x02\x03'
        assert stream.tell() == 3

        stream.seek(4)
        assert stream.read_exactly(1) == b'\x05'


def test_file_stream_read_exactly(tmp_path):
    data = b'\x01\x02\x03\x04\x05'
    path_data = tmp_path / 'auaua'
    path_data.write_bytes(data)

    with Stream(path_data) as stream:
        assert stream.name == str(path_data)
        assert stream.seek(1).read_exactly(4) == b'\x02\x03\x04\x05'

    assert stream.closed


def test_stream_truncated(tmp_path):
    path_data = tmp_path / 'short'
    path_data.write_bytes(b'\x01\x02\x03')

    with Stream(str(path_data)) as stream:
        stream.seek(1)
        with pytest.raises(TruncatedInputException) as excinfo:
            stream.read_exactly(4)

    assert excinfo.value.source == str(path_data)
    assert excinfo.value.offset == 1
    assert excinfo.value.expected == 4
    assert excinfo.value.actual == 2
    assert stream.closed


def test_stream_wrong_source():
    with pytest.raises(ValueError):
        Stream(42)


def test_stream_wrong_offset():
    with Stream(b'\x00') as stream:
        with pytest.raises(ValueError):
            stream.seek(1.5)

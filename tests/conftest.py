import logging
import os
import struct

import pytest


logging.basicConfig(level=logging.DEBUG if 'DEBUG' in os.environ else logging.INFO)


def _build_dbc(rows, record_size, field_count, strings=b'', record_count=None, magic=b''):
    '''rows are the already packed records'''
    record_count = len(rows) if record_count is None else record_count
    header = struct.pack('<4I', record_count, field_count, record_size, len(strings))

    return magic + header + b''.join(rows) + strings


@pytest.fixture
def build_dbc():
    return _build_dbc


@pytest.fixture
def dbc_file(tmp_path):
    """Write a DBC file and return its path."""
    def _write(*args, name='Test.dbc', **kwargs):
        path = tmp_path / name
        path.write_bytes(_build_dbc(*args, **kwargs))
        return str(path)

    return _write


@pytest.fixture
def scenario_rows():
    '''two records [int32 f1][string offset f2] pointing to "AB" and "CD"'''
    return [
        struct.pack('<iI', 1, 0),
        struct.pack('<iI', 2, 3),
    ]

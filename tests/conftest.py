import os
import struct
import sys

import pytest

# Ensure the repository root is on sys.path for local imports in tests.
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

_RECORD = struct.Struct("<hhB24xf")


def pack_record(id1, id2, id3, mag):
    return _RECORD.pack(id1, id2, ord(id3), mag)


@pytest.fixture
def tycho2_dir(tmp_path):
    # Returns a writer: (index lines, [(id1, id2, id3, mag), ...]) -> catalog directory.
    def _write(index_lines, records):
        (tmp_path / "tycho2.idx").write_text("\n".join(index_lines) + "\n", encoding="utf-8")
        data = b"".join(pack_record(*rec) for rec in records)
        (tmp_path / "tycho2.dat").write_bytes(data)
        return str(tmp_path)

    return _write

import io

import pytest

from conftest import pack_record
from tycho2xref.errors import CatalogIOError, FormatError
from tycho2xref.record import RECORD_LEN
from tycho2xref.region_index import RegionEntry
from tycho2xref.scanner import read_region, scan_region


class _TrackingReader(io.BytesIO):
    def __init__(self, data):
        super().__init__(data)
        self.reads = []

    def read(self, size=-1):
        start = self.tell()
        data = super().read(size)
        self.reads.append((start, start + len(data)))
        return data


def _catalog(records):
    return b"".join(pack_record(*rec) for rec in records)


def test_region_is_half_open_and_bounded():
    records = [(1, i, "1", 5.0) for i in range(10)]
    handle = _TrackingReader(_catalog(records))
    found = scan_region(handle, RegionEntry(3, 6), None, "1")
    # Records 3, 4 and 5 (1-based); record 6 is excluded.
    assert [r.id2 for r in found] == [2, 3, 4]
    assert handle.reads == [(2 * RECORD_LEN, 5 * RECORD_LEN)]


def test_filters_and_file_order():
    records = [(1, 7, "B", 1.0), (1, 7, "A", 2.0), (1, 8, "A", 3.0), (2, 7, "A", 4.0)]
    handle = io.BytesIO(_catalog(records))
    found = scan_region(handle, RegionEntry(1, 5), 7, "A")
    assert [(r.id1, r.magnitude) for r in found] == [(1, 2.0), (2, 4.0)]


def test_max_results_cap():
    records = [(1, 5, "A", float(i)) for i in range(60)]
    handle = io.BytesIO(_catalog(records))
    found = scan_region(handle, RegionEntry(1, 61), 5, "A")
    assert len(found) == 50
    assert found[-1].magnitude == 49.0
    assert len(scan_region(handle, RegionEntry(1, 61), 5, "A", max_results=3)) == 3


def test_empty_region():
    handle = io.BytesIO(_catalog([(1, 1, "1", 1.0)]))
    assert scan_region(handle, RegionEntry(2, 2), 1, "1") == []


def test_seek_past_end():
    handle = io.BytesIO(_catalog([(1, 1, "1", 1.0)]))
    with pytest.raises(CatalogIOError):
        read_region(handle, RegionEntry(5, 6))


def test_short_read():
    handle = io.BytesIO(_catalog([(1, 1, "1", 1.0), (1, 2, "1", 1.0)]))
    with pytest.raises(CatalogIOError):
        read_region(handle, RegionEntry(2, 4))


def test_inverted_region():
    handle = io.BytesIO(_catalog([(1, 1, "1", 1.0)]))
    with pytest.raises(FormatError):
        read_region(handle, RegionEntry(3, 2))

"""Fixed-length Tycho-2 binary records.

Each record is 33 bytes, little-endian whatever the host byte order:

    [0, 2)   tyc1       int16
    [2, 4)   tyc2       int16
    [4]      tyc3       single byte component
    [5, 29)  reserved   not used here
    [29, 33) magnitude  float32
"""

import struct
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np

RECORD_LEN = 33

RECORD_DTYPE = np.dtype(
    [
        ("tyc1", "<i2"),
        ("tyc2", "<i2"),
        ("tyc3", "u1"),
        ("reserved", "V24"),
        ("mag", "<f4"),
    ]
)

_PEEK = struct.Struct("<hB")

Buffer = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class CatalogRecord:
    id1: int
    id2: int
    id3: str
    magnitude: float

    @property
    def identifier(self) -> str:
        return f"{self.id1}-{self.id2}-{self.id3}"

    def matches(self, id1: int, id2: int, id3: str) -> bool:
        return self.id1 == id1 and self.id2 == id2 and self.id3 == id3


def _record_from_row(row: np.void) -> CatalogRecord:
    # tyc3 is a raw byte; latin-1 maps every value 0-255 to one character.
    return CatalogRecord(
        id1=int(row["tyc1"]),
        id2=int(row["tyc2"]),
        id3=chr(int(row["tyc3"])),
        magnitude=float(row["mag"]),
    )


def decode_record(buffer: Buffer, offset: int = 0) -> CatalogRecord:
    """Decode the record starting at ``offset``. Field values are not validated."""
    row = np.frombuffer(buffer, dtype=RECORD_DTYPE, count=1, offset=offset)[0]
    return _record_from_row(row)


def decode_records(buffer: Buffer, count: Optional[int] = None) -> np.ndarray:
    """View ``buffer`` as a structured array of records without copying."""
    if count is None:
        count = len(buffer) // RECORD_LEN
    return np.frombuffer(buffer, dtype=RECORD_DTYPE, count=count)


def peek_match(buffer: Buffer, offset: int, id2: Optional[int], id3: str) -> bool:
    """Check tyc2/tyc3 of one record from bytes [2, 5) only; ``id2=None`` matches any tyc2."""
    t2, t3 = _PEEK.unpack_from(buffer, offset + 2)
    return (id2 is None or id2 == t2) and ord(id3) == t3


def peek_mask(records: np.ndarray, id2: Optional[int], id3: str) -> np.ndarray:
    # Vectorized peek_match over a region array.
    mask = records["tyc3"] == ord(id3)
    if id2 is not None:
        mask &= records["tyc2"] == id2
    return mask

import logging
import os
from typing import BinaryIO, List, Optional

import numpy as np

from .errors import CatalogIOError, FormatError
from .record import RECORD_LEN, CatalogRecord, decode_record, decode_records, peek_mask
from .region_index import RegionEntry

logger = logging.getLogger(__name__)

DEFAULT_MAX_RESULTS = 50


def read_region(handle: BinaryIO, region: RegionEntry) -> bytes:
    """Read every record of ``region`` with a single seek and bulk read."""
    count = region.record_count
    if count < 0:
        raise FormatError(
            f"Region {region.first_record_id}..{region.last_record_id} ends before it starts"
        )
    start = RECORD_LEN * (region.first_record_id - 1)
    size = handle.seek(0, os.SEEK_END)
    if start < 0 or start > size:
        raise CatalogIOError(f"Region start {start} lies outside catalog of {size} bytes")
    handle.seek(start, os.SEEK_SET)
    want = RECORD_LEN * count
    data = handle.read(want)
    if len(data) != want:
        raise CatalogIOError(f"Short read at offset {start}: wanted {want} bytes, got {len(data)}")
    return data


def scan_region(
    handle: BinaryIO,
    region: RegionEntry,
    id2: Optional[int],
    id3: str,
    max_results: int = DEFAULT_MAX_RESULTS,
) -> List[CatalogRecord]:
    """Return up to ``max_results`` records of ``region`` passing the tyc2/tyc3 peek, in file order."""
    data = read_region(handle, region)
    if not data:
        return []
    records = decode_records(data)
    # Records inside a region are unsorted, so every one is peeked; only hits are decoded.
    hits = np.flatnonzero(peek_mask(records, id2, id3))[:max_results]
    logger.debug(
        "Region %d..%d: %d records, %d decoded",
        region.first_record_id,
        region.last_record_id,
        len(records),
        len(hits),
    )
    return [decode_record(data, int(i) * RECORD_LEN) for i in hits]

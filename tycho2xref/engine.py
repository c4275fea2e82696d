import logging
import os
import threading
from typing import BinaryIO, Optional

from .errors import CatalogIOError
from .hd_xref import parse_tycho_identifier
from .record import CatalogRecord
from .region_index import RegionIndex, load_region_index
from .scanner import DEFAULT_MAX_RESULTS, scan_region

logger = logging.getLogger(__name__)

CATALOG_FILE = "tycho2.dat"
INDEX_FILE = "tycho2.idx"


class CatalogSearchEngine:
    """Resolves Tycho-2 compound identifiers against the binary catalog.

    Owns the region index and the open catalog handle. The handle is shared by
    every lookup, so the seek and the read of one lookup happen under a lock.
    """

    def __init__(
        self,
        index: RegionIndex,
        handle: BinaryIO,
        max_results: int = DEFAULT_MAX_RESULTS,
    ) -> None:
        self.index = index
        self.max_results = max_results
        self._handle = handle
        self._lock = threading.Lock()

    @classmethod
    def open(cls, directory: str, max_results: int = DEFAULT_MAX_RESULTS) -> "CatalogSearchEngine":
        index = load_region_index(os.path.join(directory, INDEX_FILE))
        catalog_path = os.path.join(directory, CATALOG_FILE)
        try:
            handle = open(catalog_path, "rb")
        except OSError as exc:
            raise CatalogIOError(f"Unable to open Tycho-2 catalog {catalog_path}: {exc}") from exc
        logger.info("Opened Tycho-2 catalog %s", catalog_path)
        return cls(index, handle, max_results=max_results)

    def __enter__(self) -> "CatalogSearchEngine":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._handle.close()

    def lookup(self, id1: int, id2: int, id3: str) -> Optional[CatalogRecord]:
        region = self.index.region(id1)
        with self._lock:
            candidates = scan_region(self._handle, region, id2, id3, self.max_results)
        # The peek only checks tyc2/tyc3; a region may hold records of another tyc1.
        for record in candidates:
            if record.matches(id1, id2, id3):
                return record
        return None

    def lookup_identifier(self, identifier: str) -> Optional[CatalogRecord]:
        id1, id2, id3 = parse_tycho_identifier(identifier)
        return self.lookup(id1, id2, id3)

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, List

from .errors import CatalogIOError, FormatError, OutOfRangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RegionEntry:
    first_record_id: int
    last_record_id: int

    @property
    def record_count(self) -> int:
        # Half-open: the record at last_record_id belongs to the next group.
        return self.last_record_id - self.first_record_id


class RegionIndex:
    def __init__(self, entries: List[RegionEntry]) -> None:
        self.entries = entries

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[RegionEntry]:
        return iter(self.entries)

    def region(self, tyc1: int) -> RegionEntry:
        if tyc1 < 1 or tyc1 > len(self.entries):
            raise OutOfRangeError(f"tyc1 {tyc1} outside index range 1..{len(self.entries)}")
        return self.entries[tyc1 - 1]


def _parse_field(value: str, line_no: int) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise FormatError(f"Line {line_no}: invalid record id {value.strip()!r}") from None


def parse_region_index(lines: Iterable[str]) -> RegionIndex:
    # One entry per line; line order is the tyc1 ordering, so nothing is sorted or checked.
    entries: List[RegionEntry] = []
    for line_no, line in enumerate(lines, 1):
        if not line.strip():
            continue
        chunks = line.split(";")
        if len(chunks) != 2:
            raise FormatError(f"Line {line_no}: expected '<first>;<last>', got {line.strip()!r}")
        entries.append(
            RegionEntry(
                first_record_id=_parse_field(chunks[0], line_no),
                last_record_id=_parse_field(chunks[1], line_no),
            )
        )
    return RegionIndex(entries)


def load_region_index(path: str) -> RegionIndex:
    try:
        with open(path, "r", encoding="utf-8") as f:
            index = parse_region_index(f)
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogIOError(f"Unable to read Tycho-2 index {path}: {exc}") from exc
    logger.info("Loaded %d Tycho-2 regions from %s", len(index), path)
    return index

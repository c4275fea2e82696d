import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Tuple

from .errors import FormatError

logger = logging.getLogger(__name__)


@dataclass
class HdXref:
    # HD number -> raw Tycho identifier text ("<tyc1> <tyc2> <tyc3>").
    by_hd: Dict[int, str] = field(default_factory=dict)
    duplicates: int = 0

    def __len__(self) -> int:
        return len(self.by_hd)

    def get(self, hd: Optional[int]) -> Optional[str]:
        if hd is None:
            return None
        return self.by_hd.get(hd)


def parse_tycho_identifier(text: str) -> Tuple[int, int, str]:
    chunks = text.split()
    if len(chunks) != 3:
        raise FormatError(f"Expected '<tyc1> <tyc2> <tyc3>', got {text!r}")
    try:
        tyc1 = int(chunks[0])
        tyc2 = int(chunks[1])
    except ValueError:
        raise FormatError(f"Non-numeric Tycho identifier {text!r}") from None
    return tyc1, tyc2, chunks[2][0]


def parse_hd_xref(lines: Iterable[str]) -> HdXref:
    # Tycho identifier in columns [0, 12), HD number in [14, 20); first mapping wins.
    xref = HdXref()
    for line_no, line in enumerate(lines, 1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        tyc = line[0:12]
        try:
            hd = int(line[14:20])
        except ValueError:
            raise FormatError(f"Line {line_no}: invalid HD number {line[14:20]!r}") from None
        if hd in xref.by_hd:
            xref.duplicates += 1
            continue
        xref.by_hd[hd] = tyc
    return xref


def load_hd_xref(path: str) -> HdXref:
    with open(path, "r", encoding="utf-8") as f:
        xref = parse_hd_xref(f)
    logger.info(
        "HD-Tyc2 cross reference loaded, %d entries, duplicate records count: %d",
        len(xref),
        xref.duplicates,
    )
    return xref

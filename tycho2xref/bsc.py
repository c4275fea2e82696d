import logging
from dataclasses import dataclass, replace
from typing import List, Optional

logger = logging.getLogger(__name__)

# BSC5 columns (0-based, end exclusive).
HR_COLS = (0, 4)
HD_COLS = (25, 31)
VMAG_COLS = (102, 107)
# Blank here marks a placeholder entry (withdrawn HR numbers such as novae).
EMPTY_FLAG_COL = 94


@dataclass(frozen=True)
class SourceStar:
    raw: str
    hr: Optional[int] = None
    hd: Optional[int] = None
    magnitude: Optional[float] = None
    is_empty: bool = True

    @classmethod
    def from_line(cls, raw: str) -> "SourceStar":
        raw = raw.rstrip("\r\n")
        if len(raw) <= EMPTY_FLAG_COL or raw[EMPTY_FLAG_COL] == " ":
            return cls(raw=raw)
        return cls(
            raw=raw,
            hr=_safe_int(raw[HR_COLS[0] : HR_COLS[1]]),
            hd=_safe_int(raw[HD_COLS[0] : HD_COLS[1]]),
            magnitude=_safe_float(raw[VMAG_COLS[0] : VMAG_COLS[1]]),
            is_empty=False,
        )

    def with_magnitude(self, magnitude: float) -> "SourceStar":
        # Vmag is F5.2; every other column is kept byte for byte.
        start, end = VMAG_COLS
        padded = self.raw.ljust(end)
        raw = padded[:start] + f"{magnitude:5.2f}" + padded[end:]
        return replace(self, raw=raw, magnitude=round(magnitude, 2))


def _safe_int(value: str) -> Optional[int]:
    try:
        return int(value) if value.strip() != "" else None
    except ValueError:
        return None


def _safe_float(value: str) -> Optional[float]:
    try:
        return float(value) if value.strip() != "" else None
    except ValueError:
        return None


def load_bsc(path: str) -> List[SourceStar]:
    with open(path, "r", encoding="latin-1") as f:
        stars = [SourceStar.from_line(line) for line in f]
    logger.info("BSC loaded, stars count: %d", len(stars))
    return stars

import logging
import math
from dataclasses import dataclass
from typing import Iterable, TextIO

from .bsc import SourceStar, load_bsc
from .engine import CatalogSearchEngine
from .errors import FormatError, OutOfRangeError
from .hd_xref import HdXref, load_hd_xref, parse_tycho_identifier
from .record import CatalogRecord

logger = logging.getLogger(__name__)


@dataclass
class CrossRefStats:
    cross_referenced: int = 0
    not_found: int = 0
    magnitude_corrected: int = 0
    unmapped: int = 0
    out_of_range: int = 0


def _needs_correction(star: SourceStar, record: CatalogRecord) -> bool:
    if not math.isfinite(record.magnitude):
        return False
    if star.magnitude is None:
        return True
    # Both sides compared in whole hundredths so 0.01 steps are not lost to float error.
    return round(round(record.magnitude, 2) * 100) != round(star.magnitude * 100)


def cross_reference(
    engine: CatalogSearchEngine,
    stars: Iterable[SourceStar],
    xref: HdXref,
    crossref_out: TextIO,
    catalog_out: TextIO,
) -> CrossRefStats:
    """Look up every BSC star in Tycho-2 and write both outputs.

    Every input line is copied to ``catalog_out``; matched stars get their
    magnitude replaced when Tycho-2 disagrees by at least 0.01. Matched stars
    are also listed in ``crossref_out`` as ``"<hr> <tyc1>-<tyc2>-<tyc3>"``.
    """
    stats = CrossRefStats()
    for star in stars:
        if not star.is_empty:
            star = _cross_reference_star(engine, star, xref, crossref_out, stats)
        catalog_out.write(star.raw + "\n")
    return stats


def _cross_reference_star(
    engine: CatalogSearchEngine,
    star: SourceStar,
    xref: HdXref,
    crossref_out: TextIO,
    stats: CrossRefStats,
) -> SourceStar:
    identifier = xref.get(star.hd)
    if identifier is None:
        logger.debug("HR %s: no Tycho-2 identifier for HD %s", star.hr, star.hd)
        stats.unmapped += 1
        return star
    try:
        id1, id2, id3 = parse_tycho_identifier(identifier)
    except FormatError as exc:
        logger.warning("HR %s: %s", star.hr, exc)
        stats.unmapped += 1
        return star
    try:
        record = engine.lookup(id1, id2, id3)
    except OutOfRangeError as exc:
        logger.warning("HR %s: %s", star.hr, exc)
        stats.out_of_range += 1
        return star
    if record is None:
        logger.debug("HR %s: TYC %d-%d-%s not found", star.hr, id1, id2, id3)
        stats.not_found += 1
        return star
    if _needs_correction(star, record):
        star = star.with_magnitude(round(record.magnitude, 2))
        stats.magnitude_corrected += 1
    crossref_out.write(f"{star.hr} {record.identifier}\n")
    stats.cross_referenced += 1
    return star


def run_crossref(
    engine: CatalogSearchEngine,
    hd_xref_path: str,
    bsc_path: str,
    crossref_path: str,
    catalog_path: str,
) -> CrossRefStats:
    xref = load_hd_xref(hd_xref_path)
    stars = load_bsc(bsc_path)
    with open(crossref_path, "w", encoding="utf-8") as crossref_out, open(
        catalog_path, "w", encoding="latin-1"
    ) as catalog_out:
        return cross_reference(engine, stars, xref, crossref_out, catalog_out)

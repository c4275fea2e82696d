import argparse
import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .crossref import run_crossref
from .engine import CATALOG_FILE, INDEX_FILE, CatalogSearchEngine
from .errors import CatalogError
from .scanner import DEFAULT_MAX_RESULTS

console = Console()


def _check_tycho2_dir(path: str) -> None:
    if not os.path.isdir(path):
        raise SystemExit("Specified directory does not exist.")
    if not (
        os.path.isfile(os.path.join(path, CATALOG_FILE))
        and os.path.isfile(os.path.join(path, INDEX_FILE))
    ):
        raise SystemExit(f"The directory should contain both {CATALOG_FILE} and {INDEX_FILE} files.")


def _open_engine(args: argparse.Namespace) -> CatalogSearchEngine:
    _check_tycho2_dir(args.tycho2_dir)
    try:
        return CatalogSearchEngine.open(args.tycho2_dir, max_results=args.max_results)
    except CatalogError as exc:
        raise SystemExit(f"Unable to initialize Tycho2 catalog: {exc}") from exc


def run_crossref_command(args: argparse.Namespace) -> None:
    with _open_engine(args) as engine:
        try:
            stats = run_crossref(
                engine,
                args.hd_xref,
                args.bsc,
                args.crossref_out,
                args.catalog_out,
            )
        except (CatalogError, OSError) as exc:
            raise SystemExit(f"Cross-reference failed: {exc}") from exc
    console.print(f"[cyan]Count of stars not found in Tycho2 catalogue:[/cyan] {stats.not_found}")
    console.print(f"[cyan]Count of stars with magnitude difference:[/cyan] {stats.magnitude_corrected}")
    console.print(f"[cyan]Count of cross-referenced stars:[/cyan] {stats.cross_referenced}")
    if stats.unmapped or stats.out_of_range:
        console.print(
            f"[yellow]Skipped:[/yellow] {stats.unmapped} without HD-Tyc2 mapping, "
            f"{stats.out_of_range} outside the Tycho2 index"
        )
    console.print(f"Wrote {args.crossref_out}")
    console.print(f"Wrote {args.catalog_out}")


def run_lookup_command(args: argparse.Namespace) -> None:
    identifier = " ".join(args.identifier)
    with _open_engine(args) as engine:
        try:
            record = engine.lookup_identifier(identifier)
        except CatalogError as exc:
            raise SystemExit(str(exc)) from exc
    if record is None:
        raise SystemExit(f"TYC {identifier} not found.")
    console.print(f"TYC {record.identifier}  mag {record.magnitude:.2f}")


def _add_tycho2_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("tycho2_dir", help=f"Directory holding {CATALOG_FILE} and {INDEX_FILE}")
    parser.add_argument("--max-results", type=int, default=DEFAULT_MAX_RESULTS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="BSC to Tycho-2 cross-reference")
    parser.add_argument("-v", "--verbose", action="store_true")

    subparsers = parser.add_subparsers(dest="command", required=True)

    crossref = subparsers.add_parser("crossref", help="Cross-reference the BSC against Tycho-2")
    _add_tycho2_args(crossref)
    crossref.add_argument("--hd-xref", default="data/tyc2_hd.dat")
    crossref.add_argument("--bsc", default="data/bsc.dat")
    crossref.add_argument("--crossref-out", default="CrossRef.txt")
    crossref.add_argument("--catalog-out", default="Stars.dat")
    crossref.set_defaults(func=run_crossref_command)

    lookup = subparsers.add_parser("lookup", help="Look up one Tycho-2 identifier")
    _add_tycho2_args(lookup)
    lookup.add_argument("identifier", nargs=3, help="tyc1 tyc2 tyc3")
    lookup.set_defaults(func=run_lookup_command)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    _configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()

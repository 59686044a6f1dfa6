"""
quakedash Command Line Interface (CLI)
======================================

One-shot build of the dashboard outputs:

    python -m quakedash.cli --csv "earthquakes.csv" --report "dashboard.docx"

Steps:
1) Load the CSV snapshot (fails fast on a malformed file)
2) Clean + build every view once
3) Print the summary and write whichever outputs were asked for

The CLI never modifies the input file.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys
from typing import List, Optional
from .loader import load_quakes_csv
from .engine import QuakeEngine, ViewConfig, export_records_csv, export_views_json
from .errors import SchemaError
from .report import format_count, NO_DATA


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="quakedash", description="Build earthquake dashboard views from a CSV snapshot.")
    ap.add_argument("--csv", required=True, help="Path to the earthquake CSV file")
    ap.add_argument("--sep", default=",", help="Field delimiter of the input file (default: ',')")
    ap.add_argument("--report", help="Write a DOCX dashboard report to this path")
    ap.add_argument("--json", help="Write all views as JSON to this path")
    ap.add_argument("--top-csv", help="Write the ranked table as CSV to this path")
    ap.add_argument("--seed", type=int, default=ViewConfig.sample_seed, help="Seed for the map sample")
    ap.add_argument("--top-n", type=int, default=ViewConfig.top_n, help="Rows in the ranked table")
    ap.add_argument("--log-level", default="WARNING", help="DEBUG, INFO, WARNING, ERROR")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the quakedash CLI. Returns the process exit code."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print("Loading dataset...")
    try:
        raw = load_quakes_csv(args.csv, sep=args.sep)
    except SchemaError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    config = ViewConfig(sample_seed=args.seed, top_n=args.top_n)
    engine = QuakeEngine.from_records(raw, config=config, dataset_path=args.csv)
    views = engine.build()
    _print_summary(len(raw), views)

    if args.json:
        export_views_json(views, args.json)
        print(f"Exported JSON to {args.json}")

    if args.top_csv:
        export_records_csv(views.top_ranked, args.top_csv)
        print(f"Exported ranked table to {args.top_csv}")

    if args.report:
        if not engine.quakes:
            print("No earthquakes left after cleaning; report not written.")
        else:
            from .report import generate_docx_report, ReportConfig, DataSource
            cfg = ReportConfig(source=DataSource(file_name=os.path.basename(args.csv)))
            generate_docx_report(engine, args.report, views=views, config=cfg)
            print(f"Report written to {args.report}")
    return 0


def _print_summary(loaded: int, views) -> None:
    s = views.summary
    print(f"Loaded {loaded} rows, {s.total_count} usable after cleaning.")
    print(f"Total earthquakes:   {format_count(s.total_count)}")
    print(f"Strongest magnitude: {s.max_magnitude if s.max_magnitude is not None else NO_DATA}")
    print(f"Magnitude {views.config.strong_threshold:g}+:       {s.strong_count:,}")
    print(f"Average depth (km):  {s.avg_depth if s.avg_depth is not None else NO_DATA}")
    for c in views.category_stats:
        print(f"  {c.category.value:<9} n={c.count:<6} mean={c.mean_magnitude:.2f} max={c.max_magnitude:.2f}")


if __name__ == "__main__":
    sys.exit(main())

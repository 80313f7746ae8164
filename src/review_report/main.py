"""
Report CLI
Builds the Review Analysis report from a snapshot JSON file
"""
import sys
import logging
from pathlib import Path
import argparse

from . import config
from .config import UnknownPremise
from .report import ReviewAnalysisReport
from .transformers.publishers import reviews_to_frame
from .utils import SnapshotError, load_snapshot, resolve_output_dir, setup_logging, write_json, write_text

logger = logging.getLogger(__name__)


def _slug(container: str) -> str:
    return container.replace("/", "-")


def build_report(args) -> ReviewAnalysisReport:
    """Load the snapshot named by args.input and initialize a report"""
    snapshot = load_snapshot(args.input)

    report = ReviewAnalysisReport.with_default_renderers(
        date_pattern=args.date_pattern,
        unknown_premise=args.unknown_premise,
        registry_ordered=args.registry_order,
    )
    report.initialize(snapshot)
    return report


# =========================
# CLI Commands
# =========================
def cmd_build(args):
    """Render every section and write figures, legends and summary"""
    report = build_report(args)
    output_dir = resolve_output_dir(args.output_dir)

    for container, fig in report.charts.figures.items():
        path = output_dir / f"{_slug(container)}.html"
        fig.write_html(str(path), include_plotlyjs="cdn")
        logger.info(f"Wrote {path}")

    for container, html in report.legends.fragments.items():
        path = output_dir / f"{_slug(container)}.fragment.html"
        write_text(path, html)
        logger.info(f"Wrote {path}")

    write_json(output_dir / "summary.json", report.summary())
    reviews_to_frame(report.store.current()).to_csv(output_dir / "reviews.csv", index=False)

    print("\n✅ Report built!")
    print(f"   Locations: {report.location_count}")
    print(f"   Publishers: {report.publisher_count}")
    print(f"   Figures: {len(report.charts.figures)}")
    print(f"   Output: {output_dir}")


def cmd_summary(args):
    """Print counters and the time axis"""
    report = build_report(args)
    summary = report.summary()

    print(f"Locations:  {summary['location_count']}")
    print(f"Publishers: {summary['publisher_count']}")
    print(f"Reviews:    {summary['review_count']}")
    print(f"Axis:       {len(summary['axis'])} dates")
    period = summary["period"]
    if period["start"]:
        print(f"Period:     {period['start']} to {period['end']}")
    print(f"Premise averages ({', '.join(summary['premise_series'])}):")
    for label, series in zip(summary["labels"], zip(*summary["premise_series"].values())):
        values = ", ".join("-" if v is None else f"{v:.2f}" for v in series)
        print(f"  {label}: {values}")


# =========================
# Main CLI
# =========================
def main(argv=None):
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Review Analysis Report",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Build all figures and legends into ./output
  python -m review_report.main build --input snapshot.json

  # Print counters and premise averages per day
  python -m review_report.main summary --input snapshot.json
        """
    )

    parser.add_argument("--debug", action="store_true", help="Debug mode")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--input", type=Path, required=True,
                        help="Snapshot JSON (list of reviews or {'reviews': [...]})")
    common.add_argument("--date-pattern", default=config.DATE_PATTERN,
                        help="Axis label pattern (date-fns tokens)")
    common.add_argument("--unknown-premise", default=config.UNKNOWN_PREMISE,
                        choices=list(UnknownPremise.ALL),
                        help="Bucket for publishers missing from the registry")
    common.add_argument("--registry-order", action="store_true",
                        help="Order publishers by provider registry")

    # ===== BUILD =====
    build_parser = subparsers.add_parser("build", parents=[common],
                                         help="Render the report to files")
    build_parser.add_argument("--output-dir", type=Path,
                              help=f"Output directory (default: {config.OUTPUT_DIR})")
    build_parser.set_defaults(func=cmd_build)

    # ===== SUMMARY =====
    summary_parser = subparsers.add_parser("summary", parents=[common],
                                           help="Print report counters")
    summary_parser.set_defaults(func=cmd_summary)

    args = parser.parse_args(argv)

    setup_logging(debug=args.debug, log_to_file=False)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except SnapshotError as e:
        logger.error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Command line entry point.

    es-exporter render SNAPSHOT.json [--accept HEADER] [--output FILE] [--summary]

Renders a saved statistics snapshot through the full scrape pipeline and
writes the exposition payload to stdout (or ``--output``). ``--summary``
prints a table of the rendered families to stderr.
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from .config.settings import get_settings
from .orchestrator.scrape import ScrapeResult, scrape
from .stats.loader import load_snapshot_file
from .utils.exceptions import ExporterError
from .utils.logging_utils import setup_logging

logger = logging.getLogger(__name__)


def _parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="es-exporter", description="Elasticsearch statistics to Prometheus exposition")
    sub = p.add_subparsers(dest="command", required=True)
    r = sub.add_parser("render", help="Render a statistics snapshot file")
    r.add_argument("snapshot", help="JSON snapshot (cluster_health, node_stats, indices_stats, cluster_settings)")
    r.add_argument("--accept", default=None, help="Accept header used for content negotiation")
    r.add_argument("--output", default=None, help="Write the payload here instead of stdout")
    r.add_argument("--summary", action="store_true", help="Print a table of rendered families to stderr")
    r.add_argument("--no-indices", action="store_true", help="Skip per-index metrics")
    r.add_argument("--no-cluster-settings", action="store_true", help="Skip allocation settings metrics")
    r.add_argument("--log-level", default=None, help="Override ES_EXPORTER_LOG_LEVEL")
    return p


def render_summary(result: ScrapeResult, console: Console) -> None:
    table = Table(title=f"Rendered families ({result.content_type})")
    table.add_column("Family")
    table.add_column("Type")
    table.add_column("Samples", justify="right")
    for metric in result.catalog.registry.collect():
        table.add_row(metric.name, metric.type, str(len(metric.samples)))
    console.print(table)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = _parser().parse_args(argv)
    try:
        settings = get_settings(refresh=True)
        overrides = {}
        if args.no_indices:
            overrides["indices_enabled"] = False
        if args.no_cluster_settings:
            overrides["cluster_settings_enabled"] = False
        if args.log_level:
            overrides["log_level"] = args.log_level.upper()
        if overrides:
            settings = settings.with_overrides(**overrides)
        setup_logging(settings.log_level)

        snapshot = load_snapshot_file(args.snapshot)
        result = scrape(snapshot, settings, args.accept)
    except ExporterError as e:
        logger.error("render failed: %s", e)
        return 1

    if args.output:
        Path(args.output).write_text(result.text, encoding="utf-8")
        logger.info("wrote %d bytes (%s) to %s", len(result.text), result.content_type, args.output)
    else:
        sys.stdout.write(result.text)
    if args.summary:
        render_summary(result, Console(stderr=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

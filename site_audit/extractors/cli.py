#!/usr/bin/env python
"""
CLI for auditing the link structure of a directory of saved pages.

Builds the page graph, writes it out (DOT or JSONL) and reports orphan
candidates (pages not reachable from the root page) and dangling links.

Usage:
    python -m site_audit.extractors.cli pages/ --site example.com -o site.dot
    python -m site_audit.extractors.cli pages/ --config audit.json --format jsonl -o graph.jsonl
"""
import argparse
import logging
import sys
from pathlib import Path

from site_audit.audit_config import AuditConfig
from site_audit.extractors.graph_builder import GraphBuilder
from site_audit.extractors.link_extractors import AnchorHrefExtractor
from site_audit.extractors.sources import CorpusReadError
from site_audit.graph_writers import to_dot, write_dot, write_jsonl
from site_audit.reachability import find_dangling, find_orphans


# CLI flag -> AuditConfig field
CONFIG_FLAGS = (
    'site', 'locales', 'domain_pattern', 'prefix_pattern', 'root',
    'extension', 'recursive', 'strip_extension',
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="site-audit",
        description="Build the link graph of saved HTML pages and report orphan pages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "input_dir",
        type=Path,
        help="Directory with the saved HTML pages"
    )
    parser.add_argument(
        "-o", "--output",
        type=Path,
        default=None,
        help="Output path for the graph (default: DOT to stdout)"
    )
    parser.add_argument(
        "--format",
        choices=["dot", "jsonl"],
        default="dot",
        help="Graph output format (default: dot)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON audit config; flags given on the command line override it"
    )
    parser.add_argument(
        "--site",
        default=None,
        help="Host of the audited site, e.g. example.com"
    )
    parser.add_argument(
        "--locale",
        dest="locales",
        action="append",
        default=None,
        help="Locale path segment after the host to strip (repeatable), e.g. --locale en"
    )
    parser.add_argument(
        "--domain-pattern",
        default=None,
        help="Regex a link must match to be kept (overrides --site)"
    )
    parser.add_argument(
        "--prefix-pattern",
        default=None,
        help="Regex removed from the front of kept links (overrides --site)"
    )
    parser.add_argument(
        "--root",
        default=None,
        help="Identifier of the entry page (default: index)"
    )
    parser.add_argument(
        "--extension",
        default=None,
        help="Only read files with this extension, e.g. .html"
    )
    parser.add_argument(
        "--recursive",
        action="store_true",
        default=None,
        help="Read pages from subdirectories too"
    )
    parser.add_argument(
        "--strip-extension",
        action="store_true",
        default=None,
        help="Drop the file extension from page identifiers"
    )
    parser.add_argument(
        "--edge-labels",
        action="store_true",
        help="Label DOT edges with 'links'"
    )
    parser.add_argument(
        "--fail-on-orphans",
        action="store_true",
        help="Exit with status 2 if any orphan candidate is found"
    )
    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Suppress progress bars and info logging"
    )
    return parser


def load_config(args: argparse.Namespace) -> AuditConfig:
    """Load the config file (if any) and apply command-line overrides."""
    config = AuditConfig.load(args.config) if args.config else AuditConfig()

    data = config.to_dict()
    for name in CONFIG_FLAGS:
        value = getattr(args, name)
        if value is not None:
            data[name] = value
    return AuditConfig.from_dict(data)


def print_report(orphans, dangling) -> None:
    print(f"orphan candidates ({len(orphans)}):")
    for page in sorted(orphans):
        print(f"  - {page}")
    print(f"dangling links ({len(dangling)}):")
    for page in sorted(dangling):
        print(f"  - {page}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.format == "jsonl" and args.output is None:
        parser.error("--format jsonl requires -o/--output")

    # Configure logging
    log_level = logging.WARNING if args.quiet else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(levelname)s: %(message)s'
    )

    try:
        config = load_config(args)

        if not args.input_dir.is_dir():
            logging.error(f"Input directory does not exist: {args.input_dir}")
            sys.exit(1)

        logging.info(f"Auditing {args.input_dir} (root: {config.root!r})")
        builder = GraphBuilder(
            source=config.get_source(args.input_dir),
            link_extractor=AnchorHrefExtractor(),
            normalizer=config.get_normalizer(),
            show_progress=not args.quiet,
        )
        graph = builder.build_graph()

        if args.output is None:
            sys.stdout.write(to_dot(graph, edge_labels=args.edge_labels))
        elif args.format == "jsonl":
            write_jsonl(graph, args.output)
        else:
            write_dot(graph, args.output, edge_labels=args.edge_labels)

        orphans = find_orphans(graph, config.root)
        print_report(orphans, find_dangling(graph))

    except CorpusReadError as e:
        logging.error(str(e))
        sys.exit(1)
    except Exception as e:
        logging.error(f"Audit failed: {e}", exc_info=True)
        sys.exit(1)

    if args.fail_on_orphans and orphans:
        sys.exit(2)


if __name__ == "__main__":
    main()

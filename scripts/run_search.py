"""
CLI script to search the first pages of indexed PDFs.

Usage:
    python scripts/run_search.py "annual report"
    python scripts/run_search.py invoice --reindex
    python scripts/run_search.py invoice --radius 40 --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pdf_scout.core import get_config, ConfigurationError, ScoutError  # noqa: E402
from pdf_scout.core.config_loader import reload_config  # noqa: E402
from pdf_scout.index import ContentCache, FileIndex  # noqa: E402
from pdf_scout.indexer import IndexBuilder  # noqa: E402
from pdf_scout.search import SearchEngine, extract_snippet, highlight_match  # noqa: E402


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Search inside the first page of indexed PDFs"
    )

    parser.add_argument("query", help="Text to search for (case-insensitive)")

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--reindex",
        action="store_true",
        help="Rebuild the file index before searching"
    )

    parser.add_argument(
        "--radius",
        type=int,
        default=None,
        help="Snippet characters around the match"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Concurrent text extractions"
    )

    return parser.parse_args()


def main():
    """Main entry point for the search CLI."""
    args = parse_args()

    if args.config:
        reload_config(Path(args.config))

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    radius = args.radius if args.radius is not None else config.search.snippet_radius

    cache = ContentCache()
    builder = IndexBuilder(file_index=FileIndex(), cache=cache)

    try:
        if args.reindex:
            builder.rebuild()
        files = builder.load_or_build()

        engine = SearchEngine(cache=cache, max_workers=args.workers)
        results = engine.search(files, args.query)
    except ScoutError as e:
        print(f"Search failed: {e.message}")
        sys.exit(1)

    stats = engine.last_stats
    print(f"{len(results)} matches in {len(files)} PDFs ({stats.execution_time_ms:.0f} ms)")
    print("-" * 60)

    for indexed in results:
        entry = cache.get(indexed.path)
        snippet = extract_snippet(entry.text if entry else "", args.query, radius)
        print(indexed.path)
        if snippet:
            print(f"    ...{highlight_match(snippet, args.query)}...")

    sys.exit(0 if results else 1)


if __name__ == "__main__":
    main()

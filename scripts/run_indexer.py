"""
CLI script to rebuild the PDF Scout file index.

Usage:
    python scripts/run_indexer.py                       # Crawl configured roots
    python scripts/run_indexer.py --root ~/Papers       # Crawl specific folders
    python scripts/run_indexer.py --config path/to/config.json
"""

import argparse
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from pdf_scout.core import get_config, get_logger, ConfigurationError, ScoutError  # noqa: E402
from pdf_scout.core.config_loader import reload_config  # noqa: E402
from pdf_scout.indexer import IndexBuilder  # noqa: E402


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Crawl folders and rebuild the PDF index"
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to custom config.json file"
    )

    parser.add_argument(
        "--root",
        action="append",
        dest="roots",
        help="Folder to crawl instead of the configured roots (repeatable)"
    )

    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only print the summary"
    )

    return parser.parse_args()


def main():
    """Main entry point for the indexer CLI."""
    args = parse_args()

    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}")
            sys.exit(1)
        reload_config(config_path)

    try:
        config = get_config()
    except ConfigurationError as e:
        print(f"Configuration error: {e.message}")
        sys.exit(1)

    logger = get_logger(__name__)

    roots = [Path(root).expanduser() for root in args.roots] if args.roots else config.crawl.roots

    if not roots:
        print("Error: no folders to crawl (set crawl.roots or pass --root)")
        sys.exit(1)

    if not args.quiet:
        print("=" * 60)
        print("PDF Scout - Indexer")
        print("=" * 60)
        for root in roots:
            print(f"Root:              {root}")
        print(f"Cache directory:   {config.paths.cache_directory}")
        print("=" * 60)

    try:
        stats = IndexBuilder(roots=roots).rebuild()
    except ScoutError as e:
        logger.error(f"Indexing failed: {e.message}")
        print(f"Indexing failed: {e.message}")
        sys.exit(1)

    print("=" * 60)
    print("Indexing Complete")
    print("=" * 60)
    print(f"PDFs indexed:        {stats.files_indexed:,}")
    print(f"Folders visited:     {stats.directories_visited:,}")
    print(f"Paths skipped:       {len(stats.skipped_paths):,}")
    print(f"Cache entries pruned:{stats.cache_entries_pruned:>6,}")
    print(f"Duration:            {stats.duration_ms / 1000:.1f}s")
    print("=" * 60)

    if stats.skipped_paths:
        print(f"\nSkipped ({len(stats.skipped_paths)}):")
        for path in stats.skipped_paths[:20]:
            print(f"  - {path}")
        if len(stats.skipped_paths) > 20:
            print(f"  ... and {len(stats.skipped_paths) - 20} more")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()

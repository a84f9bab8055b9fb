#!/usr/bin/env python3
"""
Main entry point for the TF-IDF document search engine.

This script provides a command-line interface for the search engine.
"""

import argparse
import logging
import sys

from docsearch import TextSearchEngine
from docsearch.errors import SearchEngineError
import config


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else getattr(logging, str(config.LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Document search engine with TF-IDF ranking",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                    # Start interactive search
  python main.py --corpus-dir ./docs                # Use custom corpus directory
  python main.py --query "machine learning"         # Single query mode
  python main.py --build-only --stats               # Just build the index
        """
    )

    parser.add_argument(
        "--corpus-dir",
        type=str,
        default=None,
        help="Directory containing documents (default: data/)"
    )

    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Single query to process (non-interactive mode)"
    )

    parser.add_argument(
        "--top-k",
        type=int,
        default=None,
        help="Number of results to return (default: 10)"
    )

    parser.add_argument(
        "--build-only",
        action="store_true",
        help="Only build the index, don't start interactive search"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show index statistics after building"
    )

    parser.add_argument(
        "--db-path",
        type=str,
        default=None,
        help="SQLite file for TF-IDF vectors (default: index/tfidf_vectors.db)"
    )

    parser.add_argument(
        "--no-store",
        action="store_true",
        help="Do not persist TF-IDF vectors"
    )

    parser.add_argument(
        "--df-mode",
        choices=["document", "occurrence"],
        default=None,
        help="Document frequency semantics (default: document)"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging"
    )
    return parser


def main(argv=None):
    """Main entry point for the search engine."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    overrides = {}
    if args.db_path:
        overrides["VECTOR_DB_PATH"] = args.db_path
    if args.no_store:
        overrides["VECTOR_DB_PATH"] = None
    if args.df_mode:
        overrides["DF_MODE"] = args.df_mode

    engine = TextSearchEngine(corpus_dir=args.corpus_dir, config_dict=overrides)

    try:
        report = engine.build_index()
        print(engine.result_formatter.format_report(report))

        if args.stats:
            print("\n=== Index Statistics ===")
            for key, value in engine.get_stats().items():
                print(f"{key}: {value}")
            engine.snapshot.index.summarize_index()

        if args.build_only:
            return 0

        if args.query is not None:
            engine.result_formatter.print_results_table(engine.search(args.query, top_k=args.top_k))
        else:
            engine.interactive_search()
    except SearchEngineError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        engine.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())

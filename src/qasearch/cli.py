"""CLI entry point for qasearch.

This is the top-level application: it decides the exit status when a search
backend is unusable.  Adapters only raise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

logger = logging.getLogger(__name__)

EXIT_SEARCH_FAILED = 1
EXIT_CONFIG_ERROR = 2


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point: search each query and print the results as JSON."""
    parser = argparse.ArgumentParser(
        prog="qasearch",
        description="qasearch — Evidence snippets from a search backend for question answering",
    )
    parser.add_argument(
        "queries",
        nargs="+",
        help="Query strings, matched against the content field",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        default=None,
        help="Search backend URL (overrides config)",
    )
    parser.add_argument(
        "--max-results",
        "-n",
        type=int,
        default=None,
        help="Maximum results per query (overrides config)",
    )
    parser.add_argument(
        "--retries",
        type=int,
        default=None,
        help="Retries after a failed backend call (overrides config)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["debug", "info", "warning", "error"],
        default=None,
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"qasearch {_get_version()}",
    )

    args = parser.parse_args(argv)

    from pydantic import ValidationError

    from qasearch.adapters.base.exceptions import ConfigurationError, SearchExhausted
    from qasearch.adapters.base.registry import AdapterNotFoundError
    from qasearch.config.settings import Settings
    from qasearch.core.miner import KnowledgeMiner
    from qasearch.observability.logging import setup_logging

    # Load settings
    try:
        if args.config:
            config_path = Path(args.config)
            if not config_path.exists():
                print(f"Error: Config file not found: {config_path}", file=sys.stderr)
                sys.exit(EXIT_CONFIG_ERROR)
            settings = Settings.from_yaml(config_path)
        else:
            settings = Settings()

        # Apply CLI overrides
        if args.endpoint:
            settings.search.endpoint = args.endpoint
        if args.max_results is not None:
            settings.search.max_results_per_query = args.max_results
        if args.retries is not None:
            settings.search.retry.max_retries = args.retries
        if args.log_level:
            settings.observability.log_level = args.log_level
    except ValidationError as e:
        print(f"Error: Invalid configuration:\n{e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    if any(not query.strip() for query in args.queries):
        print("Error: Query strings must not be empty", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)

    setup_logging(settings.observability)

    miner = KnowledgeMiner(settings)
    try:
        results = asyncio.run(miner.mine(args.queries))
    except (ConfigurationError, AdapterNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(EXIT_CONFIG_ERROR)
    except SearchExhausted as e:
        logger.error("Search backend unavailable: %s", e)
        print(
            f"Error: search failed after {e.attempts} attempts against {e.endpoint}.\n"
            f"  → Last error: {e.last_error}\n"
            f"  → Check that the backend is running and QASEARCH_SEARCH__ENDPOINT is correct.",
            file=sys.stderr,
        )
        sys.exit(EXIT_SEARCH_FAILED)

    json.dump([r.model_dump() for r in results], sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")


def _get_version() -> str:
    """Get the package version."""
    try:
        from qasearch import __version__

        return __version__
    except ImportError:
        return "unknown"


if __name__ == "__main__":
    main()

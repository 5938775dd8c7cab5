"""Command-line entry point: run the tally scenarios.

Usage
-----
::

    pytally                  # text output
    pytally --json           # one JSON object per scenario
    pytally --quiet          # no per-dispatch state lines

The upper bound and step are read from ``TALLY_MAX_COUNT`` (at most 15)
and ``TALLY_STEP``.
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence

from pytally import __version__
from pytally.config import TallyConfig
from pytally.exceptions import TallyConfigError
from pytally.scenarios import run_scenarios
from pytally.state.store import create_store

_logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pytally", description="Run the tally store scenarios.")
    parser.add_argument("--json", action="store_true", help="Output as machine-readable JSON")
    parser.add_argument("--quiet", action="store_true", help="Do not echo the state after every dispatch")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = TallyConfig.from_env()
    except TallyConfigError as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2
    _logger.info("Running scenarios with %s", config)

    with create_store(config=config) as store:
        results = run_scenarios(store, config=config, as_json=args.json, echo_state=not args.quiet)

    failed = [r for r in results if not r.passed]
    if failed:
        _logger.error("%d of %d scenario(s) failed", len(failed), len(results))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

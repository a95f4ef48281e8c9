#!/usr/bin/env python3
"""Command-line access to the funding advisor without the HTTP server.

Usage locally (from backend/):
    python -m scripts.run_lookup lookup "Acme Oy"                     # quick lookup
    python -m scripts.run_lookup lookup "Acme Oy" --extra "B2B SaaS"  # detailed lookup
    python -m scripts.run_lookup match 7                              # investor match for company 7
    python -m scripts.run_lookup history --limit 5                    # latest history entries

Output is the same JSON the HTTP API returns. Expected failures (unknown
company, missing agent prompt, provider error) print the error body and exit 1.
"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

# Ensure the project root is on the path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from funding_advisor.config import Settings
from funding_advisor.domain.errors import AdvisorError
from funding_advisor.facade import AdvisoryFacade

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger("funding_advisor.cli")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run funding advisor lookups from the command line.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    sub = parser.add_subparsers(dest="command", required=True)

    lookup = sub.add_parser("lookup", help="Enrich a company and record a lookup case")
    lookup.add_argument("company_name", help="Company name, e.g. 'Acme Oy'")
    lookup.add_argument(
        "--extra",
        default=None,
        help="Free-text context; makes this a detailed lookup",
    )

    match = sub.add_parser("match", help="Generate an investor report for a stored company")
    match.add_argument("company_id", help="Company id returned by a lookup")

    history = sub.add_parser("history", help="Show the latest lookups and investor reports")
    history.add_argument("--limit", default=None, help="Number of entries (1-100, default 20)")

    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    settings = Settings()

    if args.command in ("lookup", "match") and not settings.anthropic_api_key:
        logger.error("ANTHROPIC_API_KEY is not set. Add it to backend/.env")
        return 1

    t0 = time.time()
    try:
        with AdvisoryFacade(settings=settings) as facade:
            if args.command == "lookup":
                result = facade.lookup(args.company_name, args.extra)
            elif args.command == "match":
                result = facade.match_investors(args.company_id)
            else:
                result = {"history": facade.history(args.limit)}
    except AdvisorError as exc:
        print(json.dumps(exc.to_dict(), indent=2, ensure_ascii=False))
        return 1

    print(json.dumps(result, indent=2, ensure_ascii=False))
    logger.info("%s finished in %.1fs", args.command, time.time() - t0)
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Command-line interface for check-pages.
"""
from __future__ import annotations

import argparse
import sys
from typing import Any, Dict, List, Optional

from check_pages import __version__
from check_pages.config import CheckConfig, ConfigurationError, load_options
from check_pages.core import run_checks, summarize
from check_pages.http import Fetcher
from check_pages.reporting import Reporter

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_CONFIG = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-pages",
        description="Check web pages for broken links, XHTML well-formedness and slow responses.",
    )
    parser.add_argument("page_urls", nargs="*", metavar="URL", help="Page to check (repeatable)")
    parser.add_argument("--config", help="JSON options file (camelCase keys, optionally under \"options\")")
    parser.add_argument("--check-links", action="store_true", default=None, help="Check every link, image, script and media reference")
    parser.add_argument("--only-same-domain-links", action="store_true", default=None, help="Only check links on the page's own host")
    parser.add_argument("--disallow-redirect", action="store_true", default=None, help="Treat redirected links as failures")
    parser.add_argument("--ignore", action="append", dest="links_to_ignore", metavar="URL", help="Link to skip (exact match, repeatable)")
    parser.add_argument("--check-xhtml", action="store_true", default=None, help="Check pages for XHTML well-formedness")
    parser.add_argument("--max-response-time", type=float, metavar="MS", help="Fail pages slower than this many milliseconds")
    parser.add_argument("--timeout", type=float, metavar="S", help="Per-request timeout in seconds (default: 15)")
    parser.add_argument("--user-agent", help=f"User-Agent header (default: check-pages/{__version__})")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def collect_options(args: argparse.Namespace) -> Dict[str, Any]:
    """Merge the options file (if any) with command-line values; the command line wins."""
    options: Dict[str, Any] = load_options(args.config) if args.config else {}

    if args.page_urls:
        options["pageUrls"] = args.page_urls
    overrides = {
        "checkLinks": args.check_links,
        "onlySameDomainLinks": args.only_same_domain_links,
        "disallowRedirect": args.disallow_redirect,
        "linksToIgnore": args.links_to_ignore,
        "checkXhtml": args.check_xhtml,
        "maxResponseTime": args.max_response_time,
        "timeout": args.timeout,
        "userAgent": args.user_agent,
    }
    options.update({key: value for key, value in overrides.items() if value is not None})
    return options


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the check-pages CLI."""
    args = build_parser().parse_args(argv)

    try:
        config = CheckConfig.from_options(collect_options(args))
    except ConfigurationError as e:
        sys.stderr.write(f"Configuration error: {e}\n")
        return EXIT_CONFIG

    reporter = Reporter(color=False if args.no_color else None)
    fetcher = Fetcher(user_agent=config.user_agent, timeout_s=config.timeout)
    outcome: List[int] = []

    try:
        run_checks(config, outcome.append, reporter=reporter, fetcher=fetcher)
    except KeyboardInterrupt:
        sys.stderr.write("\n\nInterrupted; issues so far are listed above.\n")
        return EXIT_INTERRUPTED
    finally:
        fetcher.close()

    issue_count = outcome[0]
    sys.stderr.write(f"\n{summarize(issue_count)}\n")
    return EXIT_ISSUES if issue_count else EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())

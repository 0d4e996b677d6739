#!/usr/bin/env python3
"""
Issue Browser - Main CLI entrypoint

Browse open source repositories and their GitHub issues from the terminal,
or start the HTTP API that serves the browser frontend.

Usage:
    python main.py browse facebook/react                  # interactive issue list
    python main.py browse facebook/react --per-page 50
    python main.py issue facebook/react 12345             # single issue + comments
    python main.py explore --port 8000                    # start the API server
"""

import argparse
import sys

from backend.server import add_server_arguments, run_server
from explorer.console import render_detail, run_browser
from explorer.pipeline import IssueQueryPipeline
from fetchers.errors import IssueQueryError
from fetchers.github import GitHubFetcher, parse_repo_name
from utils.config_loader import load_config
from utils.logger import setup_logger

logger = setup_logger(name=__name__)


def initialize_fetcher(config) -> GitHubFetcher:
    """
    Initialize the GitHub fetcher from configuration.

    A missing token is fine: requests go out unauthenticated.
    """
    if not config.credentials.github_token:
        logger.info("GITHUB_TOKEN not set - GitHub allows 60 unauthenticated requests per hour")
    return GitHubFetcher(
        token=config.credentials.github_token,
        base_url=config.github_api_url,
        timeout=config.request_timeout
    )


def browse(repository: str, per_page: int, fetcher: GitHubFetcher) -> bool:
    """Run the interactive browser. Returns False if the repo string is malformed."""
    try:
        parse_repo_name(repository)
    except IssueQueryError as e:
        logger.error(e.message)
        return False

    pipeline = IssueQueryPipeline(fetcher, per_page=per_page)
    run_browser(pipeline, repository)
    return True


def show_issue(repository: str, number: int, fetcher: GitHubFetcher) -> bool:
    """Print one issue with its comments. Returns False on failure."""
    try:
        owner, name = parse_repo_name(repository)
        detail = fetcher.fetch_issue_detail(owner, name, number)
    except IssueQueryError as e:
        logger.error(f"Failed to load {repository}#{number}: {e.message}")
        return False

    print(render_detail(detail))
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Issue Browser - Find issues to contribute to in open source projects",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Browse issues, 30 per page (default)
  python main.py browse facebook/react

  # Read one issue and its discussion
  python main.py issue vercel/next.js 5678

  # Serve the HTTP API
  python main.py explore --port 8080
        """
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Browse command
    browse_parser = subparsers.add_parser(
        "browse",
        help="Interactively browse a repository's issues"
    )
    browse_parser.add_argument(
        "repository",
        help="Repository in format 'owner/repo' (e.g., 'facebook/react')"
    )
    browse_parser.add_argument(
        "--per-page",
        type=int,
        default=None,
        help="Issues per page, 1-100 (default: ISSUES_PER_PAGE or 30)"
    )

    # Issue command
    issue_parser = subparsers.add_parser(
        "issue",
        help="Show a single issue with its comments"
    )
    issue_parser.add_argument(
        "repository",
        help="Repository in format 'owner/repo'"
    )
    issue_parser.add_argument(
        "number",
        type=int,
        help="Issue number"
    )

    # Explore command
    explore_parser = subparsers.add_parser(
        "explore",
        help="Start the Issue Browser API server"
    )
    add_server_arguments(explore_parser)

    return parser


def main():
    """Main CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args()

    # Show help if no command provided
    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.command == "explore":
        run_server(args.host, args.port, reload=not args.no_reload)
        sys.exit(0)

    config = load_config()
    setup_logger(config.log_level)
    fetcher = initialize_fetcher(config)

    if args.command == "browse":
        per_page = args.per_page if args.per_page is not None else config.issues_per_page
        if not 1 <= per_page <= 100:
            logger.error("--per-page must be between 1 and 100")
            sys.exit(1)
        success = browse(args.repository, per_page, fetcher)
    else:
        success = show_issue(args.repository, args.number, fetcher)

    sys.exit(0 if success else 1)


if __name__ == "__main__":
    main()

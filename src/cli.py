"""
Command line entry point running a single collection cycle.

    python src/cli.py https://github.com/owner/name --token "$GITHUB_TOKEN"
    python src/cli.py owner/name --show
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from config import settings, logger
from app import build_pipeline
from exceptions import PRHarvesterError
from miners.repo_identifier import parse_repo_identifier


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        description="Fetch qualified pull requests of a GitHub repository into a JSON file."
    )
    p.add_argument("repo", help="Repository URL or owner/name.")
    p.add_argument("--token", default=None, help="GitHub token (default: GITHUB_TOKEN setting).")
    p.add_argument(
        "--print", dest="print_prs", action="store_true", help="Also print the records to stdout."
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Print the previously stored records instead of fetching.",
    )
    return p.parse_args(argv)


def _dump(prs) -> str:
    return json.dumps([pr.to_record() for pr in prs], indent=2, ensure_ascii=False)


def show(pipeline, repo: str) -> int:
    identifier = parse_repo_identifier(repo)
    prs = pipeline.store.load(identifier)
    if prs is None:
        print(f"No stored pull requests for {identifier.full_name}", file=sys.stderr)
        return 1
    print(_dump(prs))
    return 0


async def run(args: argparse.Namespace) -> int:
    pipeline = build_pipeline(settings)
    try:
        if args.show:
            return show(pipeline, args.repo)
        result = await pipeline.collect(args.repo, args.token)
    except PRHarvesterError as e:
        logger.error({"message": "Collection failed", "repository": args.repo, "error": e.message})
        print(e.message, file=sys.stderr)
        return 1

    if args.print_prs:
        print(_dump(result.prs))
    print(result.file_path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    return asyncio.run(run(parse_args(argv)))


if __name__ == "__main__":
    raise SystemExit(main())

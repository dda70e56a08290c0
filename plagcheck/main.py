import argparse
import asyncio
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from plagcheck.config import DEFAULT_MIN_SIMILARITY, DEFAULT_SHINGLE_SIZE
from plagcheck.logger import logger
from plagcheck.schemas.plagiarism_schemas import CheckOptions
from plagcheck.services.plagiarism_checker import (
    add_document,
    check_plagiarism,
    check_plagiarism_batch,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plagcheck",
        description="Check text for plagiarism against a local MongoDB corpus and RapidAPI",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Check one or more texts for plagiarism")
    check.add_argument("texts", nargs="*", help="Text(s) to check")
    check.add_argument("--file", type=Path, action="append", default=[], help="Read a text to check from a file")
    check.add_argument("--no-local", action="store_true", help="Skip the local database check")
    check.add_argument("--remote", action="store_true", help="Also check the internet via RapidAPI")
    check.add_argument("--threshold", type=float, default=DEFAULT_MIN_SIMILARITY,
                       help="Minimum Jaccard similarity (0-1) for a local match")
    check.add_argument("--shingle-size", type=int, default=DEFAULT_SHINGLE_SIZE,
                       help="Words per shingle for the local check (1-10)")
    check.add_argument("--include-citations", action="store_true", help="Ask RapidAPI for citations")
    check.add_argument("--scrape-sources", action="store_true", help="Let RapidAPI scrape sources")

    add = sub.add_parser("add", help="Add a text to the local plagiarism database")
    add.add_argument("text", nargs="?", help="Text to add")
    add.add_argument("--file", type=Path, help="Read the text to add from a file")

    return parser


def _read_file(parser: argparse.ArgumentParser, path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        parser.error(f"cannot read {path}: {e}")


def _collect_texts(parser: argparse.ArgumentParser, texts: List[str], files: List[Path]) -> List[str]:
    return list(texts) + [_read_file(parser, f) for f in files]


def options_from_args(args: argparse.Namespace) -> CheckOptions:
    return CheckOptions(
        check_local_database=not args.no_local,
        check_remote=args.remote,
        min_similarity_score=args.threshold,
        shingle_size=args.shingle_size,
        include_citations=args.include_citations,
        scrape_sources=args.scrape_sources,
    )


async def _run_check(texts: List[str], options: CheckOptions) -> None:
    if len(texts) == 1:
        report = await check_plagiarism(texts[0], options)
        print(report.model_dump_json(indent=2))
        return

    reports = await check_plagiarism_batch(texts, options)
    print("[" + ",\n".join(r.model_dump_json(indent=2) for r in reports) + "]")


async def _run_add(text: str) -> None:
    result = await add_document(text)
    print(result.model_dump_json(indent=2))


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logger.debug(f"Running command: {args.command}")

    if args.command == "check":
        texts = _collect_texts(parser, args.texts, args.file)
        if not texts:
            parser.error("check: provide at least one text or --file")
        try:
            options = options_from_args(args)
        except ValidationError as e:
            parser.error(f"check: invalid options\n{e}")
        asyncio.run(_run_check(texts, options))
    elif args.command == "add":
        if args.file is not None:
            text = _read_file(parser, args.file)
        elif args.text is not None:
            text = args.text
        else:
            parser.error("add: provide a text or --file")
        asyncio.run(_run_add(text))


if __name__ == "__main__":
    sys.exit(main())

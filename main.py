"""CLI entrypoint: scrape one article page and submit its references."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from confirmation import PromptConfirmation, StaticConfirmation
from document import SoupDocument, fetch_document
from errors import CiteletError, DocumentUnavailableError
from pipeline import invalid_reason, scrape
from registry import build_default_registry
from stores import default_config_store, default_dedup_store
from transport import HttpTransport
from workflow import SubmissionWorkflow, WorkflowOutcome


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line flags."""
    parser = argparse.ArgumentParser(description="Send an article's references to the citelet server")
    parser.add_argument("url", nargs="?", help="Article page to fetch and process")
    parser.add_argument(
        "--html-file",
        type=Path,
        default=None,
        help="Process a saved page instead of fetching it (requires the page URL)",
    )
    parser.add_argument("--url", dest="page_url", default=None, help="URL of the page saved in --html-file")
    parser.add_argument(
        "--mode",
        choices=["confirm", "noconfirm"],
        default=None,
        help="Persist the confirmation mode before running",
    )
    parser.add_argument("--yes", action="store_true", help="Answer the confirmation prompt with yes")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Only print the scraped record, without touching stores or the server",
    )
    args = parser.parse_args(argv)

    if args.html_file is not None:
        args.url = args.page_url or args.url
        if not args.url:
            parser.error("--html-file needs the page URL (positional or --url)")
    elif not args.url:
        parser.error("a page URL is required")
    return args


def load_document(args: argparse.Namespace) -> SoupDocument:
    if args.html_file is not None:
        try:
            html = args.html_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentUnavailableError(
                f"Could not read {args.html_file}: {exc}", {"path": str(args.html_file)}
            ) from exc
        return SoupDocument(html, args.url)
    return fetch_document(args.url)


async def run(args: argparse.Namespace) -> WorkflowOutcome | None:
    """Run one workflow for the page named on the command line."""
    registry = build_default_registry()
    doc = load_document(args)

    if args.dry_run:
        record = scrape(doc, registry)
        print(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))
        reason = invalid_reason(record)
        if reason:
            logging.info("[dry-run] Record would be skipped: %s", reason)
        else:
            logging.info("[dry-run] Record would be submitted")
        return None

    config = default_config_store()
    if args.mode is not None:
        await config.set_doconfirm(args.mode == "confirm")
        logging.info("Confirmation mode set to %s", args.mode)

    workflow = SubmissionWorkflow(
        registry=registry,
        dedup=default_dedup_store(),
        config=config,
        confirmation=StaticConfirmation(True) if args.yes else PromptConfirmation(),
        transport=HttpTransport(),
    )
    outcome = await workflow.run(doc)
    if outcome.stored:
        logging.info("References for %s sent and recorded", doc.current_url())
    else:
        logging.info("Nothing sent for %s (%s)", args.url, outcome.reason)
    return outcome


def main(argv: list[str] | None = None) -> int:
    """Initialize config and process one page. Returns the exit status."""
    load_dotenv()
    logging.basicConfig(
        level=os.getenv("CITELET_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(message)s",
    )
    args = parse_args(argv)

    try:
        asyncio.run(run(args))
    except CiteletError as exc:
        logging.error("citelet failed: %s", exc)
        return 1
    except Exception:  # broad by design so the CLI always exits with a status
        logging.exception("citelet crashed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

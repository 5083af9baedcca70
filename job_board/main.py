"""CLI entry point - browse job pages and manage bookmarks from a terminal."""

import argparse
import logging
import sys
from pathlib import Path

from job_board.bookmarks.coordinator import BookmarkStateCoordinator
from job_board.config import AppConfig, load_config, validate_config
from job_board.errors import StorageError
from job_board.jobs.api_client import JobFetchClient
from job_board.jobs.listing import JobListCoordinator, ListState
from job_board.jobs.models import Job, bookmark_key
from job_board.storage.bookmark_store import BookmarkStore
from job_board.utils.logging_config import setup_logging

logger = logging.getLogger("job_board")


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Job Board - browse listings and keep bookmarks",
    )
    parser.add_argument(
        "--config", default="config.yaml",
        help="Path to config file (default: config.yaml; built-in defaults if missing)",
    )
    parser.add_argument(
        "--pages", type=int, default=1,
        help="Number of pages to fetch (default: 1)",
    )
    parser.add_argument(
        "--bookmarks", action="store_true",
        help="Print saved bookmarks and exit",
    )
    parser.add_argument(
        "--toggle-bookmark", metavar="JOB_ID",
        help="Bookmark (or un-bookmark) a job found in the fetched pages",
    )
    parser.add_argument(
        "--clear-bookmarks", action="store_true",
        help="Delete every saved bookmark and exit",
    )
    return parser.parse_args(argv)


def format_job(job: Job, bookmarked: bool = False) -> str:
    marker = "*" if bookmarked else " "
    return f"{marker} [{job.id}] {job.title} @ {job.company} | {job.location} | {job.salary} | {job.phone}"


def load_pages(listing: JobListCoordinator, pages: int) -> bool:
    """Load up to ``pages`` pages. Returns False if the listing ended in error."""
    listing.load_first_page()
    for _ in range(pages - 1):
        if not listing.load_more():
            break
    return listing.state is not ListState.ERROR


def print_bookmarks(bookmarks: BookmarkStateCoordinator):
    jobs = bookmarks.jobs
    print(f"\n=== Bookmarks ({len(jobs)}) ===")
    if not jobs:
        print("No bookmarks yet. Bookmark jobs to see them here!")
    for job in jobs:
        print(format_job(job, bookmarked=True))
    print()


def clear_bookmarks(store: BookmarkStore) -> int:
    try:
        removed = store.count()
        store.clear()
    except StorageError as e:
        print(f"Failed to clear bookmarks: {e}", file=sys.stderr)
        return 1
    print(f"Removed {removed} bookmark(s)")
    return 0


def run(config: AppConfig, args: argparse.Namespace) -> int:
    with BookmarkStore(config.bookmarks_db_path) as store, \
            JobFetchClient(config.api.base_url, timeout=config.api.timeout) as client:
        if args.clear_bookmarks:
            return clear_bookmarks(store)

        bookmarks = BookmarkStateCoordinator(store)
        if not bookmarks.reload():
            print(bookmarks.error, file=sys.stderr)
            if args.bookmarks:
                return 1

        if args.bookmarks:
            print_bookmarks(bookmarks)
            return 0

        listing = JobListCoordinator(client, config.listing.page_size_threshold)
        try:
            if not load_pages(listing, max(args.pages, 1)):
                print(listing.error, file=sys.stderr)
                return 1

            if args.toggle_bookmark is not None:
                key = bookmark_key(args.toggle_bookmark)
                job = next((j for j in listing.jobs if j.key == key), None)
                if job is None:
                    print(f"Job {args.toggle_bookmark} not found in the first {args.pages} page(s)", file=sys.stderr)
                    return 1
                bookmarked = bookmarks.toggle(job)
                if bookmarks.error:
                    print(bookmarks.error, file=sys.stderr)
                    return 1
                print(f"{'Bookmarked' if bookmarked else 'Removed bookmark for'}: {format_job(job)}")
                return 0

            print(f"\n=== Jobs ({len(listing.jobs)}, more available: {'yes' if listing.has_more else 'no'}) ===")
            for job in listing.jobs:
                print(format_job(job, bookmarks.is_bookmarked(job.id)))
            print()
            return 0
        finally:
            listing.close()


def main(argv=None):
    args = parse_args(argv)

    if Path(args.config).exists():
        config = load_config(args.config)
    else:
        config = AppConfig()

    setup_logging(config.log_dir)

    for w in validate_config(config):
        logger.warning("Config: %s", w)

    sys.exit(run(config, args))


if __name__ == "__main__":
    main()

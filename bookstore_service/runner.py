#!/usr/bin/env python3
"""
Bookstore query runner
======================

Usage:
    python runner.py

Connects to MongoDB, runs the fixed sequence of bookstore queries against
``plp_bookstore.books`` (basic queries, advanced queries, aggregation
pipelines, indexing) and prints every result.  The connection is closed
whether the sequence finishes or fails.

Run ``python seed.py --drop`` first to load the sample books.
"""

import sys
from typing import Any, Optional

from pymongo.collection import Collection

import queries
from cluster_manager import mongo_client
from config import COLLECTION_NAME, DATABASE_NAME
from db_executor import aggregate, delete_one, find_documents, paginate, update_one
from index_utils import create_indexes, explain_find, get_collection_indexes, summarize_explain
from logger import logger
from response_formatter import format_result

SEPARATOR = "=" * 70

UPDATED_TITLE = "Book Title 1"
UPDATED_PRICE = 25.99
DELETED_TITLE = "Old Book"


def colour(text, code):
    """ANSI colour wrapper; plain text when stdout is not a terminal."""
    if not sys.stdout.isatty():
        return text
    return f"\033[{code}m{text}\033[0m"


def bold(t):  return colour(t, 1)
def cyan(t):  return colour(t, 36)


def section(title: str) -> None:
    print(f"\n{SEPARATOR}")
    print(bold(title))
    print(SEPARATOR)


def show(label: str, result: Any) -> None:
    print(cyan(label))
    print(format_result(result))


def run_queries(collection: Collection) -> None:
    """Run every bookstore query against *collection*, printing as it goes."""

    # ---------------------- BASIC QUERIES ----------------------
    section("BASIC QUERIES")

    logger.info("[RUNNER] Step 1 — books in genre Fiction")
    show("Books in genre 'Fiction':", find_documents(collection, queries.by_genre("Fiction")))

    logger.info("[RUNNER] Step 2 — books published after 2015")
    show("Books published after 2015:", find_documents(collection, queries.published_after(2015)))

    logger.info("[RUNNER] Step 3 — books by John Doe")
    show("Books by 'John Doe':", find_documents(collection, queries.by_author("John Doe")))

    logger.info("[RUNNER] Step 4 — update price of %s", UPDATED_TITLE)
    counts = update_one(collection, queries.by_title(UPDATED_TITLE), queries.set_price(UPDATED_PRICE))
    print(
        f"Updated price of {UPDATED_TITLE} "
        f"(matched {counts['matched_count']}, modified {counts['modified_count']})"
    )

    logger.info("[RUNNER] Step 5 — delete %s", DELETED_TITLE)
    counts = delete_one(collection, queries.by_title(DELETED_TITLE))
    print(f"Deleted book with title '{DELETED_TITLE}' (deleted {counts['deleted_count']})")

    # ---------------------- ADVANCED QUERIES ----------------------
    section("ADVANCED QUERIES")

    logger.info("[RUNNER] Step 6 — in stock and published after 2010")
    show(
        "Books in stock and published after 2010:",
        find_documents(collection, queries.in_stock_published_after(2010)),
    )

    logger.info("[RUNNER] Step 7 — projection")
    show(
        "Title, author and price only:",
        find_documents(collection, projection=queries.SUMMARY_PROJECTION),
    )

    logger.info("[RUNNER] Step 8 — sort by price ascending")
    show("Sorted by price (ascending):", find_documents(collection, sort=queries.PRICE_ASCENDING))

    logger.info("[RUNNER] Step 9 — sort by price descending")
    show("Sorted by price (descending):", find_documents(collection, sort=queries.PRICE_DESCENDING))

    logger.info("[RUNNER] Step 10 — pagination")
    show("Page 1:", paginate(collection, page=1, page_size=5)["data"])
    show("Page 2:", paginate(collection, page=2, page_size=5)["data"])

    # ---------------------- AGGREGATION PIPELINES ----------------------
    section("AGGREGATION PIPELINES")

    logger.info("[RUNNER] Step 11 — aggregations")
    show("Average price by genre:", aggregate(collection, queries.average_price_by_genre()))
    show("Author with the most books:", aggregate(collection, queries.top_author()))
    show("Books per publication decade:", aggregate(collection, queries.books_by_decade()))

    # ---------------------- INDEXING ----------------------
    section("INDEXING")

    logger.info("[RUNNER] Step 12 — indexes and explain")
    create_indexes(collection)
    show("Indexes:", get_collection_indexes(collection))

    explain = explain_find(collection, queries.by_title(UPDATED_TITLE))
    show("Explain query with index:", explain)
    show("Plan summary:", summarize_explain(explain))


def run(mongo_uri: Optional[str] = None) -> None:
    with mongo_client(mongo_uri) as client:
        run_queries(client[DATABASE_NAME][COLLECTION_NAME])


def main() -> int:
    try:
        run()
    except Exception as e:
        logger.error("Query run failed: %s", e)
        print(f"ERROR: {e!r}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

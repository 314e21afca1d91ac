#!/usr/bin/env python3
"""
Seed the bookstore collection with sample books.

Usage:
    python seed.py [--drop]

``--drop`` empties the collection first so repeated runs do not pile up
duplicates.
"""

import sys
from typing import List

from pymongo.collection import Collection

from cluster_manager import list_collections, mongo_client
from config import COLLECTION_NAME, DATABASE_NAME
from logger import logger
from schemas import Book

SAMPLE_BOOKS: List[Book] = [
    Book(title="Book Title 1", author="John Doe", genre="Fiction",
         published_year=2018, price=19.99, in_stock=True, pages=320, publisher="Penguin"),
    Book(title="Book Title 2", author="John Doe", genre="Mystery",
         published_year=2021, price=14.5, in_stock=False, pages=280),
    Book(title="Book Title 3", author="John Doe", genre="Thriller",
         published_year=2009, price=12.0, in_stock=True, pages=250),
    Book(title="Old Book", author="Anonymous", genre="History",
         published_year=1952, price=5.0, in_stock=False),
    Book(title="To Kill a Mockingbird", author="Harper Lee", genre="Fiction",
         published_year=1960, price=12.99, in_stock=True, pages=336, publisher="J. B. Lippincott & Co."),
    Book(title="1984", author="George Orwell", genre="Dystopian",
         published_year=1949, price=10.99, in_stock=True, pages=328, publisher="Secker & Warburg"),
    Book(title="Animal Farm", author="George Orwell", genre="Political Satire",
         published_year=1945, price=8.5, in_stock=False, pages=112, publisher="Secker & Warburg"),
    Book(title="The Midnight Library", author="Matt Haig", genre="Fiction",
         published_year=2020, price=16.0, in_stock=True, pages=304, publisher="Canongate"),
    Book(title="Project Hail Mary", author="Andy Weir", genre="Science Fiction",
         published_year=2021, price=22.0, in_stock=True, pages=496, publisher="Ballantine"),
    Book(title="The Martian", author="Andy Weir", genre="Science Fiction",
         published_year=2011, price=11.25, in_stock=True, pages=369, publisher="Crown"),
    Book(title="Sapiens", author="Yuval Noah Harari", genre="Non-Fiction",
         published_year=2011, price=18.75, in_stock=False, pages=443, publisher="Harvill Secker"),
    Book(title="Educated", author="Tara Westover", genre="Memoir",
         published_year=2018, price=15.3, in_stock=True, pages=352, publisher="Random House"),
    Book(title="Where the Crawdads Sing", author="Delia Owens", genre="Fiction",
         published_year=2018, price=13.99, in_stock=False, pages=384, publisher="G. P. Putnam's Sons"),
    Book(title="The Hobbit", author="J. R. R. Tolkien", genre="Fantasy",
         published_year=1937, price=9.99, in_stock=True, pages=310, publisher="George Allen & Unwin"),
    Book(title="Dune", author="Frank Herbert", genre="Science Fiction",
         published_year=1965, price=10.0, in_stock=True, pages=412, publisher="Chilton Books"),
]


def seed_books(collection: Collection, books: List[Book] = SAMPLE_BOOKS, drop: bool = False) -> int:
    """Insert *books* into *collection* and return how many were written."""
    if drop:
        deleted = collection.delete_many({}).deleted_count
        logger.info("Cleared %d existing documents from %s", deleted, collection.name)

    if not books:
        return 0

    result = collection.insert_many([book.to_document() for book in books])
    logger.info("Inserted %d books into %s", len(result.inserted_ids), collection.full_name)
    return len(result.inserted_ids)


def main(argv: List[str]) -> int:
    drop = "--drop" in argv
    try:
        with mongo_client() as client:
            inserted = seed_books(client[DATABASE_NAME][COLLECTION_NAME], drop=drop)
            print(f"Inserted {inserted} books into {DATABASE_NAME}.{COLLECTION_NAME}")
            for info in list_collections(client, DATABASE_NAME):
                print(f"  {info['name']}: ~{info['document_count']} documents")
    except Exception as e:
        logger.error("Seeding failed: %s", e)
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    sys.exit(cli())

"""
The fixed bookstore queries: filters, projections, sort orders and
aggregation pipelines.

Everything here is plain MongoDB request shapes (dicts and lists) so the
executor can run them and the tests can inspect them without a server.
"""

from typing import Any, Dict, List, Tuple

from pymongo import ASCENDING, DESCENDING

Filter = Dict[str, Any]
Pipeline = List[Dict[str, Any]]
SortSpec = List[Tuple[str, int]]


# ---------------------- BASIC FILTERS ----------------------

def by_genre(genre: str) -> Filter:
    return {"genre": genre}


def published_after(year: int) -> Filter:
    """Strictly greater than *year*."""
    return {"published_year": {"$gt": year}}


def by_author(author: str) -> Filter:
    return {"author": author}


def by_title(title: str) -> Filter:
    return {"title": title}


def in_stock_published_after(year: int) -> Filter:
    return {"in_stock": True, "published_year": {"$gt": year}}


# ---------------------- UPDATES ----------------------

def set_price(price: float) -> Dict[str, Any]:
    return {"$set": {"price": price}}


# ---------------------- PROJECTION / SORT ----------------------

SUMMARY_PROJECTION: Dict[str, int] = {"title": 1, "author": 1, "price": 1, "_id": 0}

PRICE_ASCENDING: SortSpec = [("price", ASCENDING)]
PRICE_DESCENDING: SortSpec = [("price", DESCENDING)]


# ---------------------- AGGREGATION PIPELINES ----------------------

def average_price_by_genre() -> Pipeline:
    return [
        {"$group": {"_id": "$genre", "avgPrice": {"$avg": "$price"}}},
    ]


def top_author(limit: int = 1) -> Pipeline:
    """Authors ranked by number of books, keeping the first *limit*."""
    return [
        {"$group": {"_id": "$author", "totalBooks": {"$sum": 1}}},
        {"$sort": {"totalBooks": -1}},
        {"$limit": limit},
    ]


def books_by_decade() -> Pipeline:
    """Count books per decade, ascending.

    ``decade`` is ``year / 10`` with its fractional part subtracted, i.e. the
    floored decade index: 2015 lands in bucket 201, 1999 in 199.
    """
    year_over_ten = {"$divide": ["$published_year", 10]}
    return [
        {
            "$addFields": {
                "decade": {
                    "$subtract": [year_over_ten, {"$mod": [year_over_ten, 1]}],
                },
            },
        },
        {"$group": {"_id": "$decade", "totalBooks": {"$sum": 1}}},
        {"$sort": {"_id": 1}},
    ]


# ---------------------- INDEXES ----------------------

TITLE_INDEX: SortSpec = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX: SortSpec = [("author", ASCENDING), ("published_year", ASCENDING)]

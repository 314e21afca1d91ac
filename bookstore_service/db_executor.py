"""
Database executor: find, pagination, single-document writes and
aggregation against one collection, with timeout protection.
"""

from typing import Any, Dict, List, Optional

from pymongo.collection import Collection
from pymongo.errors import ExecutionTimeout

from config import QUERY_TIMEOUT_MS
from logger import logger
from queries import Filter, Pipeline, SortSpec

# ---------------------- CONSTANTS ----------------------

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 5


# ---------------------- FIND ----------------------

def find_documents(
    collection: Collection,
    mongo_filter: Optional[Filter] = None,
    projection: Optional[Dict[str, int]] = None,
    sort: Optional[SortSpec] = None,
    skip: int = 0,
    limit: int = 0,
) -> List[Dict[str, Any]]:
    """Run a find and materialise the cursor.

    ``skip=0`` and ``limit=0`` mean no offset and no cap, as in PyMongo.
    """
    cursor = collection.find(
        mongo_filter or {},
        projection,
        max_time_ms=QUERY_TIMEOUT_MS,
    )

    if sort:
        cursor = cursor.sort(sort)
    if skip:
        cursor = cursor.skip(skip)
    if limit:
        cursor = cursor.limit(limit)

    try:
        results = list(cursor)
    except ExecutionTimeout:
        raise TimeoutError("Query timed out after exceeding the time limit.")

    logger.debug("find %s on %s returned %d docs", mongo_filter, collection.name, len(results))
    return results


def paginate(
    collection: Collection,
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    mongo_filter: Optional[Filter] = None,
    sort: Optional[SortSpec] = None,
) -> Dict[str, Any]:
    """Return one page of a find in natural (or *sort*) order.

    Returns a dict with:
    - ``data``: list of documents for the current page
    - ``page``: current page number (1-based)
    - ``page_size``: effective page size
    """

    # enforce hard caps
    page = max(1, page)
    page_size = min(max(1, page_size), MAX_PAGE_SIZE)
    skip = (page - 1) * page_size

    data = find_documents(collection, mongo_filter, sort=sort, skip=skip, limit=page_size)
    return {
        "data": data,
        "page": page,
        "page_size": page_size,
    }


# ---------------------- WRITES ----------------------

def update_one(collection: Collection, mongo_filter: Filter, update: Dict[str, Any]) -> Dict[str, int]:
    """Apply *update* to the first match. Zero matches is a no-op, not an error."""
    result = collection.update_one(mongo_filter, update)
    counts = {
        "matched_count": result.matched_count,
        "modified_count": result.modified_count,
    }
    if result.matched_count == 0:
        logger.info("update_one matched nothing for %s", mongo_filter)
    return counts


def delete_one(collection: Collection, mongo_filter: Filter) -> Dict[str, int]:
    """Delete the first match. Zero matches is a no-op, not an error."""
    result = collection.delete_one(mongo_filter)
    if result.deleted_count == 0:
        logger.info("delete_one matched nothing for %s", mongo_filter)
    return {"deleted_count": result.deleted_count}


# ---------------------- AGGREGATE ----------------------

def aggregate(collection: Collection, pipeline: Pipeline) -> List[Dict[str, Any]]:
    try:
        return list(collection.aggregate(pipeline, maxTimeMS=QUERY_TIMEOUT_MS))
    except ExecutionTimeout:
        raise TimeoutError("Aggregation timed out after exceeding the time limit.")

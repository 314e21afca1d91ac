"""
Index utilities: creation, inspection, and query-plan explain.
"""

from typing import Any, Dict, List, Optional

from pymongo.collection import Collection

from logger import logger
from queries import AUTHOR_YEAR_INDEX, TITLE_INDEX, Filter, SortSpec

BOOK_INDEXES: List[SortSpec] = [TITLE_INDEX, AUTHOR_YEAR_INDEX]


# ---------------------- INDEX CREATION ----------------------

def create_indexes(collection: Collection, specs: Optional[List[SortSpec]] = None) -> List[str]:
    """Create each index in *specs* and return the index names.

    Re-creating an index with the same keys and options is a no-op on the
    server, so calling this repeatedly is safe.
    """
    names = []
    for keys in specs if specs is not None else BOOK_INDEXES:
        name = collection.create_index(keys)
        logger.info("Index ready on %s: %s", collection.name, name)
        names.append(name)
    return names


# ---------------------- INDEX INSPECTION ----------------------

def get_collection_indexes(collection: Collection) -> List[Dict[str, Any]]:
    """Return a list of index descriptions for the collection.

    Each entry contains:
    - ``name``: index name
    - ``keys``: list of ``(field, direction)`` pairs
    - ``unique``: whether the index enforces uniqueness
    """
    indexes: List[Dict[str, Any]] = []
    for name, info in collection.index_information().items():
        indexes.append({
            "name": name,
            "keys": info.get("key", []),
            "unique": info.get("unique", False),
        })

    return indexes


# ---------------------- EXPLAIN ----------------------

def explain_find(
    collection: Collection,
    mongo_filter: Filter,
    verbosity: str = "executionStats",
) -> Dict[str, Any]:
    """Run the ``explain`` command for a find on *collection*.

    ``Cursor.explain()`` offers no verbosity argument, so the command is
    issued directly.
    """
    return collection.database.command(
        "explain",
        {"find": collection.name, "filter": mongo_filter},
        verbosity=verbosity,
    )


def _walk_stages(plan: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Flatten a plan tree (``inputStage`` / ``inputStages``) top-down."""
    stages = [plan]
    if "inputStage" in plan:
        stages.extend(_walk_stages(plan["inputStage"]))
    for child in plan.get("inputStages", []):
        stages.extend(_walk_stages(child))
    return stages


def summarize_explain(explain: Dict[str, Any]) -> Dict[str, Any]:
    """Pick out the parts of an explain result worth a glance.

    Handles both classic plans and the ``queryPlan`` wrapper newer servers
    put around the winning plan.
    """
    winning = explain.get("queryPlanner", {}).get("winningPlan", {})
    winning = winning.get("queryPlan", winning)
    stages = _walk_stages(winning) if winning else []

    index_name = None
    for stage in stages:
        if stage.get("stage") == "IXSCAN":
            index_name = stage.get("indexName")
            break

    stats = explain.get("executionStats", {})
    return {
        "stages": [s.get("stage") for s in stages],
        "index_used": index_name,
        "n_returned": stats.get("nReturned"),
        "total_keys_examined": stats.get("totalKeysExamined"),
        "total_docs_examined": stats.get("totalDocsExamined"),
        "execution_time_ms": stats.get("executionTimeMillis"),
    }

from contextlib import contextmanager
from typing import Iterator, Optional

from pymongo import MongoClient
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from config import MONGO_URI, SERVER_SELECTION_TIMEOUT_MS
from logger import logger


def connect_to_cluster(mongo_uri: str = MONGO_URI) -> MongoClient:
    """Create a MongoClient and ping the server before handing it out."""
    client = MongoClient(mongo_uri, serverSelectionTimeoutMS=SERVER_SELECTION_TIMEOUT_MS)
    try:
        client.admin.command("ping")  # force connection test
    except ServerSelectionTimeoutError as e:
        client.close()
        raise ConnectionError(
            "Connection timed out. Check your MongoDB URI and network."
        ) from e
    except ConnectionFailure as e:
        client.close()
        raise ConnectionError("Failed to connect to MongoDB cluster") from e
    logger.info("Connected to MongoDB at %s", mongo_uri)
    return client


@contextmanager
def mongo_client(mongo_uri: Optional[str] = None) -> Iterator[MongoClient]:
    """Yield a connected client and close it on the way out, even on error."""
    client = connect_to_cluster(mongo_uri or MONGO_URI)
    try:
        yield client
    finally:
        client.close()
        logger.info("MongoDB connection closed")


def list_collections(client: MongoClient, database_name: str):
    """List collections with estimated doc counts (avoids full scans)."""
    db = client[database_name]
    collections_info = []

    for col_name in db.list_collection_names():
        collections_info.append({
            "name": col_name,
            "document_count": db[col_name].estimated_document_count(),
        })

    return collections_info

# plagcheck/dependencies/mongo.py

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator
from urllib.parse import quote_plus, urlsplit, urlunsplit

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection

from plagcheck.config import MONGODB_TIMEOUT_MS
from plagcheck.schemas.credential_schemas import MongoCredentials

logger = logging.getLogger("plagcheck.mongo")


def build_mongo_url(database_url: str, username: str = "", password: str = "") -> str:
    """Write username/password into the URL authority when both are given."""
    if not (username and password):
        return database_url
    parts = urlsplit(database_url)
    host = parts.netloc.rsplit("@", 1)[-1]
    netloc = f"{quote_plus(username)}:{quote_plus(password)}@{host}"
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


@asynccontextmanager
async def open_collection(
    credentials: MongoCredentials,
    timeout_ms: int = MONGODB_TIMEOUT_MS,
) -> AsyncIterator[AsyncIOMotorCollection]:
    """One client per operation, always closed on exit."""
    client = AsyncIOMotorClient(
        build_mongo_url(credentials.database_url, credentials.username, credentials.password),
        serverSelectionTimeoutMS=timeout_ms,
    )
    try:
        logger.debug(
            f"Connected to MongoDB: {credentials.database_name} / {credentials.collection_name}"
        )
        yield client[credentials.database_name][credentials.collection_name]
    finally:
        client.close()

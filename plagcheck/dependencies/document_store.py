import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson.errors import BSONError
from pymongo.errors import PyMongoError

from plagcheck.config import get_mongo_credentials
from plagcheck.dependencies.mongo import open_collection
from plagcheck.errors import StoreUnavailable
from plagcheck.schemas.credential_schemas import MongoCredentials
from plagcheck.schemas.document_schemas import StoredDocument

logger = logging.getLogger("plagcheck.store")


class MongoDocumentStore:
    """
    Document store backed by one MongoDB collection of ``{content, createdAt}`` records.

    Driver and BSON decoding errors surface as ``StoreUnavailable``.
    """

    def __init__(self, credentials: Optional[MongoCredentials] = None) -> None:
        self.credentials = credentials or get_mongo_credentials()

    async def list_all(self) -> List[StoredDocument]:
        try:
            async with open_collection(self.credentials) as collection:
                records = await collection.find({}).to_list(length=None)
        except (PyMongoError, BSONError) as e:
            raise StoreUnavailable(str(e)) from e
        logger.debug(f"Read {len(records)} documents from {self.credentials.collection_name}")
        return [StoredDocument.from_mongo(r) for r in records]

    async def insert(self, content: str) -> str:
        try:
            async with open_collection(self.credentials) as collection:
                result = await collection.insert_one({
                    "content": content,
                    "createdAt": datetime.now(timezone.utc),
                })
        except (PyMongoError, BSONError) as e:
            raise StoreUnavailable(str(e)) from e
        logger.debug(f"Document added to local DB with ID: {result.inserted_id}")
        return str(result.inserted_id)

from pydantic import BaseModel
from typing import Any, Optional
from datetime import datetime


class StoredDocument(BaseModel):
    id: str                              # MongoDB's ObjectId as string
    content: Any = None                  # may be missing or non-text in the store
    created_at: Optional[datetime] = None

    @classmethod
    def from_mongo(cls, record: dict) -> "StoredDocument":
        created_at = record.get("createdAt")
        return cls(
            id=str(record.get("_id")),
            content=record.get("content"),
            created_at=created_at if isinstance(created_at, datetime) else None,
        )


class AddDocumentResult(BaseModel):
    success: bool
    inserted_id: Optional[str] = None
    message: Optional[str] = None
    error: Optional[str] = None

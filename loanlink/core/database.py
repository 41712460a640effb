from typing import Any, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException, Request, status
from pymongo import AsyncMongoClient

from loanlink.core.exceptions import ConfigurationError

# Collection names
USERS = "users"
LOANS = "loans"
APPLICATIONS = "applications"
PAYMENTS = "payments"


class Database:
    """Handles to the LoanLink collections, built once per application"""

    def __init__(self, db, client=None):
        self.client = client
        self.users = db[USERS]
        self.loans = db[LOANS]
        self.applications = db[APPLICATIONS]
        self.payments = db[PAYMENTS]

    @classmethod
    def connect(cls, uri: str, name: str) -> "Database":
        """Create a client for ``uri``; the connection itself is opened lazily"""
        if not uri:
            raise ConfigurationError("Database connection string is not configured")
        client = AsyncMongoClient(uri)
        return cls(client[name], client=client)

    async def close(self):
        if self.client is not None:
            await self.client.close()
            self.client = None


async def get_db(request: Request) -> Database:
    """Get the database context attached at startup"""
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise ConfigurationError("Database connection string is not configured")
    return db


def to_object_id(value: str) -> ObjectId:
    """Parse a path id, rejecting malformed values with 400"""
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid id")


def serialize_document(document: Optional[Any]) -> Any:
    """Make a stored document JSON friendly (ObjectId -> str)"""
    if document is None:
        return None
    if isinstance(document, ObjectId):
        return str(document)
    if isinstance(document, dict):
        return {key: serialize_document(value) for key, value in document.items()}
    if isinstance(document, list):
        return [serialize_document(item) for item in document]
    return document

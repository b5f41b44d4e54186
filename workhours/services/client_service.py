"""Client service - registry of clients and activities."""
import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from pymongo import ReturnDocument

from workhours.models.client import Client, ClientCreate, ClientKind, ClientUpdate

logger = logging.getLogger(__name__)


class ClientService:
    """Service for handling client and activity records."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.clients = db["clients"]

    def _doc_to_client(self, doc: dict) -> Client:
        return Client(
            _id=str(doc["_id"]),
            user_id=doc["user_id"],
            name=doc["name"],
            kind=doc.get("kind", ClientKind.CLIENT.value),
            address=doc.get("address"),
            city=doc.get("city"),
            postal_code=doc.get("postal_code"),
            siret=doc.get("siret"),
            default_rate=doc.get("default_rate"),
            color=doc.get("color"),
            description=doc.get("description"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def _object_id(self, client_id: str) -> ObjectId:
        try:
            return ObjectId(client_id)
        except Exception:
            raise ValueError("Invalid client ID format")

    async def create_client(self, user_id: str, client_create: ClientCreate) -> Client:
        """
        Create a client or activity.

        Args:
            user_id: User ID who owns the record
            client_create: Client creation data

        Returns:
            Created client
        """
        now = datetime.now(timezone.utc)
        client_doc = client_create.model_dump()
        client_doc.update({
            "user_id": user_id,
            "kind": client_create.kind.value,
            "created_at": now,
            "updated_at": now,
        })

        result = await self.clients.insert_one(client_doc)
        client_doc["_id"] = result.inserted_id

        return self._doc_to_client(client_doc)

    async def list_clients(
        self,
        user_id: str,
        kind: Optional[ClientKind] = None,
    ) -> list[Client]:
        """
        List a user's clients, optionally only one kind, sorted by name.
        """
        query = {"user_id": user_id}
        if kind:
            query["kind"] = ClientKind(kind).value

        cursor = self.clients.find(query).sort("name", 1)
        client_docs = await cursor.to_list(length=None)

        return [self._doc_to_client(doc) for doc in client_docs]

    async def get_registry(self, user_id: str) -> dict[str, Client]:
        """Return every client and activity of a user keyed by ID."""
        return {client.id: client for client in await self.list_clients(user_id)}

    async def get_client(self, user_id: str, client_id: str) -> Client:
        """
        Get a single client.

        Raises:
            ValueError: If the ID is malformed or the client does not exist
        """
        client_doc = await self.clients.find_one({
            "_id": self._object_id(client_id),
            "user_id": user_id,
        })

        if not client_doc:
            raise ValueError("Client not found")

        return self._doc_to_client(client_doc)

    async def update_client(
        self,
        user_id: str,
        client_id: str,
        client_update: ClientUpdate,
    ) -> Client:
        """
        Update a client.

        Raises:
            ValueError: If client not found
        """
        object_id = self._object_id(client_id)

        update_doc = client_update.model_dump(exclude_unset=True)
        # name and kind cannot be cleared
        for field in ("name", "kind"):
            if field in update_doc and update_doc[field] is None:
                del update_doc[field]
        if "kind" in update_doc:
            update_doc["kind"] = ClientKind(update_doc["kind"]).value
        update_doc["updated_at"] = datetime.now(timezone.utc)

        updated_doc = await self.clients.find_one_and_update(
            {"_id": object_id, "user_id": user_id},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )

        if not updated_doc:
            raise ValueError("Client not found")

        return self._doc_to_client(updated_doc)

    async def delete_client(self, user_id: str, client_id: str) -> dict:
        """
        Delete a client.

        Entries pointing at the client keep their copy of its name; they are
        not deleted or rewritten.

        Raises:
            ValueError: If client not found
        """
        result = await self.clients.delete_one({
            "_id": self._object_id(client_id),
            "user_id": user_id,
        })

        if result.deleted_count == 0:
            raise ValueError("Client not found")

        logger.info("Deleted client %s for user %s", client_id, user_id)
        return {"deleted_count": result.deleted_count}

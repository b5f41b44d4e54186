"""Work entry service - logging and editing worked sessions."""
import logging
from datetime import date, datetime, timezone
from typing import Optional

from bson import ObjectId
from pydantic import ValidationError
from pymongo import ReturnDocument

from workhours.models.work_entry import WorkEntry, WorkEntryCreate, WorkEntryUpdate
from workhours.utils.duration import compute_duration_hours

logger = logging.getLogger(__name__)


class WorkEntryService:
    """Service for handling work entries."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.work_entries = db["work_entries"]
        self.clients = db["clients"]

    def _doc_to_entry(self, doc: dict) -> WorkEntry:
        """
        Convert database document to WorkEntry model.

        The derived ``duration_hours`` is computed here, never stored.

        Raises:
            ValidationError: If the document is missing required fields
        """
        entry = WorkEntry.model_validate({**doc, "_id": str(doc["_id"])})
        entry.duration_hours = compute_duration_hours(entry)
        return entry

    def _object_id(self, entry_id: str) -> ObjectId:
        try:
            return ObjectId(entry_id)
        except Exception:
            raise ValueError("Invalid entry ID format")

    async def _reference_name(
        self,
        user_id: str,
        reference_id: str,
        label: str,
    ) -> str:
        """Look up the name of a client or activity the entry points to."""
        try:
            object_id = ObjectId(reference_id)
        except Exception:
            raise ValueError(f"{label} not found")

        doc = await self.clients.find_one({"_id": object_id, "user_id": user_id})
        if not doc:
            raise ValueError(f"{label} not found")
        return doc["name"]

    async def _denormalize_references(self, user_id: str, fields: dict) -> None:
        # Copy names so entries stay readable after the client is deleted.
        if fields.get("client_id"):
            name = await self._reference_name(user_id, fields["client_id"], "Client")
            fields["client_name"] = fields.get("client_name") or name
        if fields.get("activity_id"):
            name = await self._reference_name(user_id, fields["activity_id"], "Activity")
            fields["activity_name"] = fields.get("activity_name") or name

    async def load_entries(
        self,
        user_id: str,
        from_: Optional[date] = None,
        to: Optional[date] = None,
    ) -> tuple[list[WorkEntry], int]:
        """
        Load a user's entries, newest first, skipping unreadable documents.

        Args:
            user_id: User ID
            from_: Optional first start date (inclusive)
            to: Optional last start date (inclusive)

        Returns:
            Tuple of (entries, number of skipped documents)
        """
        query = {"user_id": user_id}

        if from_ or to:
            query["start_date"] = {}
            if from_:
                query["start_date"]["$gte"] = from_.isoformat()
            if to:
                query["start_date"]["$lte"] = to.isoformat()

        cursor = self.work_entries.find(query).sort([("start_date", -1), ("start_time", -1)])
        entry_docs = await cursor.to_list(length=None)

        entries = []
        skipped = 0
        for doc in entry_docs:
            try:
                entries.append(self._doc_to_entry(doc))
            except ValidationError as e:
                skipped += 1
                logger.warning(
                    "Skipping malformed work entry %s: %d validation errors",
                    doc.get("_id"),
                    e.error_count(),
                )

        return entries, skipped

    async def list_entries(
        self,
        user_id: str,
        from_: Optional[date] = None,
        to: Optional[date] = None,
    ) -> list[WorkEntry]:
        """List a user's readable entries, newest first."""
        entries, _ = await self.load_entries(user_id, from_=from_, to=to)
        return entries

    async def get_entry(self, user_id: str, entry_id: str) -> WorkEntry:
        """
        Get a single entry.

        Raises:
            ValueError: If the ID is malformed or the entry does not exist
        """
        entry_doc = await self.work_entries.find_one({
            "_id": self._object_id(entry_id),
            "user_id": user_id,
        })

        if not entry_doc:
            raise ValueError("Work entry not found")

        return self._doc_to_entry(entry_doc)

    async def create_entry(
        self,
        user_id: str,
        entry_create: WorkEntryCreate,
    ) -> WorkEntry:
        """
        Create a work entry.

        Args:
            user_id: User ID
            entry_create: Entry creation data

        Returns:
            Created entry with its computed duration

        Raises:
            ValueError: If the referenced client or activity does not exist
        """
        entry_doc = entry_create.model_dump()
        await self._denormalize_references(user_id, entry_doc)

        now = datetime.now(timezone.utc)
        entry_doc.update({
            "user_id": user_id,
            "created_at": now,
            "updated_at": now,
        })

        result = await self.work_entries.insert_one(entry_doc)
        entry_doc["_id"] = result.inserted_id

        return self._doc_to_entry(entry_doc)

    async def update_entry(
        self,
        user_id: str,
        entry_id: str,
        entry_update: WorkEntryUpdate,
    ) -> WorkEntry:
        """
        Update a work entry.

        Only fields present in the request are changed. Location fields are
        merged into the stored location.

        Raises:
            ValueError: If the entry, or a newly referenced client, is not found
        """
        object_id = self._object_id(entry_id)

        existing = await self.work_entries.find_one({
            "_id": object_id,
            "user_id": user_id,
        })

        if not existing:
            raise ValueError("Work entry not found")

        update_doc = entry_update.model_dump(exclude_unset=True)

        # Core timing fields cannot be cleared
        for field in ("start_date", "start_time", "end_date", "end_time", "has_break"):
            if field in update_doc and update_doc[field] is None:
                del update_doc[field]

        if update_doc.get("location") is not None:
            location = dict(existing.get("location") or {})
            location.update(entry_update.location.model_dump(exclude_unset=True))
            update_doc["location"] = location

        # Only newly referenced clients/activities are checked and renamed;
        # an unchanged reference may point at a deleted client.
        changed = {}
        for kind in ("client", "activity"):
            ref_id = update_doc.get(f"{kind}_id")
            if f"{kind}_id" in update_doc and not ref_id:
                # Unlinked: drop the copied name unless one was sent.
                update_doc[f"{kind}_id"] = None
                update_doc.setdefault(f"{kind}_name", None)
            elif ref_id and ref_id != existing.get(f"{kind}_id"):
                changed[f"{kind}_id"] = ref_id
                changed[f"{kind}_name"] = update_doc.get(f"{kind}_name")
        if changed:
            await self._denormalize_references(user_id, changed)
            update_doc.update(changed)

        update_doc["updated_at"] = datetime.now(timezone.utc)

        updated_doc = await self.work_entries.find_one_and_update(
            {"_id": object_id, "user_id": user_id},
            {"$set": update_doc},
            return_document=ReturnDocument.AFTER,
        )

        return self._doc_to_entry(updated_doc)

    async def delete_entry(self, user_id: str, entry_id: str) -> dict:
        """
        Delete a work entry (hard delete).

        Raises:
            ValueError: If entry not found
        """
        result = await self.work_entries.delete_one({
            "_id": self._object_id(entry_id),
            "user_id": user_id,
        })

        if result.deleted_count == 0:
            raise ValueError("Work entry not found")

        return {"deleted_count": result.deleted_count}

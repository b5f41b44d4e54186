"""Authentication service - user accounts and login."""
import logging
from datetime import datetime, timezone

from bson import ObjectId
from pymongo import ReturnDocument

from workhours.models.user import User, UserCreate, UserUpdate
from workhours.utils.auth import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

# Collections holding per-user documents, wiped when an account is deleted.
USER_OWNED_COLLECTIONS = ("work_entries", "clients", "categories")


class AuthService:
    """Service for handling user accounts and authentication."""

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.users = db["users"]

    def _doc_to_user(self, doc: dict) -> User:
        return User(
            _id=str(doc["_id"]),
            email=doc["email"],
            first_name=doc["first_name"],
            last_name=doc["last_name"],
            phone=doc.get("phone"),
            avatar_url=doc.get("avatar_url"),
            address=doc.get("address"),
            siret=doc.get("siret"),
            default_hourly_rate=doc.get("default_hourly_rate"),
            created_at=doc["created_at"],
            updated_at=doc["updated_at"],
        )

    def _object_id(self, user_id: str) -> ObjectId:
        try:
            return ObjectId(user_id)
        except Exception:
            raise ValueError("Invalid user ID format")

    async def register_user(self, user_create: UserCreate) -> User:
        """
        Register a new user.

        Args:
            user_create: Registration data with plain text password

        Returns:
            User object (without password)

        Raises:
            ValueError: If email is already registered
        """
        email = user_create.email.lower()

        existing = await self.users.find_one({"email": email})
        if existing:
            raise ValueError("Email already registered")

        now = datetime.now(timezone.utc)
        user_doc = {
            "email": email,
            "hashed_password": hash_password(user_create.password),
            "first_name": user_create.first_name.strip(),
            "last_name": user_create.last_name.strip(),
            "phone": None,
            "avatar_url": None,
            "created_at": now,
            "updated_at": now,
        }

        result = await self.users.insert_one(user_doc)
        user_doc["_id"] = result.inserted_id
        logger.info("Registered user %s", user_doc["_id"])

        return self._doc_to_user(user_doc)

    async def login(self, email: str, password: str) -> tuple[str, User]:
        """
        Check credentials and issue a JWT.

        Returns:
            Tuple of (access token, user)

        Raises:
            ValueError: If credentials are invalid
        """
        user_doc = await self.users.find_one({"email": email.lower()})
        if not user_doc:
            raise ValueError("Invalid email or password")

        if not verify_password(password, user_doc["hashed_password"]):
            raise ValueError("Invalid email or password")

        user = self._doc_to_user(user_doc)
        token = create_access_token(user_id=user.id, email=user.email)
        return token, user

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get user by ID.

        Raises:
            ValueError: If the ID is malformed or the user does not exist
        """
        user_doc = await self.users.find_one({"_id": self._object_id(user_id)})
        if not user_doc:
            raise ValueError("User not found")

        return self._doc_to_user(user_doc)

    async def update_user(self, user_id: str, user_update: UserUpdate) -> User:
        """
        Update profile fields of a user.

        Raises:
            ValueError: If the user does not exist or the new email is taken
        """
        object_id = self._object_id(user_id)
        changes = user_update.model_dump(exclude_unset=True)

        if changes.get("email"):
            changes["email"] = changes["email"].lower()
            taken = await self.users.find_one({
                "email": changes["email"],
                "_id": {"$ne": object_id},
            })
            if taken:
                raise ValueError("Email already registered")

        changes["updated_at"] = datetime.now(timezone.utc)

        updated_doc = await self.users.find_one_and_update(
            {"_id": object_id},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if not updated_doc:
            raise ValueError("User not found")

        return self._doc_to_user(updated_doc)

    async def delete_user(self, user_id: str) -> dict:
        """
        Delete a user and every document they own.

        Returns:
            Dictionary with deleted_count per collection

        Raises:
            ValueError: If the user does not exist
        """
        object_id = self._object_id(user_id)

        result = await self.users.delete_one({"_id": object_id})
        if result.deleted_count == 0:
            raise ValueError("User not found")

        counts = {"users": result.deleted_count}
        for name in USER_OWNED_COLLECTIONS:
            owned = await self.db[name].delete_many({"user_id": user_id})
            counts[name] = owned.deleted_count

        logger.info("Deleted user %s and owned documents %s", user_id, counts)
        return {"deleted_count": counts}

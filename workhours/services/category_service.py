"""Category service - default and custom work categories."""
from datetime import datetime, timezone

from pymongo.errors import DuplicateKeyError

from workhours.models.category import DEFAULT_CATEGORIES, CategoryList


class CategoryService:
    """Service for a user's work categories.

    The default categories are fixed; users may add and remove their own.
    """

    def __init__(self, db):
        """Initialize service with database connection."""
        self.db = db
        self.categories = db["categories"]

    async def list_categories(self, user_id: str) -> CategoryList:
        """List default categories followed by the user's custom ones."""
        cursor = self.categories.find({"user_id": user_id}).sort("created_at", 1)
        docs = await cursor.to_list(length=None)
        custom = [doc["name"] for doc in docs]

        return CategoryList(
            defaults=list(DEFAULT_CATEGORIES),
            custom=custom,
            all=list(DEFAULT_CATEGORIES) + custom,
        )

    async def add_category(self, user_id: str, name: str) -> CategoryList:
        """
        Add a custom category.

        Raises:
            ValueError: If the name is blank or already exists
        """
        name = name.strip()
        if not name:
            raise ValueError("Category name is required")
        if name in DEFAULT_CATEGORIES:
            raise ValueError("Category already exists")

        existing = await self.categories.find_one({"user_id": user_id, "name": name})
        if existing:
            raise ValueError("Category already exists")

        try:
            await self.categories.insert_one({
                "user_id": user_id,
                "name": name,
                "created_at": datetime.now(timezone.utc),
            })
        except DuplicateKeyError:
            # Lost a race with a concurrent insert of the same name
            raise ValueError("Category already exists")

        return await self.list_categories(user_id)

    async def remove_category(self, user_id: str, name: str) -> CategoryList:
        """
        Remove a custom category.

        Entries already tagged with it keep their label.

        Raises:
            ValueError: If the category is a default one or does not exist
        """
        name = name.strip()
        if name in DEFAULT_CATEGORIES:
            raise ValueError("Cannot remove default category")

        result = await self.categories.delete_one({"user_id": user_id, "name": name})
        if result.deleted_count == 0:
            raise ValueError("Category not found")

        return await self.list_categories(user_id)

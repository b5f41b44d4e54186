"""Drop all work data for a specific user, keeping the account."""
import asyncio
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient

from workhours.config import settings
from workhours.services.auth_service import USER_OWNED_COLLECTIONS


async def drop_user_data(mongodb_url: str, user_id: str):
    """Delete every entry, client and custom category of a user."""
    client = AsyncIOMotorClient(mongodb_url)
    db = client[settings.mongodb_db_name]

    for collection_name in USER_OWNED_COLLECTIONS:
        result = await db[collection_name].delete_many({"user_id": user_id})
        print(f"Deleted {result.deleted_count} documents from {collection_name}")

    client.close()
    print("Done!")


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python drop_user_data.py <mongodb_url> <user_id>")
        sys.exit(1)

    asyncio.run(drop_user_data(sys.argv[1], sys.argv[2]))

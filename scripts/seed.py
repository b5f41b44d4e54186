"""Seed a development database with demo users, clients and work entries.

Usage:
    python scripts/seed.py \\
        --mongodb-url mongodb://localhost:27017 \\
        [--weeks 4] [--reset]
"""
import argparse
import asyncio
import sys
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

from motor.motor_asyncio import AsyncIOMotorClient

from workhours.config import settings
from workhours.models.client import ClientCreate, ClientKind
from workhours.models.user import UserCreate, UserUpdate
from workhours.models.work_entry import Location, WorkEntryCreate
from workhours.services.auth_service import AuthService
from workhours.services.client_service import ClientService
from workhours.services.work_entry_service import WorkEntryService

DEMO_PASSWORD = "Test123!"

DEMO_USERS = [
    {
        "email": "marie.dupont@test.com",
        "first_name": "Marie",
        "last_name": "Dupont",
        "phone": "+33 6 12 34 56 78",
        "address": "15 Rue de la Paix, 75002 Paris",
        "siret": "123 456 789 00012",
        "default_hourly_rate": 45,
    },
    {
        "email": "pierre.martin@test.com",
        "first_name": "Pierre",
        "last_name": "Martin",
        "phone": "+33 6 98 76 54 32",
        "address": "42 Avenue des Champs-Élysées, 75008 Paris",
        "siret": "987 654 321 00045",
        "default_hourly_rate": 55,
    },
]

DEMO_CLIENTS = [
    ClientCreate(name="Boulangerie Martin", city="Paris", default_rate=50, color="#4F46E5"),
    ClientCreate(name="Agence Horizon", city="Lyon", default_rate=65, color="#059669"),
    ClientCreate(name="Formation", kind=ClientKind.ACTIVITY, default_rate=70, color="#D97706"),
]


class Seeder:
    """Creates demo data through the application services."""

    def __init__(self, mongodb_url: str, weeks: int):
        self.mongodb_url = mongodb_url
        self.weeks = weeks
        self.client: Optional[AsyncIOMotorClient] = None
        self.db = None
        self.stats = {"users": 0, "clients": 0, "entries": 0}

    async def connect(self):
        """Connect to MongoDB."""
        self.client = AsyncIOMotorClient(self.mongodb_url)
        self.db = self.client[settings.mongodb_db_name]
        print(f"Connected to MongoDB: {self.mongodb_url}")

    async def close(self):
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            print("Closed MongoDB connection")

    async def reset(self):
        """Drop every collection the application writes."""
        for name in ("users", "work_entries", "clients", "categories"):
            await self.db[name].drop()
        print("Dropped existing collections")

    async def seed_user(self, profile: dict):
        """Create one user with clients and weekday entries."""
        auth = AuthService(self.db)
        user = await auth.register_user(UserCreate(
            email=profile["email"],
            password=DEMO_PASSWORD,
            first_name=profile["first_name"],
            last_name=profile["last_name"],
        ))
        extra = {k: v for k, v in profile.items() if k not in ("email", "first_name", "last_name")}
        await auth.update_user(user.id, UserUpdate(**extra))
        self.stats["users"] += 1

        clients = []
        for client_create in DEMO_CLIENTS:
            clients.append(await ClientService(self.db).create_client(user.id, client_create))
            self.stats["clients"] += 1

        entries = WorkEntryService(self.db)
        today = date.today()
        for offset in range(self.weeks * 7):
            day = today - timedelta(days=offset)
            if day.weekday() >= 5:
                continue
            client = clients[offset % 2]
            await entries.create_entry(user.id, WorkEntryCreate(
                start_date=day.isoformat(),
                start_time="09:00",
                end_date=day.isoformat(),
                end_time="17:30" if day.weekday() == 4 else "17:00",
                has_break=True,
                break_start_hour="12",
                break_start_min="00",
                break_end_hour="13",
                break_end_min="00",
                category="Standard" if offset % 5 else "Déplacement",
                client_id=client.id,
                activity_id=clients[2].id if day.weekday() == 2 else None,
                location=Location(city=client.city),
            ))
            self.stats["entries"] += 1

        print(f"  Seeded {profile['email']}")

    async def run(self, reset: bool):
        """Run seeding."""
        await self.connect()

        try:
            if reset:
                await self.reset()

            print("\n=== Seeding users ===")
            for profile in DEMO_USERS:
                try:
                    await self.seed_user(profile)
                except ValueError as e:
                    print(f"  Skipping {profile['email']}: {e}")

            print("\n=== Seed Summary ===")
            for name, count in self.stats.items():
                print(f"{name.capitalize()}: {count}")
            print(f"Demo password: {DEMO_PASSWORD}")

        finally:
            await self.close()


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the database with demo data")
    parser.add_argument(
        "--mongodb-url",
        default=settings.mongodb_url,
        help="MongoDB connection URL",
    )
    parser.add_argument(
        "--weeks",
        type=int,
        default=4,
        help="Number of past weeks of entries to create",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Drop existing data first",
    )

    args = parser.parse_args()

    seeder = Seeder(mongodb_url=args.mongodb_url, weeks=args.weeks)
    await seeder.run(reset=args.reset)


if __name__ == "__main__":
    asyncio.run(main())

# scripts/seed.py
import asyncio
import random

from app.db.base import Base
from app.db.session import AsyncSessionLocal, engine
from app.db.crud_users import create_user, get_user_by_email
from app.db.crud_listings import create_listing
from app.domain.categories import Category, DESCRIPTIONS

COUNTRIES = ["US", "FR", "IT", "ES", "GR", "NO", "JP"]


async def seed(session_factory=AsyncSessionLocal, bind=engine, rng=None):
    """
    Demo data: one host, one guest, and a listing in every category.
    Running it twice does not duplicate users or listings.
    """
    rng = rng or random.Random(7)

    # create tables (no migrations in this project)
    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with session_factory() as db:
        host = await get_user_by_email(db, "host@staybook.io")
        if host:
            return host

        host = await create_user(db, name="Host", email="host@staybook.io", password="password")
        await create_user(db, name="Guest", email="guest@staybook.io", password="password")

        for category in Category:
            await create_listing(
                db,
                user_id=host.id,
                title=f"{category.value} retreat",
                description=DESCRIPTIONS[category],
                image_src=f"/images/{category.value.lower()}.jpg",
                category=category.value,
                room_count=rng.randint(1, 4),
                bathroom_count=rng.randint(1, 3),
                guest_count=rng.randint(1, 8),
                location_value=rng.choice(COUNTRIES),
                price=rng.randrange(50, 500, 10),
            )
        return host


if __name__ == "__main__":
    asyncio.run(seed())
    print("Seed complete")

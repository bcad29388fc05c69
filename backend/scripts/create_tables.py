import argparse
import asyncio

from app.config.settings import settings
from app.models.database import build_engine, init_db, reset_db


async def create_tables(reset: bool = False):
    """Create all database tables"""
    engine = build_engine(settings.database_url)

    if reset:
        print("Dropping existing tables...")
        await reset_db(engine)

    print("Creating database tables...")
    print("Tables to create:")
    print("  - messages")
    print("  - attachments")
    print("  - reactions")
    print("  - translation_provider_stats")

    await init_db(engine)
    await engine.dispose()

    print("✅ All tables created successfully!")
    print("\nDatabase schema ready for the chat backend")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create the chat database tables")
    parser.add_argument("--reset", action="store_true", help="drop all tables first")
    args = parser.parse_args()
    asyncio.run(create_tables(reset=args.reset))

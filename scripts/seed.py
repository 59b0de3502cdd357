import argparse
import asyncio
import os
import sys

# Add project root to path
sys.path.append(os.getcwd())

from villa.core.logging import setup_logging
from villa.database import AsyncSessionLocal, engine, init_db
from villa.services.seed_service import seed_demo_data


async def main(keep: bool):
    await init_db()
    async with AsyncSessionLocal() as session:
        seeded = await seed_demo_data(session, reset=not keep)
    await engine.dispose()
    print("✅ Database seeded." if seeded else "ℹ️ Data already present, nothing seeded.")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed the villa database with demo data")
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Do not wipe existing data (skip seeding if anything is present)",
    )
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.keep))

"""
Create database tables for all models.

Usage:
    python scripts/create_tables.py

Safe to run repeatedly; existing tables are left untouched.
"""

import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from db.session import close_db, init_db


async def main() -> None:
    print("Creating tables...")
    try:
        await init_db()
    finally:
        await close_db()
    print("Done")


if __name__ == "__main__":
    asyncio.run(main())

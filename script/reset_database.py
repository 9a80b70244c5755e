#!/usr/bin/env python3
"""
Database Reset Script
Drop and recreate every table of the configured database

Notes:
- This script only resets database structure, does not seed data
- To seed data, run `python script/seed_data.py`
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import (
    create_db_and_tables,
    dispose_engine,
    drop_db_and_tables,
)


async def main() -> None:
    print(f'🗄️ Resetting {settings.DATABASE_URL_ASYNC.split("@")[-1]}')
    try:
        await drop_db_and_tables()
        print('   ✅ Tables dropped')
        await create_db_and_tables()
        print('   ✅ Tables created')
    finally:
        await dispose_engine()


if __name__ == '__main__':
    asyncio.run(main())

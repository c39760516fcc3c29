"""
Database initialization script.
This script connects to MongoDB and creates the collection indexes.
Run this as: python init_db.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger("db-init")

# Add current directory to path to ensure imports work
sys.path.append(str(Path(__file__).parent))

from vistagram.core.config import settings
from vistagram.db.session import ConnectionState, MongoConnection

async def init_db() -> bool:
    """Initialize the database by creating all indexes."""
    logger.info(f"Initializing database '{settings.MONGODB_DB_NAME}'")
    connection = MongoConnection(settings.MONGODB_URI, settings.MONGODB_DB_NAME)
    try:
        state = await connection.connect()
        if state != ConnectionState.READY:
            logger.error(f"Error creating indexes: {connection.error}")
            return False

        for name in await connection.db.list_collection_names():
            indexes = await connection.db[name].index_information()
            logger.info(f"Indexes on {name}: {sorted(indexes)}")
        return True
    finally:
        connection.close()

if __name__ == "__main__":
    logger.info("Starting database initialization")
    success = asyncio.run(init_db())
    if success:
        logger.info("Database initialization completed successfully")
    else:
        logger.error("Database initialization failed")
        sys.exit(1)

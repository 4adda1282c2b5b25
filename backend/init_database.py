"""
Database initialization script
Creates database tables and seeds the genre table
"""
import logging

from app.core.database import SessionLocal, create_tables
from app.services.genre_service import GenreService

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def init_db():
    """Create tables and insert any missing default genres"""
    logger.info("Creating database tables...")
    create_tables()

    db = SessionLocal()
    try:
        added = GenreService(db).seed_defaults()
        if added:
            logger.info(f"Inserted {added} genres")
        else:
            logger.info("Genre table already seeded")
    finally:
        db.close()

    logger.info("Database initialization completed!")


if __name__ == "__main__":
    init_db()

"""
Migration script to create all database tables

Run this script to create all database tables:
    python -m app.migrations.create_all_tables
"""

from app.database import engine, Base
# Import all models to ensure they're registered with Base
from app.models import User, Genre, Movie, MovieAvailability, SavedMovie  # noqa: F401


def create_tables():
    """Create all database tables"""
    print("=" * 60)
    print("Creating all database tables...")
    print("=" * 60)

    # Create all tables defined in Base metadata
    Base.metadata.create_all(bind=engine)

    print("\n✅ All tables created successfully!")
    print("\nTables:")
    for table_name in Base.metadata.tables:
        print(f"   - {table_name}")
    print("=" * 60)


if __name__ == "__main__":
    create_tables()

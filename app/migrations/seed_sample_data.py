"""
Seed a small catalog for local development

Genres, movies and availability are reference data that the API never
writes. This script fills an empty database so the endpoints have
something to return:
    python -m app.migrations.seed_sample_data
"""
from app.database import SessionLocal
from app.models.genre import Genre
from app.models.movie import Movie, MovieAvailability

SAMPLE_CATALOG = {
    "Drama": [
        ("The Shawshank Redemption", 1994, ["US", "GB", "DE"]),
        ("Parasite", 2019, ["US", "KR"]),
    ],
    "Science Fiction": [
        ("Blade Runner", 1982, ["US", "GB"]),
        ("Arrival", 2016, ["US", "CA", "FR"]),
    ],
    "Animation": [
        ("Spirited Away", 2001, ["JP", "US", "FR"]),
    ],
}


def seed(db) -> int:
    """Insert the sample catalog; returns the number of movies created"""
    if db.query(Movie).first() is not None:
        print("⚠️ Movies already present - skipping seed")
        return 0

    created = 0
    for genre_name, movies in SAMPLE_CATALOG.items():
        genre = Genre(name=genre_name)
        db.add(genre)
        db.flush()

        for title, year, countries in movies:
            movie = Movie(title=title, year=year, genre_id=genre.id)
            movie.availability = [MovieAvailability(country_code=code) for code in countries]
            db.add(movie)
            created += 1
            print(f"  ✓ {title} ({year}) - {', '.join(countries)}")

    db.commit()
    return created


if __name__ == "__main__":
    session = SessionLocal()
    try:
        count = seed(session)
        print(f"\n✅ Seeded {count} movies")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

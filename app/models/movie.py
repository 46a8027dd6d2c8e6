import uuid

from sqlalchemy import Column, Integer, String, ForeignKey, Uuid
from sqlalchemy.orm import relationship
from app.database import Base

class Movie(Base):
    __tablename__ = "movies"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    title = Column(String, nullable=False)
    year = Column(Integer, nullable=False, index=True)
    genre_id = Column(Uuid(as_uuid=True), ForeignKey("genres.id", ondelete="SET NULL"), nullable=True, index=True)

    # Relationships
    genre = relationship("Genre")
    availability = relationship("MovieAvailability", back_populates="movie", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Movie(id={self.id}, title='{self.title}', year={self.year})>"


class MovieAvailability(Base):
    """
    One row per (movie, country) where the movie can be watched.
    No row for a country means the movie is unavailable there.
    """
    __tablename__ = "movie_availability"

    movie_id = Column(Uuid(as_uuid=True), ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True)
    country_code = Column(String(2), primary_key=True, index=True)  # ISO 3166-1 alpha-2, upper case

    movie = relationship("Movie", back_populates="availability")

    def __repr__(self):
        return f"<MovieAvailability(movie_id={self.movie_id}, country_code='{self.country_code}')>"

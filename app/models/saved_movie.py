from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Index, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SavedMovie(Base):
    """
    Movies saved by users to watch later
    Created by an explicit save, destroyed by remove; never updated in place
    """
    __tablename__ = "saved_movies"

    user_id = Column(Uuid(as_uuid=True), ForeignKey('users.id', ondelete='CASCADE'), primary_key=True)
    movie_id = Column(Uuid(as_uuid=True), ForeignKey('movies.id', ondelete='CASCADE'), primary_key=True)
    date_added = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # Relationships
    user = relationship("User", back_populates="saved_movies")
    movie = relationship("Movie")

    # Ensure one entry per user per movie, even if the pre-check loses a race
    __table_args__ = (
        UniqueConstraint('user_id', 'movie_id', name='unique_user_movie_saved'),
        Index('ix_saved_movies_user_date_added', 'user_id', 'date_added'),
    )

    def __repr__(self):
        return f"<SavedMovie(user_id={self.user_id}, movie_id={self.movie_id})>"

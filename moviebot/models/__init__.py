"""Data models for the movie bot."""

from moviebot.models.movie import Genre, Movie, SavedMovie
from moviebot.models.recommendation import Recommendation

__all__ = [
    "Genre",
    "Movie",
    "SavedMovie",
    "Recommendation",
]

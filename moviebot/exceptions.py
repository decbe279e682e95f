"""Exceptions raised by the recommendation pool and its collaborators."""


class MovieBotError(Exception):
    """Base exception for movie bot errors."""

    pass


class CatalogUnavailable(MovieBotError):
    """The remote movie catalog could not be reached or returned bad data."""

    pass


class InvalidGenreSelection(MovieBotError):
    """The chosen text does not match any known genre."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown genre: {name!r}")
        self.name = name


class PersistenceFailure(MovieBotError):
    """A JSON collection could not be written to disk."""

    pass

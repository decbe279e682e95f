"""Whole-file JSON persistence for the bot's collections.

Each collection lives in one JSON array on disk and is rewritten in full on
every mutation. Writes are not atomic: a crash mid-write can leave a truncated
file, which the next load treats as unreadable and replaces with an empty one.
"""

from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from moviebot.constants import JSON_INDENT
from moviebot.exceptions import PersistenceFailure
from moviebot.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T", bound=BaseModel)


class JsonFile(Generic[T]):
    """A JSON file holding a list of ``model`` records."""

    def __init__(self, path: Path, model: type[T]) -> None:
        self.path = Path(path)
        self._adapter: TypeAdapter[list[T]] = TypeAdapter(list[model])  # type: ignore[valid-type]

    def read(self) -> list[T]:
        """Read and validate every record.

        Raises:
            FileNotFoundError: If the file does not exist
            ValidationError: If the content is not valid JSON for the model
            OSError: On other read errors
        """
        return self._adapter.validate_json(self.path.read_bytes())

    def write(self, items: list[T]) -> None:
        """Rewrite the whole file.

        Raises:
            PersistenceFailure: On any disk write error
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_bytes(self._adapter.dump_json(items, indent=JSON_INDENT))
        except OSError as e:
            # In-memory state is now ahead of what is on disk
            logger.critical(f"Failed to save {self.path}: {e}")
            raise PersistenceFailure(f"Could not write {self.path}") from e

    def load_or_bootstrap(self) -> list[T]:
        """Load the records, starting from an empty file if missing or unreadable.

        A missing or corrupt file is never fatal: an empty collection is
        written immediately so later saves start from a valid file.
        """
        try:
            items = self.read()
        except FileNotFoundError:
            logger.info(f"{self.path.name} not found, creating a new one")
        except (OSError, ValidationError) as e:
            logger.warning(f"{self.path.name} is unreadable, starting empty: {e}")
        else:
            logger.debug(f"Loaded {len(items)} records from {self.path}")
            return items

        try:
            self.write([])
        except PersistenceFailure:
            logger.error(f"Could not create {self.path}, continuing in memory")
        return []

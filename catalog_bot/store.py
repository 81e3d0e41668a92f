"""
Flat JSON store for the catalog.

The whole document is the unit of persistence: every save rewrites the file.
There is no locking; two concurrent read-modify-write sequences can lose an
update (last writer wins).
"""
import json
import logging
from pathlib import Path
from typing import Union

from pydantic import ValidationError as PydanticValidationError

from .errors import StorageError
from .models import Catalog

logger = logging.getLogger(__name__)


class JsonStore:
    """Load/save a Catalog from/to a single JSON file."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Catalog:
        """
        Read the catalog. Fails open: a missing, unreadable or malformed
        file yields an empty catalog.
        """
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.debug(f"Catalog file not found: {self.path}")
            return Catalog.empty()
        except (OSError, UnicodeDecodeError) as e:
            logger.error(f"Failed to read catalog {self.path}: {e}")
            return Catalog.empty()

        if not raw.strip():
            return Catalog.empty()

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Catalog {self.path} is not valid JSON: {e}")
            return Catalog.empty()

        if not isinstance(data, dict):
            logger.error(f"Catalog {self.path} is not a JSON object")
            return Catalog.empty()

        try:
            return Catalog.model_validate(data)
        except PydanticValidationError as e:
            logger.error(f"Catalog {self.path} does not match the expected shape: {e}")
            return Catalog.empty()

    def save(self, catalog: Catalog) -> None:
        """Overwrite the file with the full catalog. Raises StorageError on failure."""
        try:
            self._ensure_parent_dir()
            payload = json.dumps(catalog.to_dict(), ensure_ascii=False, indent=2)
            self.path.write_text(payload, encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to write catalog {self.path}: {e}")
            raise StorageError(f"Failed to write catalog: {e}") from e
        logger.debug(f"Saved catalog {self.path} ({len(catalog.items)} items)")

    def ensure_exists(self) -> None:
        """Create the file with an empty catalog if it does not exist yet."""
        if self.path.is_file():
            return
        logger.info(f"Creating empty catalog at {self.path}")
        self.save(Catalog.empty())

    def _ensure_parent_dir(self) -> None:
        """
        Make sure the parent directory exists. An ancestor that exists as a
        plain file is deleted and recreated as a directory.
        """
        parent = self.path.parent
        for ancestor in reversed((parent, *parent.parents)):
            if ancestor.exists() and not ancestor.is_dir():
                logger.warning(f"Replacing file {ancestor} with a directory")
                ancestor.unlink()
                break
        parent.mkdir(parents=True, exist_ok=True)

import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union
from pydantic import ValidationError

from features.locations.models.location_types import SavedLocation

logger = logging.getLogger(__name__)

class LocationStore:
    """Handles storage and retrieval of the saved tide location."""

    def __init__(self, file_path: Union[str, Path] = "data/saved_location.json"):
        """Initialize the store with the JSON file holding the location."""
        self.file_path = Path(file_path)

    def load(self) -> Optional[SavedLocation]:
        """Get the saved location, if one was stored and is readable."""
        if not self.file_path.exists():
            return None
        try:
            return SavedLocation.model_validate_json(self.file_path.read_bytes())
        except (OSError, ValidationError) as e:
            logger.error(f"Error reading saved location from {self.file_path}: {str(e)}")
            return None

    def save(self, location: SavedLocation) -> None:
        """Persist the location, replacing any previous one."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        # Readers see the old file or the new one, never a partial write
        fd, tmp_name = tempfile.mkstemp(dir=self.file_path.parent, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(location.model_dump_json())
            os.replace(tmp_name, self.file_path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise
        logger.info(f"Saved location {location.name} ({location.latitude}, {location.longitude})")

    def clear(self) -> bool:
        """Delete the saved location. Returns whether one existed."""
        try:
            self.file_path.unlink()
        except FileNotFoundError:
            return False
        return True

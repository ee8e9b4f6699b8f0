"""Timetable loader."""

import logging
import tomllib
from pathlib import Path

from stop_trips.adapters.timetable.timetable import Timetable

logger = logging.getLogger(__name__)


class TimetableLoader:
    """Loads a static timetable from a TOML file."""

    @staticmethod
    def load(path: str | Path) -> Timetable:
        """Parse the timetable file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file is not valid TOML or not a valid timetable.
        """
        timetable_path = Path(path)
        if not timetable_path.exists():
            raise FileNotFoundError(f"Timetable file not found: {timetable_path}")

        with open(timetable_path, "rb") as f:
            try:
                data = tomllib.load(f)
            except tomllib.TOMLDecodeError as e:
                raise ValueError(f"Invalid TOML in {timetable_path}: {e}") from e

        timetable = TimetableLoader.from_data(data)
        logger.info(
            f"Loaded timetable {timetable_path} with {len(timetable.stops)} stop(s) "
            f"and {len(timetable.trips)} trip(s)"
        )
        return timetable

    @staticmethod
    def from_data(data: dict) -> Timetable:
        """Validate already parsed TOML data.

        pydantic's ValidationError is a ValueError, so callers only handle one type.
        """
        if not isinstance(data.get("stops", []), list):
            raise ValueError("Timetable 'stops' must be a list")
        if not isinstance(data.get("trips", []), list):
            raise ValueError("Timetable 'trips' must be a list")
        return Timetable.model_validate(data)

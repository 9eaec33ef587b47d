"""Loading trip logs from delimited text files."""

import csv
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

from tripreplay.core.exceptions import IngestionError
from tripreplay.core.logger import log_call, log_result

# Numeric times are offsets from this instant
EPOCH = datetime(1970, 1, 1)

REQUIRED_COLUMNS = ("time", "latitude", "longitude")

_UNIT_SECONDS = {"seconds": 1.0, "minutes": 60.0}


class TripLogLoader:
    """Reads a trip log CSV with Time, Latitude and Longitude columns.

    Time is either an ISO 8601 timestamp or a number of elapsed units since
    the start of the trip.
    """

    def __init__(self, time_unit: str = "seconds"):
        if time_unit not in _UNIT_SECONDS:
            raise ValueError(f"Unknown time unit: {time_unit}")
        self.time_unit = time_unit

    def load(self, path: Path) -> List[Tuple[datetime, float, float]]:
        """Loads the log and returns (timestamp, latitude, longitude) records in file order.

        Raises:
            IngestionError: If the file cannot be read or a row is malformed
        """
        log_call("TripLogLoader", "load", path=str(path), time_unit=self.time_unit)

        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                records = self._read(csv.DictReader(f))
        except FileNotFoundError:
            raise IngestionError(f"File not found: {path}")
        except UnicodeDecodeError as e:
            raise IngestionError(f"Error reading file {path}: {e}")

        log_result("TripLogLoader", "load", f"{len(records)} records")
        return records

    def _read(self, reader: csv.DictReader) -> List[Tuple[datetime, float, float]]:
        if reader.fieldnames is None:
            raise IngestionError("Trip log is empty")

        columns = self._map_columns(reader.fieldnames)
        records = []
        for row in reader:
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                continue
            try:
                timestamp = self._parse_time(row[columns["time"]])
                lat = float(row[columns["latitude"]])
                lon = float(row[columns["longitude"]])
            except (AttributeError, TypeError, ValueError) as e:
                raise IngestionError(f"Line {reader.line_num}: malformed row: {e}")
            records.append((timestamp, lat, lon))

        return records

    @staticmethod
    def _map_columns(fieldnames: Sequence[str]) -> Dict[str, str]:
        """Maps the required lower-case column names to the header spelling."""
        by_name = {name.strip().lower(): name for name in fieldnames if name}
        missing = [c for c in REQUIRED_COLUMNS if c not in by_name]
        if missing:
            raise IngestionError(
                f"Trip log is missing columns: {', '.join(missing)}. Found: {', '.join(fieldnames)}"
            )
        return {c: by_name[c] for c in REQUIRED_COLUMNS}

    def _parse_time(self, value: str) -> datetime:
        value = value.strip()
        try:
            offset = float(value)
        except ValueError:
            pass
        else:
            return EPOCH + timedelta(seconds=offset * _UNIT_SECONDS[self.time_unit])

        timestamp = datetime.fromisoformat(value)
        if timestamp.tzinfo is not None:
            # Keep every timestamp naive UTC so they compare
            timestamp = timestamp.astimezone(timezone.utc).replace(tzinfo=None)
        return timestamp

"""
Read-only access to the greenhouse SQLite database.

Tables (written by the ingestion process, never by this service):
- data_points(id, timestamp, synchronized)
- sensor_data(id, sensor_id, temperature, humidity, data_point_id)
- system_data(id, soc_temperature, wlan0_link_quality, wlan0_signal_level,
              storage_total_size, storage_used, storage_avail, data_point_id)
- image_data(id, filename, data_point_id)

Every public method opens its own connection, so concurrent requests never
share one. Any sqlite3 failure is reported as StoreUnavailable.
"""
import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from core.errors import StoreUnavailable
from core.models.sample import DataPoint, ImageRecord, SampleWithData, SensorReading, SystemSnapshot
from core.processing.resolver import closest

logger = logging.getLogger(__name__)


def _data_point(row: sqlite3.Row) -> DataPoint:
    return DataPoint(id=row["id"], timestamp=row["timestamp"], synchronized=row["synchronized"])


def _sensor_reading(row: sqlite3.Row) -> SensorReading:
    return SensorReading(
        id=row["id"],
        sensor_id=row["sensor_id"],
        temperature=row["temperature"],
        humidity=row["humidity"],
        data_point_id=row["data_point_id"],
    )


def _system_snapshot(row: sqlite3.Row) -> SystemSnapshot:
    return SystemSnapshot(
        id=row["id"],
        soc_temperature=row["soc_temperature"],
        wlan0_link_quality=row["wlan0_link_quality"],
        wlan0_signal_level=row["wlan0_signal_level"],
        storage_total_size=row["storage_total_size"],
        storage_used=row["storage_used"],
        storage_avail=row["storage_avail"],
        data_point_id=row["data_point_id"],
    )


def _image_record(row: sqlite3.Row) -> ImageRecord:
    return ImageRecord(id=row["id"], filename=row["filename"], data_point_id=row["data_point_id"])


class TelemetryStore:
    """Sample store adapter over the greenhouse SQLite file."""

    def __init__(self, db_path: str):
        self.db_path = str(db_path)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        if not os.path.exists(self.db_path):
            logger.error(f"Database file not found: {self.db_path}")
            raise StoreUnavailable(f"Database file not found: {self.db_path}")

        uri = Path(self.db_path).resolve().as_uri() + "?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as e:
            logger.error(f"Failed to open database {self.db_path}: {e}")
            raise StoreUnavailable(f"Failed to open database: {e}") from e

        conn.row_factory = sqlite3.Row
        try:
            yield conn
        except sqlite3.Error as e:
            logger.error(f"Database query failed: {e}")
            raise StoreUnavailable(f"Database query failed: {e}") from e
        finally:
            conn.close()

    # ---- range queries ----

    def samples_in_range(self, start: int, end: int) -> List[SampleWithData]:
        """
        All samples with start <= timestamp <= end, ascending by timestamp,
        with their sensor readings and system snapshot attached (no images).
        """
        with self._connect() as conn:
            points = [
                _data_point(row)
                for row in conn.execute(
                    "SELECT * FROM data_points WHERE timestamp >= ? AND timestamp <= ? "
                    "ORDER BY timestamp, id",
                    (start, end),
                )
            ]

            readings: Dict[int, List[SensorReading]] = {}
            for row in conn.execute(
                "SELECT s.* FROM sensor_data s JOIN data_points d ON s.data_point_id = d.id "
                "WHERE d.timestamp >= ? AND d.timestamp <= ? ORDER BY s.data_point_id, s.sensor_id",
                (start, end),
            ):
                reading = _sensor_reading(row)
                readings.setdefault(reading.data_point_id, []).append(reading)

            snapshots: Dict[int, SystemSnapshot] = {}
            for row in conn.execute(
                "SELECT y.* FROM system_data y JOIN data_points d ON y.data_point_id = d.id "
                "WHERE d.timestamp >= ? AND d.timestamp <= ? ORDER BY y.data_point_id, y.id",
                (start, end),
            ):
                snapshot = _system_snapshot(row)
                # One snapshot per sample; keep the first if the table has duplicates
                snapshots.setdefault(snapshot.data_point_id, snapshot)

        logger.debug(f"Loaded {len(points)} samples in [{start}, {end}]")
        return [
            SampleWithData(
                data_point=point,
                sensors=readings.get(point.id, []),
                system_data=snapshots.get(point.id),
            )
            for point in points
        ]

    def timestamps_in_range(self, start: int, end: int) -> List[int]:
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT timestamp FROM data_points WHERE timestamp >= ? AND timestamp <= ? ORDER BY timestamp",
                (start, end),
            ).fetchall()
        return [row["timestamp"] for row in rows]

    def distinct_sensor_ids(self) -> List[int]:
        with self._connect() as conn:
            rows = conn.execute("SELECT DISTINCT sensor_id FROM sensor_data ORDER BY sensor_id").fetchall()
        return [row["sensor_id"] for row in rows]

    # ---- point lookups ----

    def sample_with_data(self, data_point_id: int) -> Optional[SampleWithData]:
        with self._connect() as conn:
            return self._load_sample(conn, data_point_id)

    def sample_nearest(self, target: int) -> Optional[SampleWithData]:
        """The sample whose timestamp is closest to `target`; the earlier one on ties."""
        with self._connect() as conn:
            before = conn.execute(
                "SELECT * FROM data_points WHERE timestamp <= ? ORDER BY timestamp DESC, id LIMIT 1",
                (target,),
            ).fetchone()
            after = conn.execute(
                "SELECT * FROM data_points WHERE timestamp >= ? ORDER BY timestamp, id LIMIT 1",
                (target,),
            ).fetchone()
            point = closest(
                [_data_point(row) if row is not None else None for row in (before, after)],
                target,
            )
            if point is None:
                return None
            return self._load_sample(conn, point.id)

    def latest_sample(self) -> Optional[SampleWithData]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM data_points ORDER BY timestamp DESC, id LIMIT 1").fetchone()
            if row is None:
                return None
            return self._load_sample(conn, row["id"])

    def _load_sample(self, conn: sqlite3.Connection, data_point_id: int) -> Optional[SampleWithData]:
        row = conn.execute("SELECT * FROM data_points WHERE id = ?", (data_point_id,)).fetchone()
        if row is None:
            return None

        sensors = [
            _sensor_reading(r)
            for r in conn.execute(
                "SELECT * FROM sensor_data WHERE data_point_id = ? ORDER BY sensor_id",
                (data_point_id,),
            )
        ]
        system_row = conn.execute(
            "SELECT * FROM system_data WHERE data_point_id = ? ORDER BY id LIMIT 1",
            (data_point_id,),
        ).fetchone()
        # Images are taken less often than samples: use the most recent one at or before this sample
        image_row = conn.execute(
            "SELECT * FROM image_data WHERE data_point_id <= ? ORDER BY data_point_id DESC LIMIT 1",
            (data_point_id,),
        ).fetchone()

        return SampleWithData(
            data_point=_data_point(row),
            sensors=sensors,
            system_data=_system_snapshot(system_row) if system_row is not None else None,
            image=_image_record(image_row) if image_row is not None else None,
        )

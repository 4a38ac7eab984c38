"""Pytest configuration and fixtures for test suite."""

import datetime
import sqlite3
from zoneinfo import ZoneInfo

import pytest

from core.service_manager import service_manager

SCHEMA = """
CREATE TABLE data_points (
    id INTEGER PRIMARY KEY,
    timestamp INTEGER NOT NULL,
    synchronized INTEGER NOT NULL DEFAULT 0
);
CREATE TABLE sensor_data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    sensor_id INTEGER NOT NULL,
    temperature REAL,
    humidity REAL,
    data_point_id INTEGER NOT NULL
);
CREATE TABLE system_data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    soc_temperature REAL,
    wlan0_link_quality REAL,
    wlan0_signal_level REAL,
    storage_total_size REAL,
    storage_used REAL,
    storage_avail REAL,
    data_point_id INTEGER NOT NULL
);
CREATE TABLE image_data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    filename TEXT NOT NULL,
    data_point_id INTEGER NOT NULL
);
"""


def local_ts(tz_name: str, year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: int = 0) -> int:
    """Unix timestamp of a wall-clock time in the given zone."""
    return int(datetime.datetime(year, month, day, hour, minute, second, tzinfo=ZoneInfo(tz_name)).timestamp())


class SampleDatabase:
    """Builds a throwaway greenhouse database with the production schema."""

    def __init__(self, path):
        self.path = str(path)
        self._next_id = 1
        with sqlite3.connect(self.path) as conn:
            conn.executescript(SCHEMA)

    def add(self, timestamp, sensors=None, system=None, image=None, data_point_id=None) -> int:
        """
        Insert one sample.
        sensors: list of (sensor_id, temperature, humidity)
        system: dict of system_data columns (without ids)
        image: filename
        """
        dp_id = data_point_id if data_point_id is not None else self._next_id
        self._next_id = max(self._next_id, dp_id) + 1
        with sqlite3.connect(self.path) as conn:
            conn.execute(
                "INSERT INTO data_points (id, timestamp, synchronized) VALUES (?, ?, 1)",
                (dp_id, timestamp),
            )
            for sensor_id, temperature, humidity in sensors or []:
                conn.execute(
                    "INSERT INTO sensor_data (sensor_id, temperature, humidity, data_point_id) VALUES (?, ?, ?, ?)",
                    (sensor_id, temperature, humidity, dp_id),
                )
            if system is not None:
                row = {
                    "soc_temperature": 45.0,
                    "wlan0_link_quality": 0.8,
                    "wlan0_signal_level": -50.0,
                    "storage_total_size": 32e9,
                    "storage_used": 8e9,
                    "storage_avail": 24e9,
                }
                row.update(system)
                conn.execute(
                    "INSERT INTO system_data (soc_temperature, wlan0_link_quality, wlan0_signal_level, "
                    "storage_total_size, storage_used, storage_avail, data_point_id) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        row["soc_temperature"],
                        row["wlan0_link_quality"],
                        row["wlan0_signal_level"],
                        row["storage_total_size"],
                        row["storage_used"],
                        row["storage_avail"],
                        dp_id,
                    ),
                )
            if image is not None:
                conn.execute(
                    "INSERT INTO image_data (filename, data_point_id) VALUES (?, ?)",
                    (image, dp_id),
                )
        return dp_id


@pytest.fixture
def sample_db(tmp_path) -> SampleDatabase:
    """An empty database with the greenhouse schema."""
    return SampleDatabase(tmp_path / "greenhouse_data.sqlite")


@pytest.fixture
def running_services(sample_db):
    """Start the service manager against `sample_db` (default zone UTC)."""
    service_manager.start_services(sample_db.path, default_timezone="UTC")
    yield sample_db
    service_manager.stop_services()


@pytest.fixture(autouse=True)
def stop_services_after_test():
    """Make sure no test leaks a running service manager into the next one."""
    yield
    service_manager.stop_services()

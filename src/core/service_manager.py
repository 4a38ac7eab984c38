import logging
import os
from typing import Optional

from core.services.series_service import SeriesService
from core.services.telemetry_store import TelemetryStore

logger = logging.getLogger(__name__)


class ServiceManager:
    """Owns the sample store and the query service for the application's lifetime."""

    def __init__(self):
        self.running = False
        self.store: Optional[TelemetryStore] = None
        self.series_service: Optional[SeriesService] = None

    def start_services(self, db_path: str, default_timezone: str = "UTC"):
        """Open the store at `db_path`. Restarting replaces the previous store."""
        if self.running:
            self.stop_services()

        logger.info(f"Starting services (database: {db_path}, default time zone: {default_timezone})")
        if not os.path.exists(db_path):
            # Queries will answer 503 until the ingestion process creates the file
            logger.warning(f"Database file does not exist yet: {db_path}")

        self.store = TelemetryStore(db_path)
        self.series_service = SeriesService(self.store, default_timezone=default_timezone)
        self.running = True

    def stop_services(self):
        if not self.running:
            return
        logger.info("Stopping services")
        self.series_service = None
        self.store = None
        self.running = False


service_manager = ServiceManager()

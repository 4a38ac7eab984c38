import json
import logging
from pathlib import Path
from typing import Dict, Optional

from core.models.config_data import configData, configSensorData

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Loads and manages sensor configuration from JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = configData()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = self._get_default_config()
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the sensors_config.json file."""
        # Config file should be in the project root/config directory
        return Path(__file__).parent.parent.parent / "config" / "sensors_config.json"

    def load_config(self, config_path: Optional[Path] = None):
        """Load configuration from JSON file."""
        config_path = Path(config_path) if config_path is not None else self.get_config_path()

        # Start from defaults so unknown files still leave a usable table
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.error(f"Configuration file not found: {config_path}")
            return

        try:
            with open(config_path, 'r') as f:
                json_data = json.load(f)
            for sensor_key, sensor_cfg in json_data.get("sensors", {}).items():
                sensor_id = int(sensor_key)
                self._config.sensors[sensor_id] = configSensorData(
                    sensor_id,
                    displayName=sensor_cfg.get("display_name", self._config.unknownDisplayName),
                    description=sensor_cfg.get("description", ""),
                )
            self._config.unknownDisplayName = json_data.get(
                "unknown_display_name", self._config.unknownDisplayName
            )
            logger.info(f"Configuration loaded from {config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except (ValueError, AttributeError) as e:
            logger.error(f"Invalid sensor entry in configuration file: {e}")
            self._config = self._get_default_config()

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData(
            sensors={
                1: configSensorData(1, displayName="Internal"),
                2: configSensorData(2, displayName="External"),
            },
            unknownDisplayName="Unknown",
        )

    def get_sensor_display_name(self, sensor_id: int) -> str:
        """Display name for a sensor id; unlisted ids get the generic label."""
        sensor = self._config.sensors.get(sensor_id)
        if sensor is None:
            return self._config.unknownDisplayName
        return sensor.displayName

    def get_all_sensors(self) -> Dict[int, configSensorData]:
        """Get all sensor configurations."""
        return dict(self._config.sensors)

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()

from dataclasses import dataclass, field
from typing import Dict


@dataclass
class configSensorData:
    id: int
    displayName: str = "Unknown"
    description: str = ""


@dataclass
class configData:
    sensors: Dict[int, configSensorData] = field(default_factory=dict)
    unknownDisplayName: str = "Unknown"

"""Runtime services: telemetry and configuration."""

from . import telemetry
from .config import EngineConfig, LogSettings

__all__ = ["EngineConfig", "LogSettings", "telemetry"]

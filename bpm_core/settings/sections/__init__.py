from bpm_core.settings.sections.database import DatabaseSettings
from bpm_core.settings.sections.logging import LoggingSettings

__all__ = ["DatabaseSettings", "LoggingSettings"]

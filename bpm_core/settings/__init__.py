# Settings package
from bpm_core.settings.app import AppSettings, get_app_settings
from bpm_core.settings.sections import DatabaseSettings, LoggingSettings

__all__ = ["AppSettings", "DatabaseSettings", "LoggingSettings", "get_app_settings"]

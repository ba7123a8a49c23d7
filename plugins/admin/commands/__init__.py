from .settings import setup_settings_commands

__all__ = ["setup_settings_commands"]

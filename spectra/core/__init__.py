from .event_system import EventSystem
from .plugin_loader import PluginLoader

__all__ = ["PluginLoader", "EventSystem"]

from .levels import PermLevel
from .manager import PermissionManager

__all__ = ["PermLevel", "PermissionManager"]

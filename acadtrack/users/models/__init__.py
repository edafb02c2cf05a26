from .base_user import User  # Make User importable from users.models
from .role import Role, Permission, RolePermission
from .system_setting import SystemSetting


__all__ = ["User", "Role", "Permission", "RolePermission", "SystemSetting"]

from django.urls import path
from acadtrack.users.views.settings import (
    MyPermissionsView,
    ProfileView,
    RolePermissionView,
    SystemSettingView,
    UserRoleView,
)

urlpatterns = [
    path("permissions", RolePermissionView.as_view(), name="settings-permissions"),
    path(
        "permissions/me", MyPermissionsView.as_view(), name="settings-my-permissions"
    ),
    path("users", UserRoleView.as_view(), name="settings-users"),
    path("profile", ProfileView.as_view(), name="settings-profile"),
    path("system", SystemSettingView.as_view(), name="settings-system"),
]

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from .models.base_user import User
from .models.role import RolePermission
from .models.system_setting import SystemSetting


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "full_name", "role", "is_active")
    list_filter = ("role", "is_active", "is_staff")
    search_fields = ("username", "email", "full_name")
    # Role changes go through the principal-only settings endpoint
    readonly_fields = ("role",)
    fieldsets = BaseUserAdmin.fieldsets + (
        ("Profile", {"fields": ("full_name", "role", "avatar_url")}),
    )


@admin.register(RolePermission)
class RolePermissionAdmin(admin.ModelAdmin):
    list_display = ("role", "permission", "granted", "updated_at")
    list_filter = ("role", "permission", "granted")
    readonly_fields = ("role", "permission", "granted", "updated_by", "updated_at")

    def has_add_permission(self, request):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(SystemSetting)
class SystemSettingAdmin(admin.ModelAdmin):
    list_display = ("key", "updated_at", "updated_by")
    search_fields = ("key",)

from django.contrib import admin
from .models.action_log import ActionLog


@admin.register(ActionLog)
class ActionLogAdmin(admin.ModelAdmin):
    list_display = ("timestamp", "user", "category", "action")
    list_filter = ("category",)
    search_fields = ("action",)
    readonly_fields = ("timestamp", "metadata")

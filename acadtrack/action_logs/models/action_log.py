from django.conf import settings
from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models
from django.utils import timezone


class ActionCategory(models.TextChoices):
    CREATE = "CREATE", "Create"
    UPDATE = "UPDATE", "Update"
    DELETE = "DELETE", "Delete"
    VIEW = "VIEW", "View"
    LOGIN = "LOGIN", "Login"
    LOGOUT = "LOGOUT", "Logout"
    SYSTEM = "SYSTEM", "System"
    OTHER = "OTHER", "Other"


class ActionLog(models.Model):
    # User who performed the action
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        related_name="actions",
    )

    action = models.CharField(max_length=255)
    category = models.CharField(
        max_length=20, choices=ActionCategory.choices, default=ActionCategory.OTHER
    )

    # Affected object; ids are stored as text because primary keys are UUIDs
    content_type = models.ForeignKey(
        ContentType, on_delete=models.SET_NULL, null=True, blank=True
    )
    object_id = models.CharField(max_length=64, null=True, blank=True)
    content_object = GenericForeignKey("content_type", "object_id")

    metadata = models.JSONField(default=dict, blank=True)
    timestamp = models.DateTimeField(default=timezone.now)

    class Meta:
        ordering = ["-timestamp"]
        indexes = [
            models.Index(fields=["-timestamp"], name="action_logs_timesta_6d7c1e_idx"),
            models.Index(fields=["user"], name="action_logs_user_id_8a2f4b_idx"),
            models.Index(fields=["category"], name="action_logs_categor_3b9e0d_idx"),
            models.Index(
                fields=["content_type", "object_id"],
                name="action_logs_content_5f1a7c_idx",
            ),
        ]
        verbose_name = "Action Log"
        verbose_name_plural = "Action Logs"

    def __str__(self):
        return f"{self.user_id} - {self.get_category_display()} - {self.action}"

    @property
    def affected_model(self):
        if self.content_type:
            return self.content_type.model_class().__name__
        return None

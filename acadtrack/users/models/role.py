import uuid
from django.conf import settings
from django.db import models


class Role(models.TextChoices):
    STUDENT = "student", "Student"
    TEACHER = "teacher", "Teacher"
    HOD = "hod", "Head of Department"
    PRINCIPAL = "principal", "Principal"
    CLASS_COORDINATOR = "class_coordinator", "Class Coordinator"
    LAB_ASSISTANT = "lab_assistant", "Lab Assistant"
    PARENT = "parent", "Parent"


class Permission(models.TextChoices):
    CAN_EXPORT = "can_export", "Export Data"
    CAN_DELETE = "can_delete", "Delete Records"
    CAN_MANAGE_SUBJECTS = "can_manage_subjects", "Manage Subjects"
    CAN_MANAGE_EXAMS = "can_manage_exams", "Manage Exams"
    CAN_ENTER_MARKS = "can_enter_marks", "Enter Marks"
    CAN_VIEW_ANALYTICS = "can_view_analytics", "View Analytics"
    CAN_MANAGE_ATTENDANCE = "can_manage_attendance", "Manage Attendance"
    CAN_GIVE_FEEDBACK = "can_give_feedback", "Give Feedback"
    CAN_MANAGE_USERS = "can_manage_users", "Manage Users"


class RolePermission(models.Model):
    """A single grant switch for one (role, permission) pair.

    Rows are created by seeding and afterwards only flipped, never deleted.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    role = models.CharField(max_length=20, choices=Role.choices)
    permission = models.CharField(max_length=40, choices=Permission.choices)
    granted = models.BooleanField(default=False)
    updated_at = models.DateTimeField(auto_now=True)
    updated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="+",
    )

    class Meta:
        ordering = ["role", "permission"]
        constraints = [
            models.UniqueConstraint(
                fields=["role", "permission"], name="unique_role_permission"
            )
        ]

    def __str__(self):
        state = "granted" if self.granted else "denied"
        return f"{self.role}:{self.permission} ({state})"

"""
Read/write access to the ``RolePermission`` table.

Reads always go to the database; there is no in-process cache, so a toggle is
visible to the very next request. Writes are single-row updates gated to the
principal role.
"""

import logging
import uuid
from django.db import transaction
from acadtrack.action_logs.models.action_log import ActionCategory
from acadtrack.action_logs.utils.action_log import log_action
from acadtrack.users.exceptions import ForbiddenError, NotFoundError, ValidationError
from acadtrack.users.models.role import Permission, Role, RolePermission
from acadtrack.users.utils.roles import is_principal, is_valid_role

logger = logging.getLogger(__name__)

ALL_PERMISSIONS = tuple(Permission.values)
PERMISSION_LABELS = dict(Permission.choices)

# Grants written when the table is first seeded.
DEFAULT_GRANTS = {
    Role.PRINCIPAL: set(ALL_PERMISSIONS),
    Role.HOD: {
        Permission.CAN_EXPORT,
        Permission.CAN_MANAGE_SUBJECTS,
        Permission.CAN_MANAGE_EXAMS,
        Permission.CAN_ENTER_MARKS,
        Permission.CAN_VIEW_ANALYTICS,
        Permission.CAN_MANAGE_ATTENDANCE,
        Permission.CAN_GIVE_FEEDBACK,
    },
    Role.TEACHER: {
        Permission.CAN_EXPORT,
        Permission.CAN_MANAGE_EXAMS,
        Permission.CAN_ENTER_MARKS,
        Permission.CAN_VIEW_ANALYTICS,
        Permission.CAN_MANAGE_ATTENDANCE,
        Permission.CAN_GIVE_FEEDBACK,
    },
    Role.CLASS_COORDINATOR: {
        Permission.CAN_EXPORT,
        Permission.CAN_ENTER_MARKS,
        Permission.CAN_VIEW_ANALYTICS,
        Permission.CAN_MANAGE_ATTENDANCE,
        Permission.CAN_GIVE_FEEDBACK,
    },
    Role.LAB_ASSISTANT: {
        Permission.CAN_ENTER_MARKS,
        Permission.CAN_MANAGE_ATTENDANCE,
    },
    Role.STUDENT: set(),
    Role.PARENT: set(),
}


def is_valid_permission(value):
    return isinstance(value, str) and value in ALL_PERMISSIONS


def _validate_role(role):
    if not is_valid_role(role):
        raise ValidationError("Invalid role")


def _validate_permission(permission):
    if not is_valid_permission(permission):
        raise ValidationError("Invalid permission")


def _ensure_principal(caller):
    if not (
        getattr(caller, "is_authenticated", False)
        and is_principal(getattr(caller, "role", None))
    ):
        raise ForbiddenError("Only principals can modify permissions")


def get_permissions_for_role(role):
    """
    Complete ``{permission: granted}`` mapping for ``role``.

    Every defined permission is present; those without a stored row map to
    ``False``.
    """
    _validate_role(role)
    permissions = {permission: False for permission in ALL_PERMISSIONS}
    rows = RolePermission.objects.filter(role=role).values_list("permission", "granted")
    for permission, granted in rows:
        if permission in permissions:
            permissions[permission] = granted
    return permissions


def list_role_permissions(role=None):
    queryset = RolePermission.objects.all().order_by("role", "permission")
    if role is not None:
        _validate_role(role)
        queryset = queryset.filter(role=role)
    return queryset


def _apply(caller, row, granted):
    previous = row.granted
    row.granted = granted
    row.updated_by = caller
    row.save(update_fields=["granted", "updated_by", "updated_at"])

    logger.info(
        "Permission %s for role %s set to %s by %s",
        row.permission,
        row.role,
        granted,
        caller.pk,
    )
    log_action(
        user=caller,
        action=f"{'Granted' if granted else 'Revoked'} {row.permission} for {row.role}",
        category=ActionCategory.UPDATE,
        obj=row,
        metadata={
            "role": row.role,
            "permission": row.permission,
            "previous": previous,
            "granted": granted,
        },
    )
    return row


def set_permission(caller, role, permission, granted):
    """
    Flip the stored grant for ``(role, permission)``.

    Only a principal may call this. The row must already exist; nothing is
    created at request time.
    """
    _ensure_principal(caller)
    _validate_role(role)
    _validate_permission(permission)
    if not isinstance(granted, bool):
        raise ValidationError("Missing id or granted")

    with transaction.atomic():
        try:
            row = RolePermission.objects.select_for_update().get(
                role=role, permission=permission
            )
        except RolePermission.DoesNotExist:
            raise ValidationError("Unknown role permission")
        return _apply(caller, row, granted)


def set_permission_by_id(caller, row_id, granted):
    """Same as ``set_permission`` but addresses the row by its id."""
    _ensure_principal(caller)
    if not isinstance(granted, bool):
        raise ValidationError("Missing id or granted")
    try:
        row_id = uuid.UUID(str(row_id))
    except ValueError:
        raise ValidationError("Invalid permission id")

    with transaction.atomic():
        try:
            row = RolePermission.objects.select_for_update().get(pk=row_id)
        except RolePermission.DoesNotExist:
            raise NotFoundError("Permission not found")
        return _apply(caller, row, granted)


def seed_default_permissions(reset=False, model=None):
    """
    Create any missing ``RolePermission`` rows from ``DEFAULT_GRANTS``.

    Existing rows keep their current grant unless ``reset`` is set. ``model``
    lets data migrations pass their historical model class.
    Returns ``(created, reset_count)``.
    """
    model = model or RolePermission
    created = 0
    restored = 0
    for role in Role.values:
        granted_set = DEFAULT_GRANTS.get(role, set())
        for permission in ALL_PERMISSIONS:
            default = permission in granted_set
            row, was_created = model.objects.get_or_create(
                role=role, permission=permission, defaults={"granted": default}
            )
            if was_created:
                created += 1
            elif reset and row.granted != default:
                row.granted = default
                row.save(update_fields=["granted", "updated_at"])
                restored += 1
    return created, restored

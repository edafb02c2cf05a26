"""
Role registry: the closed set of roles and the static predicates built on it.

Every function here is pure and total. Values outside the closed set (a stale
or misspelled role string) make the predicates return ``False`` instead of
raising.
"""

from acadtrack.users.models.role import Role

VALID_ROLES = frozenset(Role.values)

ADMIN_ROLES = frozenset({Role.HOD, Role.PRINCIPAL})
ACADEMIC_MANAGER_ROLES = frozenset({Role.TEACHER, Role.HOD, Role.PRINCIPAL})
END_USER_ROLES = frozenset({Role.STUDENT, Role.PARENT})

# Only the core academic ladder is ordered; the remaining roles sit outside it.
ROLE_HIERARCHY = {
    Role.STUDENT: 0,
    Role.TEACHER: 1,
    Role.HOD: 2,
    Role.PRINCIPAL: 3,
}

DASHBOARD_PATHS = {
    Role.PRINCIPAL: "/admin",
    Role.HOD: "/admin",
    Role.TEACHER: "/teacher",
    Role.CLASS_COORDINATOR: "/teacher",
    Role.LAB_ASSISTANT: "/teacher",
    Role.PARENT: "/parent",
    Role.STUDENT: "/student",
}


def is_valid_role(value):
    return isinstance(value, str) and value in VALID_ROLES


def is_admin_role(role):
    """HOD or principal."""
    return is_valid_role(role) and role in ADMIN_ROLES


def can_manage_academics(role):
    """Teacher, HOD or principal."""
    return is_valid_role(role) and role in ACADEMIC_MANAGER_ROLES


def is_principal(role):
    return is_valid_role(role) and role == Role.PRINCIPAL


def has_min_role(role, min_role):
    """True when ``role`` sits at or above ``min_role`` on the academic ladder."""
    if not (is_valid_role(role) and is_valid_role(min_role)):
        return False
    if role not in ROLE_HIERARCHY or min_role not in ROLE_HIERARCHY:
        return False
    return ROLE_HIERARCHY[role] >= ROLE_HIERARCHY[min_role]


def get_dashboard_path(role):
    """Landing page for a role; ``None`` for values outside the closed set."""
    if not is_valid_role(role):
        return None
    return DASHBOARD_PATHS[role]


def get_settings_path(role):
    dashboard = get_dashboard_path(role)
    if dashboard is None:
        return None
    return f"{dashboard}/settings"


def get_role_display_name(role):
    if not is_valid_role(role):
        return "Unknown"
    return Role(role).label

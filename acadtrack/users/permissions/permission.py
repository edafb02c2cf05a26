from rest_framework.permissions import BasePermission
from acadtrack.users.exceptions import ValidationError
from acadtrack.users.utils.permission_store import (
    get_permissions_for_role,
    is_valid_permission,
)
from acadtrack.users.utils.roles import (
    can_manage_academics,
    is_admin_role,
    is_principal,
    is_valid_role,
)

# === HARD-CODED ACTIONS ===
# Never looked up in the permission table, so a misconfigured table can
# neither lock the principal out nor hand these to anyone else.

CHANGE_USER_ROLE = "change_user_role"
MODIFY_ROLE_PERMISSIONS = "modify_role_permissions"

PRINCIPAL_ONLY_ACTIONS = frozenset({CHANGE_USER_ROLE, MODIFY_ROLE_PERMISSIONS})


# === EVALUATOR ===


def get_user_permissions(role):
    """Complete permission mapping for ``role`` read fresh from the store."""
    return get_permissions_for_role(role)


def has_permission(role, permission):
    """
    Whether ``role`` is granted ``permission`` in the permission table.

    Unknown roles are denied. Unknown permission names are rejected with
    ``ValidationError``.
    """
    if not is_valid_permission(permission):
        raise ValidationError("Invalid permission")
    if not is_valid_role(role):
        return False
    return get_user_permissions(role)[permission]


def can_perform(role, action):
    """Two-tier check: principal-only actions first, then the permission table."""
    if action in PRINCIPAL_ONLY_ACTIONS:
        return is_principal(role)
    return has_permission(role, action)


def is_authorized(caller_id, caller_role, resource_owner_id, permission):
    """
    Owners may always act on their own records; everyone else needs the
    role grant.
    """
    if caller_id is not None and str(caller_id) == str(resource_owner_id):
        return True
    return can_perform(caller_role, permission)


# === DRF ADAPTERS ===


def _role_of(request):
    user = request.user
    if not (user and user.is_authenticated):
        return None
    return getattr(user, "role", None)


class IsPrincipal(BasePermission):
    message = "Forbidden"

    def has_permission(self, request, view):
        return is_principal(_role_of(request))


class IsAdministrator(BasePermission):
    """HOD or principal."""

    message = "Forbidden"

    def has_permission(self, request, view):
        return is_admin_role(_role_of(request))


class CanManageAcademics(BasePermission):
    message = "Forbidden"

    def has_permission(self, request, view):
        return can_manage_academics(_role_of(request))


class HasRolePermission(BasePermission):
    """
    Checks the caller's role against the permission table.

    The view declares what it needs in one of these formats:
    - required_permission = 'can_view_analytics'  # For all methods
    - required_permission_get = 'can_view_analytics'  # For GET only
    - required_permission_post = 'can_enter_marks'  # For POST only
    Object checks also pass when the caller owns the object; the owner
    attribute is named by ``owner_field`` on the view (default ``user``).
    Views declaring ``owner_field`` defer single-object requests to
    ``has_object_permission`` so owners without the grant still get through.
    """

    message = "Forbidden"

    def has_permission(self, request, view):
        role = _role_of(request)
        if role is None:
            return False

        required_permission = self._get_required_permission(view, request.method)
        if not required_permission:
            return False

        if self._serves_owned_object(view):
            return True

        return can_perform(role, required_permission)

    def has_object_permission(self, request, view, obj):
        user = request.user
        owner_field = getattr(view, "owner_field", "user")
        owner = getattr(obj, owner_field, None)
        owner_id = getattr(owner, "pk", owner)

        required_permission = self._get_required_permission(view, request.method)
        if not required_permission:
            return False

        return is_authorized(user.pk, _role_of(request), owner_id, required_permission)

    def _serves_owned_object(self, view):
        """Object route on a view that names its owner attribute"""
        if not hasattr(view, "owner_field"):
            return False
        lookup = getattr(view, "lookup_url_kwarg", None) or getattr(
            view, "lookup_field", None
        )
        return bool(lookup) and lookup in (getattr(view, "kwargs", None) or {})

    def _get_required_permission(self, view, method):
        """Method-specific permission first, then the general one"""
        method_permission_attr = f"required_permission_{method.lower()}"
        if hasattr(view, method_permission_attr):
            return getattr(view, method_permission_attr)
        return getattr(view, "required_permission", None)

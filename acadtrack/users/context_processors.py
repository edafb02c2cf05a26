from acadtrack.users.exceptions import UnauthenticatedError
from acadtrack.users.permissions.permission import get_user_permissions
from acadtrack.users.utils.app_user import get_user


def role_guards(request):
    """Expose ``app_user`` and ``user_permissions`` to the template guards."""
    try:
        app_user = get_user(request)
    except UnauthenticatedError:
        return {"app_user": None, "user_permissions": {}}

    return {
        "app_user": app_user,
        "user_permissions": get_user_permissions(app_user.role),
    }

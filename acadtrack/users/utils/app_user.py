from dataclasses import dataclass
from typing import Optional
from acadtrack.users.exceptions import UnauthenticatedError
from acadtrack.users.utils.roles import is_valid_role


@dataclass(frozen=True)
class AppUser:
    id: str
    email: str
    full_name: str
    role: str
    avatar_url: Optional[str] = None


def get_user_role(request):
    """Role of the request's user, or ``None`` when anonymous or unrecognised."""
    user = getattr(request, "user", None)
    if user is None or not user.is_authenticated:
        return None
    role = getattr(user, "role", None)
    return role if is_valid_role(role) else None


def get_user(request):
    """
    Current authenticated user as an ``AppUser``.

    Raises ``UnauthenticatedError`` for anonymous requests and for stored
    roles outside the closed set; the route guard turns that into a redirect
    to the login page.
    """
    role = get_user_role(request)
    if role is None:
        raise UnauthenticatedError()

    user = request.user
    return AppUser(
        id=str(user.pk),
        email=user.email,
        full_name=user.get_full_name(),
        role=role,
        avatar_url=user.avatar_url or None,
    )

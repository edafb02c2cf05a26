"""
Route guard: role-based path protection for every page request.

Runs after ``AuthenticationMiddleware`` and re-evaluates on each request from
the session user loaded for that request, so a role change takes effect on
the very next page load.

Decision order:
1. exempt prefixes (API, schema, static) pass through; the API enforces
   its own authorization and answers 401/403 instead of redirecting
2. public paths pass through
3. no usable identity -> redirect to the login page
4. most specific matching policy prefix decides; a role outside the allowed
   set is sent to its own dashboard
5. unmatched paths follow ``ROUTE_GUARD_DEFAULT_POLICY``
"""

import logging
from django.conf import settings
from django.contrib.auth.views import redirect_to_login
from django.shortcuts import redirect
from acadtrack.users.exceptions import ForbiddenError, UnauthenticatedError
from acadtrack.users.utils.app_user import get_user_role
from acadtrack.users.utils.roles import get_dashboard_path

logger = logging.getLogger(__name__)

ALLOW = "allow"
DENY = "deny"
DEFAULT_POLICIES = (ALLOW, DENY)


def path_matches(path, prefix):
    """Segment-aware prefix match: ``/admin`` covers ``/admin/x`` but not ``/administer``."""
    prefix = prefix.rstrip("/")
    if not prefix:
        return path == "/"
    return path == prefix or path.startswith(prefix + "/")


def is_public_path(path):
    return any(
        path_matches(path, public) for public in settings.ROUTE_GUARD_PUBLIC_PATHS
    )


def is_exempt_path(path):
    return any(
        path_matches(path, prefix) for prefix in settings.ROUTE_GUARD_EXEMPT_PREFIXES
    )


def resolve_policy(path):
    """Allowed roles of the longest policy prefix matching ``path``, or ``None``."""
    matched = None
    for prefix, roles in settings.ROUTE_GUARD_POLICIES.items():
        if path_matches(path, prefix):
            if matched is None or len(prefix) > len(matched[0]):
                matched = (prefix, roles)
    return frozenset(matched[1]) if matched else None


class RouteGuardMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        denied = self.check_request(request)
        if denied is not None:
            return denied
        return self.get_response(request)

    def check_request(self, request):
        path = request.path_info

        if is_exempt_path(path) or is_public_path(path):
            return None

        role = get_user_role(request)
        if role is None:
            return self.redirect_to_login(request)

        allowed_roles = resolve_policy(path)
        if allowed_roles is None:
            if settings.ROUTE_GUARD_DEFAULT_POLICY == ALLOW:
                return None
            logger.info("Unlisted path %s denied for role %s", path, role)
            return self.redirect_to_dashboard(role)

        if role not in allowed_roles:
            logger.info("Path %s denied for role %s", path, role)
            return self.redirect_to_dashboard(role)

        return None

    def process_exception(self, request, exception):
        """Page views signal auth failures by raising; answer them with redirects."""
        if is_exempt_path(request.path_info):
            return None
        if isinstance(exception, UnauthenticatedError):
            return self.redirect_to_login(request)
        if isinstance(exception, ForbiddenError):
            role = get_user_role(request)
            if role is None:
                return self.redirect_to_login(request)
            return self.redirect_to_dashboard(role)
        return None

    def redirect_to_login(self, request):
        return redirect_to_login(request.get_full_path(), settings.LOGIN_URL)

    def redirect_to_dashboard(self, role):
        return redirect(get_dashboard_path(role))

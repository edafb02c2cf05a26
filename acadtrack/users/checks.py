from django.conf import settings
from django.core.checks import Error, Tags, register
from acadtrack.users.middleware.route_guard import (
    DEFAULT_POLICIES,
    is_public_path,
    resolve_policy,
)
from acadtrack.users.models.role import Role
from acadtrack.users.utils.roles import get_dashboard_path, is_valid_role


@register(Tags.security)
def check_route_guard_policies(app_configs, **kwargs):
    """Every role must be able to open its own dashboard, or redirects would loop."""
    errors = []

    if settings.ROUTE_GUARD_DEFAULT_POLICY not in DEFAULT_POLICIES:
        errors.append(
            Error(
                f"ROUTE_GUARD_DEFAULT_POLICY must be one of {DEFAULT_POLICIES}.",
                id="users.E001",
            )
        )

    for prefix, roles in settings.ROUTE_GUARD_POLICIES.items():
        unknown = [role for role in roles if not is_valid_role(role)]
        if unknown:
            errors.append(
                Error(
                    f"Route policy {prefix!r} names unknown roles: {unknown}.",
                    id="users.E002",
                )
            )

    for role in Role.values:
        dashboard = get_dashboard_path(role)
        if is_public_path(dashboard):
            continue
        allowed = resolve_policy(dashboard)
        if allowed is None:
            blocked = settings.ROUTE_GUARD_DEFAULT_POLICY != "allow"
        else:
            blocked = role not in allowed
        if blocked:
            errors.append(
                Error(
                    f"Role {role!r} cannot reach its dashboard {dashboard!r}.",
                    hint="Add the role to the matching ROUTE_GUARD_POLICIES entry.",
                    id="users.E003",
                )
            )

    return errors

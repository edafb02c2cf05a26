"""
Role-based template guards.

These tags only decide what a page shows. They run on a page the route guard
has already let through and must never be the only check protecting data:
every guarded affordance needs a matching route policy or API permission.

Usage::

    {% load role_guards %}

    {% require_role "principal" %}<a href="/admin/settings">Settings</a>{% endrequire_role %}

    {% require_role "teacher" "hod" "principal" %}
      <button>Enter marks</button>
    {% else %}
      <p>Read only</p>
    {% endrequire_role %}

    {% require_permission "can_export" %}<a href="/export">Export</a>{% endrequire_permission %}

    {% role_switch %}
      {% case "hod" "principal" %}Admin panel
      {% case "student" %}My results
      {% default %}Welcome
    {% endrole_switch %}

The role and permission mapping come from the ``app_user`` and
``user_permissions`` context variables set by
``acadtrack.users.context_processors.role_guards``.
"""

from django import template
from django.utils.html import format_html
from acadtrack.users.utils.roles import get_role_display_name, is_valid_role

register = template.Library()

ROLE_BADGE_CLASSES = {
    "principal": "badge badge-principal",
    "hod": "badge badge-hod",
    "teacher": "badge badge-teacher",
    "class_coordinator": "badge badge-teacher",
    "lab_assistant": "badge badge-teacher",
    "student": "badge badge-student",
    "parent": "badge badge-parent",
}


def role_matches(user_role, roles):
    """True when ``user_role`` is one of ``roles`` (a single role or an iterable)."""
    if not is_valid_role(user_role):
        return False
    if isinstance(roles, str):
        roles = [roles]
    return user_role in roles


def permission_matches(permissions, predicate):
    """
    Evaluate ``predicate`` against a ``{permission: granted}`` mapping.

    ``predicate`` is either a permission name or a callable taking the
    mapping. A missing mapping never matches.
    """
    if not permissions:
        return False
    if callable(predicate):
        return bool(predicate(permissions))
    return bool(permissions.get(predicate, False))


def _context_role(context):
    app_user = context.get("app_user")
    return getattr(app_user, "role", None)


class GuardNode(template.Node):
    def __init__(self, args, nodelist_true, nodelist_false):
        self.args = args
        self.nodelist_true = nodelist_true
        self.nodelist_false = nodelist_false

    def render(self, context):
        values = [arg.resolve(context) for arg in self.args]
        if self.is_satisfied(context, values):
            return self.nodelist_true.render(context)
        return self.nodelist_false.render(context)

    def is_satisfied(self, context, values):
        raise NotImplementedError


class RequireRoleNode(GuardNode):
    def is_satisfied(self, context, values):
        return role_matches(_context_role(context), values)


class RequirePermissionNode(GuardNode):
    def is_satisfied(self, context, values):
        permissions = context.get("user_permissions")
        return any(permission_matches(permissions, value) for value in values)


class AuthenticatedNode(GuardNode):
    def __init__(self, args, nodelist_true, nodelist_false, expected=True):
        super().__init__(args, nodelist_true, nodelist_false)
        self.expected = expected

    def is_satisfied(self, context, values):
        return is_valid_role(_context_role(context)) is self.expected


def _parse_guard(parser, token, node_class, needs_args=True, **kwargs):
    bits = token.split_contents()
    tag_name = bits[0]
    if needs_args and len(bits) < 2:
        raise template.TemplateSyntaxError(
            f"'{tag_name}' tag requires at least one argument"
        )
    args = [parser.compile_filter(bit) for bit in bits[1:]]

    end_tag = f"end{tag_name}"
    nodelist_true = parser.parse(("else", end_tag))
    token = parser.next_token()
    if token.contents == "else":
        nodelist_false = parser.parse((end_tag,))
        parser.delete_first_token()
    else:
        nodelist_false = template.NodeList()
    return node_class(args, nodelist_true, nodelist_false, **kwargs)


@register.tag
def require_role(parser, token):
    """Render the body when the user has any of the listed roles."""
    return _parse_guard(parser, token, RequireRoleNode)


@register.tag
def require_permission(parser, token):
    """
    Render the body when any listed permission is granted. Arguments may be
    permission names or a context variable holding a predicate callable
    (mark it ``do_not_call_in_templates`` so the template engine passes it
    through uncalled).
    """
    return _parse_guard(parser, token, RequirePermissionNode)


@register.tag
def authenticated(parser, token):
    return _parse_guard(parser, token, AuthenticatedNode, needs_args=False)


@register.tag
def not_authenticated(parser, token):
    return _parse_guard(
        parser, token, AuthenticatedNode, needs_args=False, expected=False
    )


class RoleSwitchNode(template.Node):
    def __init__(self, cases, default):
        self.cases = cases
        self.default = default

    def render(self, context):
        role = _context_role(context)
        for args, nodelist in self.cases:
            if role_matches(role, [arg.resolve(context) for arg in args]):
                return nodelist.render(context)
        return self.default.render(context)


@register.tag
def role_switch(parser, token):
    """Render the first ``case`` whose roles include the user's role, else ``default``."""
    parser.parse(("case", "default", "endrole_switch"))
    cases = []
    default = template.NodeList()

    token = parser.next_token()
    while token.contents != "endrole_switch":
        bits = token.split_contents()
        if bits[0] == "case":
            if len(bits) < 2:
                raise template.TemplateSyntaxError(
                    "'case' tag requires at least one role"
                )
            args = [parser.compile_filter(bit) for bit in bits[1:]]
            nodelist = parser.parse(("case", "default", "endrole_switch"))
            cases.append((args, nodelist))
        else:
            default = parser.parse(("endrole_switch",))
        token = parser.next_token()

    return RoleSwitchNode(cases, default)


@register.simple_tag
def role_badge(role, css_class=""):
    if not is_valid_role(role):
        return ""
    classes = f"{ROLE_BADGE_CLASSES[role]} {css_class}".strip()
    return format_html(
        '<span class="{}">{}</span>', classes, get_role_display_name(role)
    )


@register.filter
def display_role(role):
    return get_role_display_name(role)

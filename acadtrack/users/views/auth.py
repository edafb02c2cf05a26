from django.conf import settings
from django.contrib.auth import views as auth_views
from django.views.generic import RedirectView
from acadtrack.users.utils.app_user import get_user_role
from acadtrack.users.utils.roles import get_dashboard_path


class LoginView(auth_views.LoginView):
    """Session login for the web pages; lands on the user's own dashboard."""

    template_name = "registration/login.html"
    redirect_authenticated_user = True

    def get_default_redirect_url(self):
        return get_dashboard_path(getattr(self.request.user, "role", None)) or "/"


class LogoutView(auth_views.LogoutView):
    next_page = "/login"


class AuthCallbackView(RedirectView):
    """Post sign-in landing: own dashboard, or back to login without a session."""

    def get_redirect_url(self, *args, **kwargs):
        return get_dashboard_path(get_user_role(self.request)) or settings.LOGIN_URL

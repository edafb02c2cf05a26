from django.views.generic import TemplateView
from acadtrack.users.permissions.permission import CHANGE_USER_ROLE, can_perform
from acadtrack.users.utils.app_user import get_user
from acadtrack.users.utils.permission_store import list_role_permissions
from acadtrack.users.utils.roles import get_dashboard_path, get_settings_path


class HomeView(TemplateView):
    template_name = "dashboards/home.html"


class DashboardView(TemplateView):
    """
    Role landing page. Reaching it at all is the route guard's decision; the
    view only needs a resolved user to render.
    """

    template_name = "dashboards/dashboard.html"
    section = None

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        self.app_user = get_user(self.request)
        context.update(
            {
                "section": self.section,
                "dashboard_path": get_dashboard_path(self.app_user.role),
                "settings_path": get_settings_path(self.app_user.role),
            }
        )
        return context


class AdminDashboardView(DashboardView):
    section = "admin"


class TeacherDashboardView(DashboardView):
    section = "teacher"


class StudentDashboardView(DashboardView):
    section = "student"


class ParentDashboardView(DashboardView):
    section = "parent"


class StudentResultsView(DashboardView):
    template_name = "dashboards/student_results.html"
    section = "student"


class AdminSettingsView(DashboardView):
    template_name = "dashboards/admin_settings.html"
    section = "admin"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["role_permissions"] = list_role_permissions()
        context["can_change_roles"] = can_perform(self.app_user.role, CHANGE_USER_ROLE)
        return context

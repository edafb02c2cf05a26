from django.urls import path
from acadtrack.dashboards.views.dashboards import (
    AdminDashboardView,
    AdminSettingsView,
    HomeView,
    ParentDashboardView,
    StudentDashboardView,
    StudentResultsView,
    TeacherDashboardView,
)

urlpatterns = [
    path("", HomeView.as_view(), name="home"),
    path("admin", AdminDashboardView.as_view(), name="admin-dashboard"),
    path("admin/settings", AdminSettingsView.as_view(), name="admin-settings"),
    path("teacher", TeacherDashboardView.as_view(), name="teacher-dashboard"),
    path("student", StudentDashboardView.as_view(), name="student-dashboard"),
    path("student/results", StudentResultsView.as_view(), name="student-results"),
    path("parent", ParentDashboardView.as_view(), name="parent-dashboard"),
]

from django.contrib import admin
from django.urls import path, include
from rest_framework_simplejwt.views import TokenObtainPairView, TokenRefreshView
from drf_yasg.views import get_schema_view
from drf_yasg import openapi
from rest_framework.permissions import AllowAny
from acadtrack.users.views.auth import AuthCallbackView, LoginView, LogoutView


schema_view = get_schema_view(
    openapi.Info(
        title="AcadTrack API",
        default_version="v1",
        description="API documentation for AcadTrack",
    ),
    public=True,
    permission_classes=[AllowAny],
    authentication_classes=[],
)

urlpatterns = [
    # Swagger/Redoc URLs
    path(
        "swagger<format>/", schema_view.without_ui(cache_timeout=0), name="schema-json"
    ),
    path(
        "swagger/",
        schema_view.with_ui("swagger", cache_timeout=0),
        name="schema-swagger-ui",
    ),
    path("redoc/", schema_view.with_ui("redoc", cache_timeout=0), name="schema-redoc"),
    # Django admin; /admin is the HOD/principal dashboard
    path("django-admin/", admin.site.urls),
    # Session auth for pages
    path("login", LoginView.as_view(), name="login"),
    path("auth/signout", LogoutView.as_view(), name="logout"),
    path("auth/callback", AuthCallbackView.as_view(), name="auth-callback"),
    # API routes with /api/ prefix
    path(
        "api/",
        include(
            [
                path("token", TokenObtainPairView.as_view(), name="token_obtain_pair"),
                path("token/refresh", TokenRefreshView.as_view(), name="token_refresh"),
                path("settings/", include("acadtrack.users.urls.urls")),
            ]
        ),
    ),
    # Role dashboards
    path("", include("acadtrack.dashboards.urls.urls")),
]

from django.apps import AppConfig


class UsersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "acadtrack.users"
    label = "users"

    def ready(self):
        from acadtrack.users import checks  # noqa: F401

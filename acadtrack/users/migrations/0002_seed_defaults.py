from django.db import migrations


DEFAULT_SYSTEM_SETTINGS = {
    "institution": {
        "name": "",
        "code": "",
        "address": "",
        "phone": "",
        "email": "",
        "website": "",
    },
    "academic_year": {"current": "", "start_date": "", "end_date": ""},
    "grading": {
        "thresholds": {"O": 90, "A+": 80, "A": 70, "B+": 60, "B": 50, "C": 40},
        "pass_mark": 40,
    },
}


def seed_defaults(apps, schema_editor):
    from acadtrack.users.utils.permission_store import seed_default_permissions

    seed_default_permissions(model=apps.get_model("users", "RolePermission"))

    SystemSetting = apps.get_model("users", "SystemSetting")
    for key, value in DEFAULT_SYSTEM_SETTINGS.items():
        SystemSetting.objects.get_or_create(key=key, defaults={"value": value})


class Migration(migrations.Migration):

    dependencies = [
        ("users", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(seed_defaults, migrations.RunPython.noop),
    ]

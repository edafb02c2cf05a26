from django.test import SimpleTestCase
from acadtrack.users.models.role import Role
from acadtrack.users.utils.roles import (
    can_manage_academics,
    get_dashboard_path,
    get_role_display_name,
    get_settings_path,
    has_min_role,
    is_admin_role,
    is_principal,
    is_valid_role,
)


class RoleRegistryTest(SimpleTestCase):
    def test_is_valid_role(self):
        for role in Role.values:
            self.assertTrue(is_valid_role(role))
        self.assertFalse(is_valid_role("admin"))
        self.assertFalse(is_valid_role("Principal"))
        self.assertFalse(is_valid_role(""))
        self.assertFalse(is_valid_role(None))
        self.assertFalse(is_valid_role(3))

    def test_is_admin_role(self):
        self.assertTrue(is_admin_role("hod"))
        self.assertTrue(is_admin_role("principal"))
        self.assertFalse(is_admin_role("teacher"))
        self.assertFalse(is_admin_role("class_coordinator"))
        self.assertFalse(is_admin_role("bogus"))

    def test_can_manage_academics(self):
        for role in ("teacher", "hod", "principal"):
            self.assertTrue(can_manage_academics(role))
        for role in ("student", "parent", "class_coordinator", "lab_assistant"):
            self.assertFalse(can_manage_academics(role))

    def test_is_principal(self):
        self.assertTrue(is_principal("principal"))
        self.assertFalse(is_principal("hod"))
        self.assertFalse(is_principal(None))

    def test_has_min_role_follows_ladder(self):
        self.assertTrue(has_min_role("principal", "hod"))
        self.assertTrue(has_min_role("hod", "hod"))
        self.assertTrue(has_min_role("teacher", "student"))
        self.assertFalse(has_min_role("teacher", "hod"))
        self.assertFalse(has_min_role("student", "teacher"))

    def test_has_min_role_outside_ladder(self):
        self.assertFalse(has_min_role("parent", "student"))
        self.assertFalse(has_min_role("principal", "lab_assistant"))
        self.assertFalse(has_min_role("class_coordinator", "student"))
        self.assertFalse(has_min_role("bogus", "student"))
        self.assertFalse(has_min_role(["principal"], "student"))

    def test_dashboard_paths(self):
        self.assertEqual(get_dashboard_path("principal"), "/admin")
        self.assertEqual(get_dashboard_path("hod"), "/admin")
        self.assertEqual(get_dashboard_path("teacher"), "/teacher")
        self.assertEqual(get_dashboard_path("class_coordinator"), "/teacher")
        self.assertEqual(get_dashboard_path("lab_assistant"), "/teacher")
        self.assertEqual(get_dashboard_path("student"), "/student")
        self.assertEqual(get_dashboard_path("parent"), "/parent")
        self.assertIsNone(get_dashboard_path("bogus"))

    def test_settings_path(self):
        self.assertEqual(get_settings_path("hod"), "/admin/settings")
        self.assertEqual(get_settings_path("student"), "/student/settings")
        self.assertIsNone(get_settings_path(None))

    def test_display_name(self):
        self.assertEqual(get_role_display_name("hod"), "Head of Department")
        self.assertEqual(get_role_display_name("lab_assistant"), "Lab Assistant")
        self.assertEqual(get_role_display_name("bogus"), "Unknown")

import uuid
from types import SimpleNamespace
from django.contrib.auth.models import AnonymousUser
from django.test import RequestFactory, TestCase
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.test import APIRequestFactory, force_authenticate
from acadtrack.tests.users_tests.users_factories import (
    HodUserFactory,
    ParentUserFactory,
    PrincipalUserFactory,
    StudentUserFactory,
    TeacherUserFactory,
    UserFactory,
)
from acadtrack.users.exceptions import ValidationError
from acadtrack.users.models.base_user import User
from acadtrack.users.models.role import Permission, Role, RolePermission
from acadtrack.users.permissions.permission import (
    CHANGE_USER_ROLE,
    MODIFY_ROLE_PERMISSIONS,
    CanManageAcademics,
    HasRolePermission,
    IsAdministrator,
    IsPrincipal,
    can_perform,
    get_user_permissions,
    has_permission,
    is_authorized,
)
from acadtrack.users.serializers.settings import UserSummarySerializer


class PermissionEvaluatorTest(TestCase):
    def test_has_permission_reads_table(self):
        self.assertTrue(has_permission(Role.TEACHER, "can_enter_marks"))
        self.assertFalse(has_permission(Role.TEACHER, "can_delete"))
        self.assertFalse(has_permission(Role.STUDENT, "can_export"))

    def test_has_permission_sees_changes_immediately(self):
        RolePermission.objects.filter(
            role=Role.STUDENT, permission=Permission.CAN_EXPORT
        ).update(granted=True)
        self.assertTrue(has_permission(Role.STUDENT, "can_export"))

    def test_unknown_role_denied(self):
        self.assertFalse(has_permission("janitor", "can_export"))
        self.assertFalse(has_permission(None, "can_export"))

    def test_unknown_permission_rejected(self):
        with self.assertRaises(ValidationError):
            has_permission(Role.PRINCIPAL, "can_fly")

    def test_get_user_permissions_is_complete(self):
        permissions = get_user_permissions(Role.PARENT)
        self.assertEqual(set(permissions), set(Permission.values))
        self.assertFalse(any(permissions.values()))

    def test_principal_only_actions_ignore_table(self):
        RolePermission.objects.filter(role=Role.PRINCIPAL).update(granted=False)
        RolePermission.objects.filter(role=Role.HOD).update(granted=True)

        self.assertTrue(can_perform(Role.PRINCIPAL, CHANGE_USER_ROLE))
        self.assertTrue(can_perform(Role.PRINCIPAL, MODIFY_ROLE_PERMISSIONS))
        self.assertFalse(can_perform(Role.HOD, CHANGE_USER_ROLE))
        self.assertFalse(can_perform(Role.HOD, MODIFY_ROLE_PERMISSIONS))

    def test_can_perform_falls_back_to_table(self):
        self.assertTrue(can_perform(Role.HOD, "can_manage_exams"))
        self.assertFalse(can_perform(Role.LAB_ASSISTANT, "can_manage_exams"))

    def test_owner_override(self):
        owner_id = uuid.uuid4()
        self.assertTrue(
            is_authorized(owner_id, Role.STUDENT, str(owner_id), "can_give_feedback")
        )
        self.assertFalse(
            is_authorized(uuid.uuid4(), Role.STUDENT, owner_id, "can_give_feedback")
        )
        self.assertTrue(
            is_authorized(uuid.uuid4(), Role.TEACHER, owner_id, "can_give_feedback")
        )

    def test_owner_override_needs_a_caller(self):
        self.assertFalse(is_authorized(None, Role.STUDENT, None, "can_export"))


class DRFPermissionClassTest(TestCase):
    def setUp(self):
        self.factory = RequestFactory()

    def _request(self, user):
        request = self.factory.get("/")
        request.user = user
        return request

    def test_is_principal(self):
        permission = IsPrincipal()
        self.assertTrue(
            permission.has_permission(self._request(PrincipalUserFactory()), None)
        )
        self.assertFalse(
            permission.has_permission(self._request(HodUserFactory()), None)
        )
        self.assertFalse(permission.has_permission(self._request(AnonymousUser()), None))

    def test_is_administrator(self):
        permission = IsAdministrator()
        self.assertTrue(permission.has_permission(self._request(HodUserFactory()), None))
        self.assertTrue(
            permission.has_permission(self._request(PrincipalUserFactory()), None)
        )
        self.assertFalse(
            permission.has_permission(self._request(TeacherUserFactory()), None)
        )

    def test_can_manage_academics(self):
        permission = CanManageAcademics()
        self.assertTrue(
            permission.has_permission(self._request(TeacherUserFactory()), None)
        )
        self.assertFalse(
            permission.has_permission(self._request(ParentUserFactory()), None)
        )

    def test_has_role_permission(self):
        permission = HasRolePermission()

        class ExportView:
            required_permission = "can_export"

        class MethodView:
            required_permission = "can_export"
            required_permission_get = "can_manage_users"

        class OpenView:
            pass

        teacher_request = self._request(TeacherUserFactory())
        self.assertTrue(permission.has_permission(teacher_request, ExportView()))
        self.assertFalse(permission.has_permission(teacher_request, MethodView()))
        self.assertFalse(permission.has_permission(teacher_request, OpenView()))
        self.assertFalse(
            permission.has_permission(self._request(AnonymousUser()), ExportView())
        )

    def test_has_role_permission_owner(self):
        permission = HasRolePermission()
        student = StudentUserFactory()
        other = UserFactory()

        class FeedbackView:
            required_permission = "can_give_feedback"

        request = self._request(student)
        own_record = SimpleNamespace(user=student)
        other_record = SimpleNamespace(user=other)

        self.assertTrue(
            permission.has_object_permission(request, FeedbackView(), own_record)
        )
        self.assertFalse(
            permission.has_object_permission(request, FeedbackView(), other_record)
        )

    def test_has_role_permission_custom_owner_field(self):
        permission = HasRolePermission()
        parent = ParentUserFactory()

        class ChildView:
            required_permission = "can_export"
            owner_field = "guardian_id"

        record = SimpleNamespace(guardian_id=str(parent.pk))
        self.assertTrue(
            permission.has_object_permission(self._request(parent), ChildView(), record)
        )


class UserRecordView(generics.RetrieveAPIView):
    queryset = User.objects.all()
    serializer_class = UserSummarySerializer
    permission_classes = [IsAuthenticated, HasRolePermission]
    required_permission = "can_view_analytics"
    owner_field = "pk"


class AnalyticsListView(generics.ListAPIView):
    queryset = User.objects.all()
    serializer_class = UserSummarySerializer
    permission_classes = [IsAuthenticated, HasRolePermission]
    required_permission = "can_view_analytics"
    owner_field = "pk"


class HasRolePermissionInViewTest(TestCase):
    def setUp(self):
        self.factory = APIRequestFactory()
        self.student = StudentUserFactory()
        self.other_student = StudentUserFactory()

    def _retrieve(self, user, record):
        request = self.factory.get(f"/records/{record.pk}")
        force_authenticate(request, user=user)
        return UserRecordView.as_view()(request, pk=record.pk)

    def test_owner_reads_own_record_without_grant(self):
        self.assertFalse(has_permission(Role.STUDENT, "can_view_analytics"))
        response = self._retrieve(self.student, self.student)
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(self.student.pk))

    def test_non_owner_without_grant_is_forbidden(self):
        response = self._retrieve(self.student, self.other_student)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data, {"error": "Forbidden"})

    def test_granted_role_reads_any_record(self):
        response = self._retrieve(TeacherUserFactory(), self.other_student)
        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_collection_route_still_needs_grant(self):
        request = self.factory.get("/records")
        force_authenticate(request, user=self.student)
        response = AnalyticsListView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        request = self.factory.get("/records")
        force_authenticate(request, user=TeacherUserFactory())
        response = AnalyticsListView.as_view()(request)
        self.assertEqual(response.status_code, status.HTTP_200_OK)

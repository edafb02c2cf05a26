import logging
from django_filters import rest_framework as filters
from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from acadtrack.action_logs.models.action_log import ActionCategory
from acadtrack.action_logs.utils.action_log import log_action
from acadtrack.users.exceptions import (
    ForbiddenError,
    NotFoundError,
    ValidationError,
    error_message,
)
from acadtrack.users.models.base_user import User
from acadtrack.users.models.role import Role
from acadtrack.users.models.system_setting import SystemSetting
from acadtrack.users.permissions.permission import (
    CHANGE_USER_ROLE,
    MODIFY_ROLE_PERMISSIONS,
    IsAdministrator,
    can_perform,
    get_user_permissions,
)
from acadtrack.users.serializers.settings import (
    PermissionToggleSerializer,
    ProfileSerializer,
    RoleChangeSerializer,
    RolePermissionSerializer,
    SystemSettingSerializer,
    SystemSettingUpdateSerializer,
    UserSummarySerializer,
)
from acadtrack.users.utils.app_user import get_user
from acadtrack.users.utils.permission_store import (
    list_role_permissions,
    set_permission,
    set_permission_by_id,
)

logger = logging.getLogger(__name__)

MAX_USERS_LISTED = 500


class UserRoleFilter(filters.FilterSet):
    role = filters.ChoiceFilter(
        choices=Role.choices, error_messages={"invalid_choice": "Invalid role"}
    )

    class Meta:
        model = User
        fields = ["role"]


def validated(serializer):
    """Run validation and collapse field errors into one generic message."""
    if not serializer.is_valid():
        raise ValidationError(error_message(serializer.errors))
    return serializer.validated_data


class RolePermissionView(APIView):
    """
    GET /api/settings/permissions?role=teacher
    PUT /api/settings/permissions  {"id": "<row id>", "granted": true}
                                   {"role": "teacher", "permission": "can_export", "granted": true}
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        role = request.query_params.get("role")
        rows = list_role_permissions(role=role or None)
        return Response(RolePermissionSerializer(rows, many=True).data)

    def put(self, request):
        if not can_perform(request.user.role, MODIFY_ROLE_PERMISSIONS):
            raise ForbiddenError("Only principals can modify permissions")

        data = validated(PermissionToggleSerializer(data=request.data))
        if "id" in data:
            row = set_permission_by_id(request.user, data["id"], data["granted"])
        else:
            row = set_permission(
                request.user, data["role"], data["permission"], data["granted"]
            )
        return Response(RolePermissionSerializer(row).data)


class MyPermissionsView(APIView):
    """GET /api/settings/permissions/me -> complete mapping for the caller's role"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        app_user = get_user(request)
        return Response(
            {"role": app_user.role, "permissions": get_user_permissions(app_user.role)}
        )


class UserRoleView(generics.ListAPIView):
    """
    GET   /api/settings/users?role=student  (HOD and principal)
    PATCH /api/settings/users  {"user_id": "<uuid>", "new_role": "teacher"}  (principal)
    """

    serializer_class = UserSummarySerializer
    filter_backends = [DjangoFilterBackend]
    filterset_class = UserRoleFilter
    pagination_class = None

    def get_permissions(self):
        if self.request.method == "PATCH":
            return [IsAuthenticated()]
        return [IsAuthenticated(), IsAdministrator()]

    def get_queryset(self):
        return User.objects.order_by("-date_joined")

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())[:MAX_USERS_LISTED]
        return Response(self.get_serializer(queryset, many=True).data)

    def patch(self, request):
        if not can_perform(request.user.role, CHANGE_USER_ROLE):
            raise ForbiddenError("Only principals can change roles")

        data = validated(RoleChangeSerializer(data=request.data))

        if data["user_id"] == request.user.pk:
            raise ValidationError("Cannot change your own role")

        try:
            target = User.objects.get(pk=data["user_id"])
        except User.DoesNotExist:
            raise NotFoundError("User not found")

        previous = target.role
        target.role = data["new_role"]
        target.save(update_fields=["role"])

        logger.info(
            "Role of user %s changed from %s to %s by %s",
            target.pk,
            previous,
            target.role,
            request.user.pk,
        )
        log_action(
            user=request.user,
            action=f"Changed role of {target.username} to {target.role}",
            category=ActionCategory.UPDATE,
            obj=target,
            metadata={"previous": previous, "new_role": target.role},
        )
        return Response(UserSummarySerializer(target).data)


class ProfileView(APIView):
    """PATCH /api/settings/profile  {"full_name": "..."} -> the caller's own profile"""

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response(ProfileSerializer(request.user).data)

    def patch(self, request):
        serializer = ProfileSerializer(request.user, data=request.data, partial=False)
        validated(serializer)
        serializer.save()
        return Response(serializer.data)


class SystemSettingView(APIView):
    """GET/PUT /api/settings/system  (HOD and principal)"""

    permission_classes = [IsAuthenticated, IsAdministrator]

    def get(self, request):
        settings = SystemSetting.objects.all()
        return Response(SystemSettingSerializer(settings, many=True).data)

    def put(self, request):
        data = validated(SystemSettingUpdateSerializer(data=request.data))
        try:
            setting = SystemSetting.objects.get(key=data["key"])
        except SystemSetting.DoesNotExist:
            raise NotFoundError("Setting not found")

        setting.value = data["value"]
        setting.updated_by = request.user
        setting.save(update_fields=["value", "updated_by", "updated_at"])

        log_action(
            user=request.user,
            action=f"Updated system setting {setting.key}",
            category=ActionCategory.UPDATE,
            obj=setting,
            metadata={"key": setting.key},
        )
        return Response(SystemSettingSerializer(setting).data, status=status.HTTP_200_OK)

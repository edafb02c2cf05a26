import re
from rest_framework import serializers
from acadtrack.users.models.base_user import User
from acadtrack.users.models.role import Permission, Role, RolePermission
from acadtrack.users.models.system_setting import SystemSetting


def sanitize_string(value):
    """Trim, drop angle brackets and cap the length of free text input."""
    if not value:
        return ""
    return re.sub(r"[<>]", "", str(value).strip())[:1000]


class RolePermissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = RolePermission
        fields = ["id", "role", "permission", "granted"]
        read_only_fields = fields


class PermissionToggleSerializer(serializers.Serializer):
    """Either ``{id, granted}`` or ``{role, permission, granted}``."""

    id = serializers.UUIDField(
        required=False, error_messages={"invalid": "Invalid permission id"}
    )
    role = serializers.ChoiceField(
        choices=Role.choices,
        required=False,
        error_messages={"invalid_choice": "Invalid role"},
    )
    permission = serializers.ChoiceField(
        choices=Permission.choices,
        required=False,
        error_messages={"invalid_choice": "Invalid permission"},
    )
    granted = serializers.JSONField(
        error_messages={
            "required": "Missing id or granted",
            "null": "Missing id or granted",
        }
    )

    def validate_granted(self, value):
        # Strict: "true" or 1 are not booleans
        if not isinstance(value, bool):
            raise serializers.ValidationError("Missing id or granted")
        return value

    def validate(self, attrs):
        if "id" in attrs:
            return attrs
        if "role" in attrs and "permission" in attrs:
            return attrs
        raise serializers.ValidationError("Missing id or granted")


class UserSummarySerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(source="get_full_name", read_only=True)
    created_at = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ["id", "full_name", "email", "role", "created_at"]
        read_only_fields = fields


class RoleChangeSerializer(serializers.Serializer):
    user_id = serializers.UUIDField(
        error_messages={"invalid": "Invalid user ID", "required": "Invalid user ID"}
    )
    new_role = serializers.ChoiceField(
        choices=Role.choices,
        error_messages={"invalid_choice": "Invalid role", "required": "Invalid role"},
    )


class ProfileSerializer(serializers.ModelSerializer):
    full_name = serializers.CharField(
        max_length=1000,
        allow_blank=True,
        error_messages={"required": "Name must be at least 2 characters"},
    )

    class Meta:
        model = User
        fields = ["id", "full_name", "email", "role", "avatar_url"]
        read_only_fields = ["id", "email", "role", "avatar_url"]

    def validate_full_name(self, value):
        value = sanitize_string(value)
        if len(value) < 2:
            raise serializers.ValidationError("Name must be at least 2 characters")
        if len(value) > 100:
            raise serializers.ValidationError("Name must be less than 100 characters")
        return value


class SystemSettingSerializer(serializers.ModelSerializer):
    class Meta:
        model = SystemSetting
        fields = ["id", "key", "value", "updated_at"]
        read_only_fields = fields


class SystemSettingUpdateSerializer(serializers.Serializer):
    key = serializers.CharField(
        max_length=100, error_messages={"required": "Missing key or value"}
    )
    value = serializers.JSONField(error_messages={"required": "Missing key or value"})

    def validate_value(self, value):
        if value in (None, "", {}, []):
            raise serializers.ValidationError("Missing key or value")
        return value

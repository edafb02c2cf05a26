import factory
from django.contrib.auth import get_user_model
from faker import Faker
from acadtrack.users.models.role import Role
from acadtrack.users.models.system_setting import SystemSetting


fake = Faker()
User = get_user_model()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user{n}")
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    password = factory.PostGenerationMethodCall("set_password", "password")
    full_name = factory.LazyAttribute(lambda _: fake.name())
    role = Role.STUDENT
    is_active = True


class StudentUserFactory(UserFactory):
    role = Role.STUDENT


class TeacherUserFactory(UserFactory):
    role = Role.TEACHER


class HodUserFactory(UserFactory):
    role = Role.HOD


class PrincipalUserFactory(UserFactory):
    role = Role.PRINCIPAL


class ClassCoordinatorUserFactory(UserFactory):
    role = Role.CLASS_COORDINATOR


class LabAssistantUserFactory(UserFactory):
    role = Role.LAB_ASSISTANT


class ParentUserFactory(UserFactory):
    role = Role.PARENT


class SystemSettingFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = SystemSetting
        django_get_or_create = ("key",)

    key = factory.Sequence(lambda n: f"setting_{n}")
    value = factory.LazyAttribute(lambda _: {"label": fake.word()})

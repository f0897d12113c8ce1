# /tests/test_user_service.py

from eduguide.core.config import Settings
from eduguide.models.user_model import Role
from eduguide.services import user_service


def test_seed_admin_creates_the_configured_admin_once(db_service):
    settings = Settings(admin_email=" Root@School.org ", admin_password="secret123")

    created = user_service.seed_admin(db_service, settings)

    assert created.role == Role.ADMIN.value
    assert created.email == "root@school.org"
    assert user_service.authenticate_user(db_service, "root@school.org", "secret123") is not None
    assert user_service.seed_admin(db_service, settings) is None


def test_seed_admin_does_nothing_without_credentials(db_service):
    assert user_service.seed_admin(db_service, Settings(admin_email="root@school.org")) is None
    assert db_service.get_user_by_email("root@school.org") is None

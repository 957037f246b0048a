from unittest.mock import patch

import pytest

from models.asset import Asset, PcPart
from models.status import Status
from models.user import User, UserRole
from seeder.demo import seed_demo
from seeder.status import seed_statuses
from seeder.user import create_admin_user, get_user_input
from services.user_service import UserService
from utils.auth import verify_password


class TestSeedStatuses:
    def test_seeds_missing_statuses_once(self, db_session):
        names = ["Open", "In Progress", "Closed", "For Approval"]

        created = seed_statuses(db_session, names)
        again = seed_statuses(db_session, names)

        assert [s.name for s in created] == names
        assert again == []
        assert db_session.query(Status).count() == 4

    def test_only_adds_what_is_missing(self, db_session):
        seed_statuses(db_session, ["Open"])

        created = seed_statuses(db_session, ["Open", "Closed"])

        assert [s.name for s in created] == ["Closed"]


class TestCreateAdminUser:
    def test_create_user(self, db_session):
        user = create_admin_user(
            db_session,
            {
                "name": "root",
                "department": "ITS",
                "password": "testpassword123",
                "role": UserRole.ADMIN,
            },
        )

        assert user.id is not None
        assert user.role == UserRole.ADMIN
        assert verify_password("testpassword123", user.hashed_password)

    def test_duplicate_name(self, db_session, make_user):
        make_user("admin", name="root")

        with pytest.raises(ValueError, match="already exists"):
            create_admin_user(
                db_session,
                {
                    "name": "root",
                    "department": "ITS",
                    "password": "testpassword123",
                    "role": UserRole.ADMIN,
                },
            )


class TestGetUserInput:
    @patch("seeder.user.getpass.getpass")
    @patch("builtins.input")
    def test_prompts_until_valid(self, mock_input, mock_getpass):
        mock_input.side_effect = ["", "tech", "ITS", "9", "2"]
        mock_getpass.side_effect = ["short", "goodpass123", "goodpass123"]

        result = get_user_input()

        assert result == {
            "name": "tech",
            "department": "ITS",
            "password": "goodpass123",
            "role": UserRole.MAINTENANCE,
        }


class TestDemoSeeder:
    def test_demo_is_idempotent(self, db_session):
        first = seed_demo(db_session)
        second = seed_demo(db_session)

        assert first["assets"] == 3
        assert first["pc_parts"] == 2
        assert all(count == 0 for count in second.values())
        assert db_session.query(Asset).count() == 3
        assert db_session.query(PcPart).count() == 2
        assert db_session.query(Status).count() == 4


def test_default_admin_only_on_empty_table(db_session):
    admin = UserService.ensure_default_admin(
        db_session, "admin", "adminpassword", "ITS"
    )

    assert admin.role == UserRole.ADMIN
    assert UserService.ensure_default_admin(
        db_session, "admin2", "adminpassword", "ITS"
    ) is None
    assert db_session.query(User).count() == 1

from datetime import timedelta

import pytest
from fastapi import status

from models.user import User, UserRole
from utils.auth import create_access_token, get_password_hash


@pytest.fixture
def login_user(db_session):
    user = User(
        name="maria",
        hashed_password=get_password_hash("testpassword123"),
        department="Engineering",
        role=UserRole.FACULTY_STAFF,
    )
    db_session.add(user)
    db_session.commit()
    db_session.refresh(user)
    return user


class TestUserLogin:
    def test_login_success(self, client, login_user):
        response = client.post(
            "/api/auth/login",
            json={"name": "maria", "password": "testpassword123"},
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Login successful!"
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"] == {
            "id": login_user.id,
            "name": "maria",
            "department": "Engineering",
            "role": "faculty/staff",
        }

    def test_token_from_login_grants_access(self, client, login_user):
        token = client.post(
            "/api/auth/login",
            json={"name": "maria", "password": "testpassword123"},
        ).json()["access_token"]

        response = client.get(
            "/api/auth/profile",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "maria"

    @pytest.mark.parametrize(
        "name,password",
        [("maria", "wrongpassword"), ("nobody", "testpassword123")],
    )
    def test_login_invalid_credentials(
        self, client, login_user, name, password
    ):
        response = client.post(
            "/api/auth/login", json={"name": name, "password": password}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid credentials"

    def test_login_missing_field(self, client):
        response = client.post("/api/auth/login", json={"name": "maria"})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Missing password value."


class TestProfile:
    def test_profile_without_token(self, client):
        response = client.get("/api/auth/profile")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_profile_with_garbage_token(self, client):
        response = client.get(
            "/api/auth/profile",
            headers={"Authorization": "Bearer not-a-jwt"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == (
            "Invalid authentication credentials"
        )

    def test_profile_with_expired_token(self, client, login_user):
        token = create_access_token(
            data={"sub": login_user.name},
            expires_delta=timedelta(minutes=-5),
        )

        response = client.get(
            "/api/auth/profile",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_profile_for_deleted_user(self, client):
        token = create_access_token(data={"sub": "ghost"})

        response = client.get(
            "/api/auth/profile",
            headers={"Authorization": f"Bearer {token}"},
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


def test_health_check(client):
    response = client.get("/api/health-check")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"Status": "OK"}

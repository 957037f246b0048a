"""Tests for departments, categories, sub-categories, assets, PC parts
and statuses."""

import pytest
from fastapi import status

from models.category import SubCategory
from models.department import Department
from models.ticket import Ticket


@pytest.fixture
def admin_headers(auth_headers_factory):
    headers, _ = auth_headers_factory("admin", name="admin")
    return headers


@pytest.fixture
def staff_headers(auth_headers_factory):
    headers, _ = auth_headers_factory("faculty")
    return headers


def _asset_payload(catalog, **overrides):
    payload = {
        "item_code": "ITS-PC-002",
        "date_acquired": "2024-02-01",
        "serial_no": "SN-0002",
        "unit_price": 30000,
        "sub_category_id": catalog["sub_category"].id,
        "department_id": catalog["department"].id,
    }
    payload.update(overrides)
    return payload


class TestDepartments:
    def test_create_and_list(self, client, admin_headers, staff_headers):
        response = client.post(
            "/api/departments",
            json={"name": "Physics", "location": "Hall C", "head": "Dr. Lim"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["status"] == "Active"

        listed = client.get("/api/departments", headers=staff_headers)
        assert [d["name"] for d in listed.json()] == ["Physics"]

    def test_duplicate_name(self, client, admin_headers, catalog):
        response = client.post(
            "/api/departments",
            json={"name": "ITS", "location": "x", "head": "y"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["detail"] == (
            "Department with this name already exists"
        )

    def test_update(self, client, admin_headers, catalog):
        department_id = catalog["department"].id

        response = client.put(
            f"/api/departments/{department_id}",
            json={"status": "Inactive"},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["status"] == "Inactive"
        assert response.json()["name"] == "ITS"

    def test_write_requires_admin(self, client, staff_headers):
        response = client.post(
            "/api/departments",
            json={"name": "Physics", "location": "x", "head": "y"},
            headers=staff_headers,
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_delete_cascades_to_tickets(
        self, client, admin_headers, catalog, statuses, db_session
    ):
        department_id = catalog["department"].id
        db_session.add(
            Ticket(
                department_id=department_id,
                category_id=catalog["category"].id,
                status_id=statuses["Open"].id,
            )
        )
        db_session.commit()

        response = client.delete(
            f"/api/departments/{department_id}", headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.expire_all()
        assert db_session.get(Department, department_id) is None
        assert db_session.query(Ticket).count() == 0

    def test_delete_missing(self, client, admin_headers):
        response = client.delete("/api/departments/9999", headers=admin_headers)

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Department not found."


class TestCategories:
    def test_create_category_and_sub_category(self, client, admin_headers):
        category = client.post(
            "/api/categories", json={"name": "Network"}, headers=admin_headers
        ).json()

        response = client.post(
            "/api/sub-categories",
            json={"name": "Switch", "category_id": category["id"]},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["category_id"] == category["id"]

    def test_duplicate_sub_category_in_same_category(
        self, client, admin_headers, catalog
    ):
        response = client.post(
            "/api/sub-categories",
            json={"name": "PC Unit", "category_id": catalog["category"].id},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_sub_category_for_unknown_category(self, client, admin_headers):
        response = client.post(
            "/api/sub-categories",
            json={"name": "Switch", "category_id": 9999},
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid category_id value."

    def test_filter_sub_categories_by_category(
        self, client, staff_headers, catalog
    ):
        response = client.get(
            "/api/sub-categories",
            params={"category_id": catalog["category"].id},
            headers=staff_headers,
        )

        assert [s["name"] for s in response.json()] == ["PC Unit"]

    def test_delete_category_removes_sub_categories(
        self, client, admin_headers, db_session
    ):
        category = client.post(
            "/api/categories", json={"name": "Network"}, headers=admin_headers
        ).json()
        client.post(
            "/api/sub-categories",
            json={"name": "Switch", "category_id": category["id"]},
            headers=admin_headers,
        )

        response = client.delete(
            f"/api/categories/{category['id']}", headers=admin_headers
        )

        assert response.status_code == status.HTTP_200_OK
        db_session.expire_all()
        assert (
            db_session.query(SubCategory)
            .filter(SubCategory.category_id == category["id"])
            .count()
        ) == 0


class TestAssets:
    def test_create_asset(self, client, admin_headers, catalog):
        response = client.post(
            "/api/assets", json=_asset_payload(catalog), headers=admin_headers
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["item_code"] == "ITS-PC-002"

    @pytest.mark.parametrize(
        "overrides",
        [{"item_code": "ITS-PC-001"}, {"serial_no": "SN-0001"}],
    )
    def test_duplicate_asset(self, client, admin_headers, catalog, overrides):
        response = client.post(
            "/api/assets",
            json=_asset_payload(catalog, **overrides),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_asset_with_unknown_department(
        self, client, admin_headers, catalog
    ):
        response = client.post(
            "/api/assets",
            json=_asset_payload(catalog, department_id=9999),
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid department_id value."

    def test_pc_parts_for_asset(self, client, staff_headers, catalog):
        response = client.get(
            "/api/pc-parts/asset/ITS-PC-001", headers=staff_headers
        )

        assert response.status_code == status.HTTP_200_OK
        assert [p["part_name"] for p in response.json()] == ["Monitor"]
        assert client.get(
            "/api/pc-parts/asset/NOPE", headers=staff_headers
        ).json() == []

    def test_pc_part_for_unknown_asset(self, client, admin_headers, catalog):
        response = client.post(
            "/api/pc-parts",
            json={
                "department_id": catalog["department"].id,
                "asset_item_code": "NOPE",
                "part_name": "RAM",
                "date_acquired": "2024-02-01",
                "serial_no": "SN-RAM",
                "unit_price": 1500,
            },
            headers=admin_headers,
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid asset_item_code value."


def test_list_statuses(client, staff_headers, statuses):
    response = client.get("/api/statuses", headers=staff_headers)

    assert response.status_code == status.HTTP_200_OK
    assert [s["name"] for s in response.json()] == [
        "Open",
        "In Progress",
        "Closed",
        "For Approval",
    ]

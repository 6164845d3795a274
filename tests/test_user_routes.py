"""
Storefront Backend: User Route Tests
====================================

What:  /v1/users over HTTP, including self-access for plain users.
"""

import uuid

import pytest

from storefront.models import User


class TestAdminAccess:

    @pytest.mark.asyncio
    async def test_admin_lists_users_without_passwords(self, test_client, tokens):
        response = await test_client.get("/v1/users", headers=tokens["admin"])

        assert response.status_code == 200
        body = response.json()
        assert len(body) == 3
        assert all(set(user) == {"id", "name", "email", "role"} for user in body)

    @pytest.mark.asyncio
    async def test_filter_by_role(self, test_client, tokens):
        response = await test_client.get("/v1/users", params={"role": "admin"}, headers=tokens["admin"])
        assert [user["email"] for user in response.json()] == ["carla@shopmail.com"]

    @pytest.mark.asyncio
    async def test_sort_by_role_desc_puts_admin_last(self, test_client, tokens):
        response = await test_client.get("/v1/users", params={"sortBy": "role:desc"}, headers=tokens["admin"])
        assert response.json()[-1]["role"] == "admin"

    @pytest.mark.asyncio
    async def test_sort_by_password_is_ignored(self, test_client, tokens):
        response = await test_client.get("/v1/users", params={"sortBy": "password:asc"}, headers=tokens["admin"])

        assert response.status_code == 200
        assert len(response.json()) == 3

    @pytest.mark.asyncio
    async def test_second_page(self, test_client, tokens):
        response = await test_client.get(
            "/v1/users", params={"limit": "2", "page": "2"}, headers=tokens["admin"]
        )
        assert len(response.json()) == 1

    @pytest.mark.asyncio
    async def test_admin_creates_admin(self, test_client, tokens):
        response = await test_client.post(
            "/v1/users",
            json={"name": "Dora Lima", "email": "dora@shopmail.com", "password": "password1", "role": "admin"},
            headers=tokens["admin"],
        )

        assert response.status_code == 201
        assert response.json()["role"] == "admin"

    @pytest.mark.asyncio
    async def test_create_with_taken_email_is_400(self, test_client, tokens):
        response = await test_client.post(
            "/v1/users",
            json={"name": "Alice Again", "email": "alice@shopmail.com", "password": "password1"},
            headers=tokens["admin"],
        )

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "email"

    @pytest.mark.asyncio
    async def test_admin_gets_any_user(self, test_client, tokens, users):
        response = await test_client.get(f"/v1/users/{users['user_two'].id}", headers=tokens["admin"])
        assert response.json()["email"] == "bruno@shopmail.com"

    @pytest.mark.asyncio
    async def test_unknown_user_is_404(self, test_client, tokens):
        response = await test_client.get(f"/v1/users/{uuid.uuid4()}", headers=tokens["admin"])
        assert response.status_code == 404


class TestSelfAccess:

    @pytest.mark.asyncio
    async def test_user_cannot_list_users(self, test_client, tokens):
        response = await test_client.get("/v1/users", headers=tokens["user_one"])
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_user_cannot_create_users(self, test_client, tokens):
        response = await test_client.post(
            "/v1/users",
            json={"name": "Dora Lima", "email": "dora@shopmail.com", "password": "password1"},
            headers=tokens["user_one"],
        )
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_user_reads_self(self, test_client, tokens, users):
        response = await test_client.get(f"/v1/users/{users['user_one'].id}", headers=tokens["user_one"])

        assert response.status_code == 200
        assert response.json()["email"] == "alice@shopmail.com"

    @pytest.mark.asyncio
    async def test_user_cannot_read_other_user(self, test_client, tokens, users):
        response = await test_client.get(f"/v1/users/{users['user_two'].id}", headers=tokens["user_one"])
        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_user_updates_self(self, test_client, tokens, users):
        response = await test_client.patch(
            f"/v1/users/{users['user_one'].id}",
            json={"name": "Alice Durand", "email": "alice@shopmail.com"},
            headers=tokens["user_one"],
        )

        assert response.status_code == 200
        assert response.json()["name"] == "Alice Durand"

    @pytest.mark.asyncio
    async def test_user_cannot_promote_self(self, test_client, tokens, users):
        response = await test_client.patch(
            f"/v1/users/{users['user_one'].id}", json={"role": "admin"}, headers=tokens["user_one"]
        )

        assert response.status_code == 200
        assert response.json()["role"] == "user"

    @pytest.mark.asyncio
    async def test_email_of_other_user_is_400(self, test_client, tokens, users):
        response = await test_client.patch(
            f"/v1/users/{users['user_one'].id}",
            json={"email": "bruno@shopmail.com"},
            headers=tokens["user_one"],
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_user_deletes_self(self, test_client, tokens, users, session_factory):
        response = await test_client.delete(f"/v1/users/{users['user_one'].id}", headers=tokens["user_one"])

        assert response.status_code == 204
        async with session_factory() as fresh:
            assert await fresh.get(User, users["user_one"].id) is None

    @pytest.mark.asyncio
    async def test_token_of_deleted_user_is_401(self, test_client, tokens, users):
        await test_client.delete(f"/v1/users/{users['user_two'].id}", headers=tokens["admin"])

        response = await test_client.get(f"/v1/users/{users['user_two'].id}", headers=tokens["user_two"])

        assert response.status_code == 401

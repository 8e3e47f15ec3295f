# -*- coding: utf-8 -*-
"""
Integration тесты для API управления пользователями
"""

from datetime import date
from unittest.mock import patch

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from taskhub.domain.enums import TaskStatus, UserStatus
from taskhub.domain.models import User
from taskhub.service.users import UserManagementService
from tests.fixtures import (auth_headers, create_test_task, create_test_user,
                            make_image_bytes)

PROFILE_PAYLOAD = {
    "first_name": "Jane",
    "last_name": "Roe",
    "date_of_birth": "1992-03-04",
    "gender": "female",
    "twitter_profile": "https://twitter.com/jane",
}


class TestAuthRequired:
    """Все операции требуют аутентификации"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, url",
        [
            ("GET", "/api/v1/users"),
            ("GET", "/api/v1/users/dashboard"),
            ("PUT", "/api/v1/users/profile"),
            ("DELETE", "/api/v1/users/profile/avatar"),
            ("DELETE", "/api/v1/users/1"),
        ],
    )
    async def test_without_token(self, async_client: AsyncClient, method, url):
        response = await async_client.request(method, url)

        assert response.status_code == 401
        assert response.json() == {
            "message": "Token not provided.",
            "error_code": "AUTHENTICATION_ERROR",
        }

    @pytest.mark.asyncio
    async def test_invalid_token(self, async_client: AsyncClient):
        response = await async_client.get(
            "/api/v1/users", headers={"Authorization": "Bearer not-a-jwt"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Token is invalid or expired."


class TestListUsersAPI:
    """Integration тесты списка пользователей"""

    @pytest.mark.asyncio
    async def test_filters_sorting_and_pagination(
        self, async_client: AsyncClient, test_session
    ):
        # Arrange
        me = await create_test_user(test_session, "alice@example.com", "Alice", "Smith")
        await create_test_user(test_session, "bob@example.com", "Bob", "Smithson")
        await create_test_user(
            test_session,
            "carl@example.com",
            "Carl",
            "Smithers",
            status=UserStatus.INACTIVE,
        )
        await create_test_user(test_session, "dan@work.org", "Dan", "Jones")

        # Act
        response = await async_client.get(
            "/api/v1/users",
            params={
                "last_name": "SMITH",
                "status": "active",
                "sortBy": "first_name",
                "order": "desc",
                "pageLength": 1,
                "page": 1,
            },
            headers=auth_headers(me),
        )

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 2
        assert data["page"] == 1
        assert data["page_size"] == 1
        assert len(data["items"]) == 1
        item = data["items"][0]
        assert item["email"] == "bob@example.com"
        assert item["profile"]["first_name"] == "Bob"
        assert "password" not in item

    @pytest.mark.asyncio
    async def test_unknown_sort_field(self, async_client: AsyncClient, test_session):
        me = await create_test_user(test_session)

        response = await async_client.get(
            "/api/v1/users", params={"sortBy": "password"}, headers=auth_headers(me)
        )

        assert response.status_code == 422
        assert response.json()["error_code"] == "VALIDATION_ERROR"


class TestProfileAPI:
    """Integration тесты обновления профиля"""

    @pytest.mark.asyncio
    async def test_update_profile(self, async_client: AsyncClient, test_session):
        me = await create_test_user(test_session)

        response = await async_client.put(
            "/api/v1/users/profile", json=PROFILE_PAYLOAD, headers=auth_headers(me)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Your profile has been updated!"
        profile = data["user"]["profile"]
        assert profile["first_name"] == "Jane"
        assert profile["gender"] == "female"
        assert profile["date_of_birth"] == "1992-03-04"
        assert profile["facebook_profile"] is None

    @pytest.mark.asyncio
    async def test_invalid_calendar_date(self, async_client: AsyncClient, test_session):
        me = await create_test_user(test_session)

        response = await async_client.put(
            "/api/v1/users/profile",
            json={**PROFILE_PAYLOAD, "date_of_birth": "1990-02-30"},
            headers=auth_headers(me),
        )

        assert response.status_code == 422
        assert response.json() == {
            "message": "date_of_birth: The date of birth is not a valid date.",
            "error_code": "VALIDATION_ERROR",
        }
        await test_session.refresh(me.profile)
        assert me.profile.first_name == "John"

    @pytest.mark.asyncio
    async def test_unknown_gender(self, async_client: AsyncClient, test_session):
        me = await create_test_user(test_session)

        response = await async_client.put(
            "/api/v1/users/profile",
            json={**PROFILE_PAYLOAD, "gender": "other"},
            headers=auth_headers(me),
        )

        assert response.status_code == 422
        assert response.json()["message"].startswith("gender: ")


class TestAvatarAPI:
    """Integration тесты загрузки и удаления аватара"""

    @pytest.mark.asyncio
    async def test_upload_avatar(
        self, async_client: AsyncClient, test_session, avatar_storage
    ):
        me = await create_test_user(test_session)

        response = await async_client.post(
            "/api/v1/users/profile/avatar",
            files={"avatar": ("me.png", make_image_bytes(400, 300), "image/png")},
            headers=auth_headers(me),
        )

        assert response.status_code == 200
        data = response.json()
        assert data["message"] == "Avatar updated!"
        filename = data["profile"]["avatar"]
        assert filename.endswith(".png")
        assert list(avatar_storage.files) == [filename]

    @pytest.mark.asyncio
    async def test_upload_not_an_image(
        self, async_client: AsyncClient, test_session, avatar_storage
    ):
        avatar_storage.files["old.png"] = b"old"
        me = await create_test_user(test_session, avatar="old.png")

        response = await async_client.post(
            "/api/v1/users/profile/avatar",
            files={"avatar": ("notes.png", b"just some text", "image/png")},
            headers=auth_headers(me),
        )

        assert response.status_code == 422
        assert response.json()["message"] == "The avatar must be an image."
        assert avatar_storage.writes == 0
        assert me.profile.avatar == "old.png"

    @pytest.mark.asyncio
    async def test_upload_without_file(self, async_client: AsyncClient, test_session):
        me = await create_test_user(test_session)

        response = await async_client.post(
            "/api/v1/users/profile/avatar", headers=auth_headers(me)
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_remove_avatar(
        self, async_client: AsyncClient, test_session, avatar_storage
    ):
        avatar_storage.files["me.png"] = b"img"
        me = await create_test_user(test_session, avatar="me.png")

        response = await async_client.delete(
            "/api/v1/users/profile/avatar", headers=auth_headers(me)
        )

        assert response.status_code == 200
        assert response.json() == {"message": "Avatar removed!"}
        assert avatar_storage.files == {}
        assert me.profile.avatar is None

    @pytest.mark.asyncio
    async def test_remove_missing_avatar(
        self, async_client: AsyncClient, test_session, avatar_storage
    ):
        me = await create_test_user(test_session)

        response = await async_client.delete(
            "/api/v1/users/profile/avatar", headers=auth_headers(me)
        )

        assert response.status_code == 422
        assert response.json()["message"] == "No avatar uploaded!"
        assert avatar_storage.writes == 0


class TestDeleteUserAPI:
    """Integration тесты удаления пользователя"""

    @pytest.mark.asyncio
    async def test_delete_user(
        self, async_client: AsyncClient, test_session, avatar_storage
    ):
        # Arrange
        me = await create_test_user(test_session)
        avatar_storage.files["victim.png"] = b"img"
        victim = await create_test_user(
            test_session, "victim@example.com", avatar="victim.png"
        )

        # Act
        response = await async_client.delete(
            f"/api/v1/users/{victim.id}", headers=auth_headers(me)
        )

        # Assert
        assert response.status_code == 200
        assert response.json() == {"message": "User deleted!"}
        assert avatar_storage.deleted == ["victim.png"]
        assert await test_session.scalar(select(func.count(User.id))) == 1

    @pytest.mark.asyncio
    async def test_delete_in_demo_mode(
        self, async_client: AsyncClient, test_session, demo_mode
    ):
        me = await create_test_user(test_session)
        victim = await create_test_user(test_session, "victim@example.com")
        demo_mode["enabled"] = True

        response = await async_client.delete(
            f"/api/v1/users/{victim.id}", headers=auth_headers(me)
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "POLICY_ERROR"
        assert await test_session.scalar(select(func.count(User.id))) == 2

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, async_client: AsyncClient, test_session):
        me = await create_test_user(test_session)

        response = await async_client.delete(
            "/api/v1/users/999", headers=auth_headers(me)
        )

        assert response.status_code == 404
        assert response.json() == {
            "message": "Could not find user!",
            "error_code": "NOT_FOUND",
        }


class TestDashboardAPI:
    """Integration тесты панели управления"""

    @pytest.mark.asyncio
    async def test_dashboard(self, async_client: AsyncClient, test_session):
        me = await create_test_user(test_session)
        await create_test_task(test_session, "Early", date(2026, 1, 1), user_id=me.id)
        await create_test_task(test_session, "Late", date(2026, 6, 1), user_id=me.id)
        await create_test_task(
            test_session, "Done", date(2026, 12, 1), status=TaskStatus.COMPLETE
        )

        response = await async_client.get(
            "/api/v1/users/dashboard", headers=auth_headers(me)
        )

        assert response.status_code == 200
        data = response.json()
        assert data["users_count"] == 1
        assert data["tasks_count"] == 3
        assert [task["title"] for task in data["recent_incomplete_tasks"]] == [
            "Late",
            "Early",
        ]

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_hidden(
        self, async_client: AsyncClient, test_session
    ):
        """Внутренние детали ошибки не попадают в ответ"""
        me = await create_test_user(test_session)

        with patch.object(
            UserManagementService,
            "dashboard",
            side_effect=RuntimeError("connection to 10.0.0.5 refused"),
        ):
            response = await async_client.get(
                "/api/v1/users/dashboard", headers=auth_headers(me)
            )

        assert response.status_code == 422
        assert response.json() == {
            "message": "Sorry, something went wrong!",
            "error_code": "UNEXPECTED_ERROR",
        }
        assert "10.0.0.5" not in response.text


GENERIC_FAILURE = {
    "message": "Sorry, something went wrong!",
    "error_code": "UNEXPECTED_ERROR",
}


class TestUnexpectedFailuresAPI:
    """Любой внутренний сбой превращается в обобщенное сообщение"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method_name, http_method, url, kwargs",
        [
            ("list_users", "GET", "/api/v1/users", {}),
            ("update_profile", "PUT", "/api/v1/users/profile", {"json": PROFILE_PAYLOAD}),
            ("remove_avatar", "DELETE", "/api/v1/users/profile/avatar", {}),
            ("delete_user", "DELETE", "/api/v1/users/2", {}),
        ],
    )
    async def test_service_failure_is_hidden(
        self,
        async_client: AsyncClient,
        test_session,
        method_name,
        http_method,
        url,
        kwargs,
    ):
        # Arrange
        me = await create_test_user(test_session)
        await create_test_user(test_session, "second@example.com")

        # Act
        with patch.object(
            UserManagementService,
            method_name,
            side_effect=RuntimeError("password=hunter2 at db-internal:5432"),
        ):
            response = await async_client.request(
                http_method, url, headers=auth_headers(me), **kwargs
            )

        # Assert
        assert response.status_code == 422
        assert response.json() == GENERIC_FAILURE
        assert "hunter2" not in response.text
        assert "db-internal" not in response.text

    @pytest.mark.asyncio
    async def test_avatar_storage_failure_is_hidden(
        self, async_client: AsyncClient, test_session, avatar_storage
    ):
        avatar_storage.fail_on_save = True
        me = await create_test_user(test_session)

        response = await async_client.post(
            "/api/v1/users/profile/avatar",
            files={"avatar": ("me.png", make_image_bytes(), "image/png")},
            headers=auth_headers(me),
        )

        assert response.status_code == 422
        assert response.json() == GENERIC_FAILURE
        assert "storage is unavailable" not in response.text
        assert avatar_storage.files == {}

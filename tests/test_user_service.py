"""Тесты бизнес-правил UserService"""
import bcrypt
import pytest
from bson import ObjectId
from unittest.mock import AsyncMock, patch

from store_api.errors import ConflictError, InternalError, NotFoundError
from store_api.schemas.users import UserCreate, UserUpdate


def _create(email="a@x.com", password="secret1", name="A"):
    return UserCreate(email=email, password=password, name=name)


class TestCreateUser:
    @pytest.mark.asyncio
    async def test_create_hashes_password(self, user_service, fake_db):
        user = await user_service.create_user(_create())

        assert user.email == "a@x.com"
        assert user.password != "secret1"
        assert bcrypt.checkpw("secret1".encode(), user.password.encode())
        stored = fake_db["users"].documents[ObjectId(user.id)]
        assert stored["password"] == user.password

    @pytest.mark.asyncio
    async def test_duplicate_email_conflict(self, user_service):
        await user_service.create_user(_create())
        with pytest.raises(ConflictError):
            await user_service.create_user(_create(name="Other"))

    @pytest.mark.asyncio
    async def test_duplicate_key_from_store_is_conflict(self, user_service):
        """Гонка: проверка прошла, но уникальный индекс отклонил вставку."""
        await user_service.create_user(_create())
        with patch.object(user_service.repository, "find_by_email", AsyncMock(return_value=None)):
            with pytest.raises(ConflictError):
                await user_service.create_user(_create())


class TestGetUser:
    @pytest.mark.asyncio
    async def test_get_all(self, user_service):
        await user_service.create_user(_create("a@x.com"))
        await user_service.create_user(_create("b@x.com"))
        users = await user_service.get_all_users()
        assert sorted(u.email for u in users) == ["a@x.com", "b@x.com"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("user_id", [str(ObjectId()), "bad-id"])
    async def test_missing_or_malformed_id(self, user_service, user_id):
        with pytest.raises(NotFoundError):
            await user_service.get_user_by_id(user_id)


class TestUpdateUser:
    @pytest.mark.asyncio
    async def test_update_to_taken_email_conflict(self, user_service):
        await user_service.create_user(_create("a@x.com"))
        other = await user_service.create_user(_create("b@x.com"))

        with pytest.raises(ConflictError):
            await user_service.update_user(other.id, UserUpdate(email="a@x.com"))

    @pytest.mark.asyncio
    async def test_update_to_own_email_skips_check(self, user_service):
        user = await user_service.create_user(_create("a@x.com"))
        find_by_email = AsyncMock(wraps=user_service.repository.find_by_email)

        with patch.object(user_service.repository, "find_by_email", find_by_email):
            updated = await user_service.update_user(user.id, UserUpdate(email="a@x.com", name="New"))

        assert updated.name == "New"
        find_by_email.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_password_is_rehashed(self, user_service):
        user = await user_service.create_user(_create())
        updated = await user_service.update_user(user.id, UserUpdate(password="another1"))

        assert updated.password != user.password
        assert bcrypt.checkpw("another1".encode(), updated.password.encode())
        assert not bcrypt.checkpw("secret1".encode(), updated.password.encode())

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, user_service):
        user = await user_service.create_user(_create())
        updated = await user_service.update_user(user.id, UserUpdate(name="B"))

        assert updated.email == user.email
        assert updated.password == user.password

    @pytest.mark.asyncio
    async def test_update_missing(self, user_service):
        with pytest.raises(NotFoundError):
            await user_service.update_user(str(ObjectId()), UserUpdate(name="B"))

    @pytest.mark.asyncio
    async def test_failed_read_back_is_internal_error(self, user_service):
        user = await user_service.create_user(_create())
        with patch.object(user_service.repository, "update", AsyncMock(return_value=None)):
            with pytest.raises(InternalError, match="Failed to update user"):
                await user_service.update_user(user.id, UserUpdate(name="B"))


class TestDeleteUser:
    @pytest.mark.asyncio
    async def test_delete_twice(self, user_service):
        user = await user_service.create_user(_create())

        await user_service.delete_user(user.id)
        with pytest.raises(NotFoundError):
            await user_service.delete_user(user.id)

    @pytest.mark.asyncio
    async def test_store_reports_nothing_deleted(self, user_service, fake_db):
        user = await user_service.create_user(_create())
        fake_db["users"].fail_deletes = True

        with pytest.raises(InternalError, match="Failed to delete user"):
            await user_service.delete_user(user.id)

"""
Users service - business logic for user management
"""

import logging
from typing import Any, Optional

from database.connection import get_db_pool
from services.base_service import BaseService, ServiceResult, STORAGE_ERRORS

logger = logging.getLogger(__name__)

LIST_USERS_SQL = "SELECT * FROM users ORDER BY id"
GET_USER_SQL = "SELECT * FROM users WHERE id = $1"
INSERT_USER_SQL = "INSERT INTO users (name, email) VALUES ($1, $2) RETURNING *"
UPDATE_USER_SQL = "UPDATE users SET name = $1, email = $2 WHERE id = $3 RETURNING *"
DELETE_USER_SQL = "DELETE FROM users WHERE id = $1"

REQUIRED_FIELDS_MESSAGE = "name and correo are required"
USER_NOT_FOUND_MESSAGE = "User not found"


class UsersService(BaseService):
    """Service for user CRUD operations"""

    async def list_users(self) -> ServiceResult:
        """
        Get all users ordered by ascending id

        Returns:
            ServiceResult with every row, possibly empty
        """
        try:
            rows = await self.fetch(LIST_USERS_SQL)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to list users: {e}")
            return self.database_error(str(e))

        return ServiceResult(success=True, data=rows, count=len(rows))

    async def get_user(self, user_id: Any) -> ServiceResult:
        """
        Get a user by id

        Args:
            user_id: Path identifier, treated as opaque

        Returns:
            ServiceResult with the single row, or RESOURCE_NOT_FOUND
        """
        record_id = self.parse_record_id(user_id)
        if record_id is None:
            return self.not_found(USER_NOT_FOUND_MESSAGE)

        try:
            row = await self.fetchrow(GET_USER_SQL, record_id)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to get user {user_id}: {e}")
            return self.database_error(str(e))

        if row is None:
            return self.not_found(USER_NOT_FOUND_MESSAGE)
        return ServiceResult(success=True, data=[row], count=1)

    async def create_user(self, name: Optional[str], correo: Optional[str]) -> ServiceResult:
        """
        Create a new user

        Args:
            name: Name of the user
            correo: Email address of the user

        Returns:
            ServiceResult with the created row including its assigned id
        """
        if not name or not correo:
            return self.invalid(REQUIRED_FIELDS_MESSAGE)

        try:
            row = await self.fetchrow(INSERT_USER_SQL, name, correo)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to create user: {e}")
            return self.database_error(str(e))

        if row is None:
            return self.database_error("Insert operation failed - no data returned")

        logger.info(f"Created user {row.get('id')}")
        return ServiceResult(success=True, data=[row], count=1)

    async def update_user(self, user_id: Any, name: Optional[str], correo: Optional[str]) -> ServiceResult:
        """
        Replace both mutable fields of a user

        Returns:
            ServiceResult with the updated row, or RESOURCE_NOT_FOUND
        """
        if not name or not correo:
            return self.invalid(REQUIRED_FIELDS_MESSAGE)

        record_id = self.parse_record_id(user_id)
        if record_id is None:
            return self.not_found(USER_NOT_FOUND_MESSAGE)

        try:
            row = await self.fetchrow(UPDATE_USER_SQL, name, correo, record_id)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to update user {user_id}: {e}")
            return self.database_error(str(e))

        if row is None:
            return self.not_found(USER_NOT_FOUND_MESSAGE)

        logger.info(f"Updated user {record_id}")
        return ServiceResult(success=True, data=[row], count=1)

    async def delete_user(self, user_id: Any) -> ServiceResult:
        """
        Hard-delete a user

        Returns:
            ServiceResult with the deleted row count, or RESOURCE_NOT_FOUND
        """
        record_id = self.parse_record_id(user_id)
        if record_id is None:
            return self.not_found(USER_NOT_FOUND_MESSAGE)

        try:
            deleted_count = await self.execute(DELETE_USER_SQL, record_id)
        except STORAGE_ERRORS as e:
            logger.error(f"Failed to delete user {user_id}: {e}")
            return self.database_error(str(e))

        if deleted_count == 0:
            return self.not_found(USER_NOT_FOUND_MESSAGE)

        logger.info(f"Deleted user {record_id}")
        return ServiceResult(success=True, count=deleted_count)


def get_users_service() -> UsersService:
    """Get a users service bound to the process-wide pool"""
    return UsersService(get_db_pool())

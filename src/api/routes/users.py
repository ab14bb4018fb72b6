"""
User management API routes
All database access goes through the users service.
"""

import logging
from typing import List
from fastapi import APIRouter, Depends

from models.user import UserPayload, User, MessageResponse, ErrorResponse
from services.users_service import UsersService, get_users_service
from utils.error_handling import raise_for_result

router = APIRouter(responses={
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
})
logger = logging.getLogger(__name__)

@router.get("", response_model=List[User])
async def list_users(service: UsersService = Depends(get_users_service)):
    """Get all users"""
    result = await service.list_users()
    raise_for_result(result)
    return result.data

@router.get("/{user_id}", response_model=User)
async def get_user(user_id: str, service: UsersService = Depends(get_users_service)):
    """Get a specific user"""
    result = await service.get_user(user_id)
    raise_for_result(result)
    return result.data[0]

@router.post("", response_model=User, status_code=201)
async def create_user(
    request: UserPayload,
    service: UsersService = Depends(get_users_service)
):
    """Create a new user"""
    result = await service.create_user(request.name, request.correo)
    raise_for_result(result)
    return result.data[0]

@router.put("/{user_id}", response_model=User)
async def update_user(
    user_id: str,
    request: UserPayload,
    service: UsersService = Depends(get_users_service)
):
    """Update a user, replacing name and email"""
    result = await service.update_user(user_id, request.name, request.correo)
    raise_for_result(result)
    return result.data[0]

@router.delete("/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, service: UsersService = Depends(get_users_service)):
    """Delete a user"""
    result = await service.delete_user(user_id)
    raise_for_result(result)
    return {"message": "User deleted"}

"""User registration and profile endpoints"""
from fastapi import APIRouter, Depends, status

from app.core.auth import get_current_user
from app.core.dependencies import get_user_service
from app.schemas.user import UserCreate, UserInDB, UserRegistration
from app.services.user_service import UserService

users_router = APIRouter(prefix="/users")


@users_router.post(
    "/register",
    response_model=UserRegistration,
    status_code=status.HTTP_201_CREATED,
    summary="Register a customer or provider",
    description="Returns the API key for the new account. It is not shown again.",
)
async def register(
    data: UserCreate,
    service: UserService = Depends(get_user_service),
):
    return service.register(data)


@users_router.get("/me", response_model=UserInDB, summary="Current user")
async def me(user: UserInDB = Depends(get_current_user)):
    return user

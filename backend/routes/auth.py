# backend/routes/auth.py
import logging
from datetime import timedelta

from fastapi import APIRouter, HTTPException, status, Depends

from auth.models import RegisterRequest, LoginRequest, LoginResponse, UserInfo
from auth.utils import authenticate_user, create_access_token, get_password_hash
from auth.dependencies import get_current_user
from config import ACCESS_TOKEN_EXPIRE_MINUTES
from data.users import UserAlreadyExists, UserStore, get_user_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


def _token_response(user: dict) -> LoginResponse:
    access_token = create_access_token(
        data={
            "sub": user["uid"],
            "email": user["email"],
            "display_name": user["display_name"],
        },
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES),
    )
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        uid=user["uid"],
        email=user["email"],
        display_name=user["display_name"],
    )


@router.post("/register", response_model=LoginResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, users: UserStore = Depends(get_user_store)):
    """
    Create an account and return a JWT token for it.
    """
    try:
        user = users.create_user(request.email, get_password_hash(request.password), request.display_name)
    except UserAlreadyExists as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    logger.info("[AUTH] Registered %s", user["email"])
    return _token_response(user)


@router.post("/login", response_model=LoginResponse)
async def login(credentials: LoginRequest, users: UserStore = Depends(get_user_store)):
    """
    Authenticate a user and return a JWT token.
    """
    user = authenticate_user(users, credentials.email, credentials.password)

    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return _token_response(user)


@router.get("/me", response_model=UserInfo)
async def get_current_user_info(current_user: dict = Depends(get_current_user)):
    """
    Get information about the currently authenticated user.
    """
    return UserInfo(**current_user)

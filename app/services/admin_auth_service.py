import jwt
from datetime import datetime, timedelta
from fastapi import HTTPException, status
from passlib.hash import bcrypt
from app.core.config import settings
from app.schemas.admin import AdminLoginResponse


def create_admin_access_token() -> str:
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return jwt.encode({"sub": "admin", "exp": expire}, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

def authenticate_admin(username: str, password: str) -> AdminLoginResponse:
    password_hash = settings.ADMIN_PASSWORD_HASH
    if not password_hash or username != settings.ADMIN_USERNAME or not bcrypt.verify(password, password_hash):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid username or password.")

    return AdminLoginResponse(
        access_token=create_admin_access_token(),
        message="Successfully logged in."
    )

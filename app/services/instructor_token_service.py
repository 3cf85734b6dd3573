import secrets

import jwt
from datetime import datetime, timedelta
from app.core.config import settings
from app.db.database import Database


def create_instructor_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def create_instructor_refresh_token(db: Database, sessions_table: str, fino: int):
    to_encode = {"sub": str(fino), "typ": "refresh", "jti": secrets.token_hex(8)}
    expire = datetime.utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    to_encode.update({"exp": expire})
    refresh_token = jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    stored = db.insert(sessions_table, {
        "token": refresh_token,
        "fino": int(fino),
        "is_revoked": False,
        "expired_at": expire,
    })
    if not stored:
        return False
    return refresh_token


def rotate_instructor_refresh_token(db: Database, sessions_table: str, refresh_token: str):
    try:
        payload = jwt.decode(refresh_token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        # includes ExpiredSignatureError
        return False
    fino = payload.get("sub")
    if not fino or payload.get("typ") != "refresh":
        return False

    db_token = db.select(sessions_table, {"token": refresh_token})
    if not db_token or db_token["is_revoked"]:
        return False
    db.update(sessions_table, {"is_revoked": True}, {"id": db_token["id"]})

    new_access_token = create_instructor_access_token({"sub": fino})
    new_refresh_token = create_instructor_refresh_token(db, sessions_table, int(fino))
    if not new_refresh_token:
        return False
    return new_access_token, new_refresh_token


def decode_instructor_access_token(token: str):
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except jwt.InvalidTokenError:
        return None
    if payload.get("typ") == "refresh":
        return None
    return payload

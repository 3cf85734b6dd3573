from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.services.instructor_token_service import decode_instructor_access_token

security = HTTPBearer()

def get_current_instructor_fino(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> int:
    payload = decode_instructor_access_token(credentials.credentials)
    if payload is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Could not validate credentials")
    fino = payload.get("sub")
    if fino is None or not str(fino).isdigit():
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token payload")
    return int(fino)

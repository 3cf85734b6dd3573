from fastapi import APIRouter, Depends, Body, HTTPException, status
from app.dependencies.directory import get_account
from app.schemas.instructor_auth import (
    InstructorLoginRequest, InstructorAuthResponse,
    InstructorTokenRefreshRequest, InstructorTokenResponse,
    PasswordResetRequest, PasswordResetConfirm,
    MessageResponse
)
from app.services.instructor_account import InstructorAccount

router = APIRouter()

@router.post("/login", response_model=InstructorAuthResponse, summary="Instructor login")
def instructor_login(
    login_req: InstructorLoginRequest = Body(...),
    account: InstructorAccount = Depends(get_account)
):
    """
    Instructor login
    - Authenticates by email and password
    - Returns an access/refresh token pair on success
    """
    result = account.login(login_req.email, login_req.password)
    if not result:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password.")
    return InstructorAuthResponse(**result, message="Successfully logged in.")

@router.post("/refresh", response_model=InstructorTokenResponse, summary="Refresh instructor tokens")
def instructor_refresh_token(
    req: InstructorTokenRefreshRequest = Body(...),
    account: InstructorAccount = Depends(get_account)
):
    tokens = account.refresh(req.refresh_token)
    if not tokens:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token is invalid or already used")
    access_token, refresh_token = tokens
    return InstructorTokenResponse(access_token=access_token, refresh_token=refresh_token)

@router.post("/logout", response_model=MessageResponse, summary="Instructor logout")
def instructor_logout(
    req: InstructorTokenRefreshRequest = Body(...),
    account: InstructorAccount = Depends(get_account)
):
    if not account.logout(req.refresh_token):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unknown refresh token")
    return MessageResponse(message="Logged out.")

@router.post("/password-reset/request", response_model=MessageResponse, summary="Request a password reset")
def request_password_reset(
    req: PasswordResetRequest = Body(...),
    account: InstructorAccount = Depends(get_account)
):
    """
    Sends a reset token to a registered address.
    - The response is the same whether or not the email is registered
    """
    account.request_password_reset(req.email)
    return MessageResponse(message="If that email is registered, a reset link has been sent.")

@router.post("/password-reset/confirm", response_model=MessageResponse, summary="Set a new password")
def confirm_password_reset(
    req: PasswordResetConfirm = Body(...),
    account: InstructorAccount = Depends(get_account)
):
    if not account.reset_password(req.reset_token, req.password):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Reset token is invalid or expired.")
    return MessageResponse(message="Password updated.")

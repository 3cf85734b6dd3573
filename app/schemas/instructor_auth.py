from pydantic import BaseModel, EmailStr, Field

class InstructorLoginRequest(BaseModel):
    email: EmailStr
    password: str

class InstructorAuthResponse(BaseModel):
    fino: int
    name: str
    email: str
    access_token: str
    refresh_token: str
    message: str = None

    class Config:
        from_attributes = True

class InstructorTokenRefreshRequest(BaseModel):
    refresh_token: str

class InstructorTokenResponse(BaseModel):
    access_token: str
    refresh_token: str

class PasswordResetRequest(BaseModel):
    email: EmailStr

class PasswordResetConfirm(BaseModel):
    reset_token: str
    password: str = Field(min_length=8)

class MessageResponse(BaseModel):
    message: str

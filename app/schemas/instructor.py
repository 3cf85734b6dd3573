from datetime import datetime
from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Any


class InstructorRegister(BaseModel):
    fino: int
    name: str
    email: str
    website: str
    gender: str = Field(pattern="^[MF]$")
    password: str = Field(min_length=8)
    postcodes: Optional[str] = None
    about: Optional[str] = None
    offers: Optional[str] = None

class InstructorRegisterResponse(BaseModel):
    fino: int
    name: str
    email: str
    message: str = None

class TestimonialInfo(BaseModel):
    id: int
    fino: int
    content: str

class InstructorInfo(BaseModel):
    fino: int
    name: str
    gender: Optional[str] = None
    email: str
    website: Optional[str] = None
    postcodes: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    active: int
    status: int
    status_text: Optional[str] = None
    priority: int
    priority_start_date: Optional[datetime] = None
    offer: int
    about: Optional[str] = None
    offers: Optional[str] = None

    class Config:
        from_attributes = True

class InstructorListing(InstructorInfo):
    firstname: Optional[str] = None
    distance: Optional[float] = None
    testimonials: Optional[List[TestimonialInfo]] = None

class InstructorListResponse(BaseModel):
    instructors: List[InstructorListing]

class InstructorAdminInfo(InstructorInfo):
    notes: Optional[str] = None

class InstructorAdminListResponse(BaseModel):
    instructors: List[InstructorAdminInfo]

class PersonalInformationUpdate(BaseModel):
    name: Optional[str] = None
    gender: Optional[str] = Field(default=None, pattern="^[MF]$")
    email: Optional[EmailStr] = None
    about: Optional[str] = None
    offers: Optional[str] = None

class LocationUpdateRequest(BaseModel):
    postcode: str

class InstructorUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    website: Optional[str] = None
    postcodes: Optional[str] = None
    active: Optional[int] = None
    status: Optional[int] = Field(default=None, ge=0, le=4)
    offer: Optional[int] = None
    notes: Optional[str] = None
    about: Optional[str] = None
    offers: Optional[str] = None

class InstructorFilterRequest(BaseModel):
    where: dict[str, Any] = {}
    limit: int = 50
    active: bool = True

class UpdateResponse(BaseModel):
    fino: int
    message: str

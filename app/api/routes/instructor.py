from fastapi import APIRouter, Depends, Body, HTTPException, Query, status
from app.dependencies.auth import get_current_instructor_fino
from app.dependencies.directory import get_directory
from app.schemas.instructor import (
    InstructorRegister, InstructorRegisterResponse,
    InstructorInfo, InstructorListing, InstructorListResponse, TestimonialInfo,
    PersonalInformationUpdate, LocationUpdateRequest, UpdateResponse
)
from app.services.instructor_directory import InstructorDirectory

router = APIRouter()


def to_listing(directory: InstructorDirectory, row: dict) -> InstructorListing:
    data = dict(row)
    data["status_text"] = directory.instructor_status(data.get("status")) or None
    data["testimonials"] = data.get("testimonials") or None
    return InstructorListing(**data)

def to_list_response(directory: InstructorDirectory, rows) -> InstructorListResponse:
    return InstructorListResponse(instructors=[to_listing(directory, row) for row in rows or []])


@router.post("/register", response_model=InstructorRegisterResponse, summary="Instructor registration")
def register_instructor(
    instructor_in: InstructorRegister = Body(...),
    directory: InstructorDirectory = Depends(get_directory)
):
    """
    Registers a new instructor under their franchise number.
    - 409 if the franchise number or email is already registered
    - 400 if the email address is not valid
    """
    if directory.get_instructor_info(instructor_in.fino):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Franchise number already registered.")
    if directory.email_in_use(instructor_in.email):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered.")
    extra = instructor_in.model_dump(include={"postcodes", "about", "offers"}, exclude_none=True)
    added = directory.add_instructor(
        instructor_in.fino, instructor_in.name, instructor_in.email, instructor_in.website,
        instructor_in.gender, instructor_in.password, extra
    )
    if not added:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Instructor could not be registered.")
    return InstructorRegisterResponse(
        fino=instructor_in.fino,
        name=instructor_in.name,
        email=instructor_in.email,
        message="Instructor successfully registered."
    )

@router.get("", response_model=InstructorListResponse, summary="Active instructors")
def list_active_instructors(directory: InstructorDirectory = Depends(get_directory)):
    rows = directory.list_instructors(directory.get_all_instructors(1))
    return to_list_response(directory, rows)

@router.get("/search", response_model=InstructorListResponse, summary="Closest instructors to a postcode")
def search_instructors(
    postcode: str = Query(..., min_length=2),
    limit: int = Query(50, ge=1, le=200),
    cover: bool = True,
    has_offer: bool = False,
    directory: InstructorDirectory = Depends(get_directory)
):
    """
    Nearest active instructors to the postcode. If the postcode cannot be
    geocoded the instructors covering its area are returned instead.
    """
    rows = directory.find_closest_instructors(postcode, limit, cover, has_offer)
    return to_list_response(directory, rows)

@router.get("/area", response_model=InstructorListResponse, summary="Instructors covering a postcode area")
def instructors_by_area(
    postcode: str = Query(..., min_length=2),
    limit: int = Query(50, ge=1, le=200),
    has_offer: bool = False,
    directory: InstructorDirectory = Depends(get_directory)
):
    rows = directory.find_instructors_by_postcode(postcode, limit, has_offer)
    return to_list_response(directory, rows)

@router.get("/me", response_model=InstructorInfo, summary="My profile")
def get_my_profile(
    fino: int = Depends(get_current_instructor_fino),
    directory: InstructorDirectory = Depends(get_directory)
):
    info = directory.get_instructor_info(fino)
    if not info:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Instructor not found.")
    return to_listing(directory, directory.list_instructors([info])[0])

@router.patch("/me", response_model=UpdateResponse, summary="Update my personal information")
def update_my_profile(
    req: PersonalInformationUpdate = Body(...),
    fino: int = Depends(get_current_instructor_fino),
    directory: InstructorDirectory = Depends(get_directory)
):
    """
    Only the fields sent are changed. Blank values are cleared.
    """
    information = req.model_dump(exclude_unset=True)
    if information.get("email") and directory.email_in_use(information["email"], fino):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered.")
    if not information or not directory.update_instructor_personal_information(fino, information):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing was updated.")
    return UpdateResponse(fino=fino, message="Personal information updated.")

@router.put("/me/location", response_model=UpdateResponse, summary="Update my location")
def update_my_location(
    req: LocationUpdateRequest = Body(...),
    fino: int = Depends(get_current_instructor_fino),
    directory: InstructorDirectory = Depends(get_directory)
):
    if not directory.update_instructor_location(fino, req.postcode):
        raise HTTPException(status_code=422, detail="Postcode could not be located.")
    return UpdateResponse(fino=fino, message="Location updated.")

@router.get("/{fino}", response_model=InstructorInfo, summary="Instructor profile")
def get_instructor(fino: int, directory: InstructorDirectory = Depends(get_directory)):
    info = directory.get_instructor_info(fino)
    if not info or info["active"] != 1:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Instructor not found.")
    return to_listing(directory, directory.list_instructors([info])[0])

@router.get("/{fino}/testimonials", response_model=list[TestimonialInfo], summary="Instructor testimonials")
def get_instructor_testimonials(
    fino: int,
    limit: int = Query(5, ge=1, le=50),
    directory: InstructorDirectory = Depends(get_directory)
):
    return directory.inst_testimonials(fino, limit) or []

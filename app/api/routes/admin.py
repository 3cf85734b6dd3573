from fastapi import APIRouter, Depends, Body, HTTPException, status
from app.dependencies.admin_auth import get_current_admin_token
from app.dependencies.directory import get_directory
from app.schemas.admin import AdminLoginRequest, AdminLoginResponse
from app.schemas.instructor import (
    InstructorAdminInfo, InstructorAdminListResponse, InstructorListResponse,
    InstructorFilterRequest, InstructorUpdate, UpdateResponse
)
from app.api.routes.instructor import to_list_response
from app.services.admin_auth_service import authenticate_admin
from app.services.instructor_directory import InstructorDirectory

router = APIRouter()
protected = APIRouter(
    dependencies=[Depends(get_current_admin_token)]
)


@router.post("/login", response_model=AdminLoginResponse, summary="Admin login")
def admin_login(req: AdminLoginRequest = Body(...)):
    """
    Logs in with the admin account from the environment. The password is checked against a bcrypt hash.
    """
    return authenticate_admin(req.username, req.password)


@protected.get("/instructors", response_model=InstructorAdminListResponse, summary="All instructors (admin)")
def list_all_instructors(
    active: int = 1,
    directory: InstructorDirectory = Depends(get_directory)
):
    rows = directory.get_all_instructors(active) or []
    return InstructorAdminListResponse(instructors=[
        InstructorAdminInfo(**row, status_text=directory.instructor_status(row["status"]) or None) for row in rows
    ])

@protected.post("/instructors/filter", response_model=InstructorListResponse, summary="Filtered instructors (admin)")
def filter_instructors(
    req: InstructorFilterRequest = Body(...),
    directory: InstructorDirectory = Depends(get_directory)
):
    rows = directory.get_instructors(req.where, req.limit, req.active)
    return to_list_response(directory, rows)

@protected.patch("/instructors/{fino}", response_model=UpdateResponse, summary="Update an instructor (admin)")
def update_instructor(
    fino: int,
    req: InstructorUpdate = Body(...),
    directory: InstructorDirectory = Depends(get_directory)
):
    if not directory.get_instructor_info(fino):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Instructor not found.")
    information = req.model_dump(exclude_unset=True)
    if information.get("email") and directory.email_in_use(information["email"], fino):
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Email is already registered.")
    if not information or not directory.update_instructor(fino, information):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Nothing was updated.")
    return UpdateResponse(fino=fino, message="Instructor updated.")

@protected.post("/instructors/{fino}/priority", response_model=UpdateResponse, summary="Start a priority listing (admin)")
def add_priority(
    fino: int,
    directory: InstructorDirectory = Depends(get_directory)
):
    if not directory.get_instructor_info(fino):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Instructor not found.")
    directory.add_priority(fino)
    return UpdateResponse(fino=fino, message="Priority listing started.")

router.include_router(protected)

import json
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session
from typing import List, Optional
from pydantic import Field, ValidationError
from coursehub.core.database import get_db
from coursehub.core.errors import (
    OperationForbidden,
    ResourceNotFound,
    StoreError,
    StoreErrorKind,
    ValidationFailed,
    format_validation_errors,
)
from coursehub.api.dependencies import get_current_user
from coursehub.api.schemas import CamelModel
from coursehub.models.course import Course
from coursehub.models.user import User
from coursehub.services.course_service import course_service

router = APIRouter(prefix="/courses", tags=["courses"])

COURSE_NOT_FOUND_MESSAGE = "Course was not found."

# Largest id the database integer column can hold (signed 64-bit)
MAX_COURSE_ID = 2 ** 63 - 1


class CourseWrite(CamelModel):
    # Any userId in the body is ignored; the owner always comes from auth
    title: Optional[str] = None
    description: Optional[str] = None
    estimated_time: Optional[str] = None
    materials_needed: Optional[str] = None


class CourseOwner(CamelModel):
    id: int
    first_name: str
    last_name: str


class CourseSummary(CamelModel):
    id: int
    title: str
    description: str
    estimated_time: Optional[str] = None
    materials_needed: Optional[str] = None
    owner: CourseOwner = Field(validation_alias="owner", serialization_alias="User")


class CourseDetail(CourseSummary):
    user_id: int


async def read_course_payload(request: Request) -> CourseWrite:
    """
    Parse and type-check the request body.

    Called from inside the handlers rather than declared as a body
    parameter: FastAPI validates declared bodies before dependencies run,
    which would let a malformed body answer 400 ahead of the 401/404/403
    checks. An empty body counts as an empty object.
    """
    raw = await request.body()
    if not raw.strip():
        data = {}
    else:
        try:
            data = json.loads(raw)
        except ValueError:
            # Covers JSONDecodeError and bodies that are not valid UTF-8
            raise ValidationFailed(["Request body must be valid JSON"])
    if not isinstance(data, dict):
        raise ValidationFailed(["Request body must be a JSON object"])

    try:
        return CourseWrite.model_validate(data)
    except ValidationError as e:
        raise ValidationFailed(format_validation_errors(e.errors())) from e


def parse_course_id(raw_id: str) -> Optional[int]:
    """Course id from the URL, or None when it can't name any stored course"""
    # isascii + isdigit rejects signs, underscores and non-ASCII digits int() would accept
    if not raw_id.isascii() or not raw_id.isdigit():
        return None
    course_id = int(raw_id)
    # Past this the driver raises OverflowError instead of finding nothing
    if course_id > MAX_COURSE_ID:
        return None
    return course_id


def get_course_or_404(db: Session, raw_id: str) -> Course:
    course_id = parse_course_id(raw_id)
    course = course_service.get_course(db, course_id) if course_id is not None else None
    if course is None:
        raise ResourceNotFound(COURSE_NOT_FOUND_MESSAGE)
    return course


def ensure_owner(course: Course, current_user: User) -> None:
    if current_user.id != course.user_id:
        raise OperationForbidden()


def course_location(course_id: int) -> str:
    return f"/courses/{course_id}"


@router.get("", response_model=List[CourseSummary])
def list_courses(db: Session = Depends(get_db)):
    """List every course with its owner"""
    return course_service.list_courses(db)


@router.get("/{course_id}", response_model=CourseDetail)
def get_course(course_id: str, db: Session = Depends(get_db)):
    """Get a single course"""
    return get_course_or_404(db, course_id)


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def create_course(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Create a course owned by the authenticated user"""
    # Body is only read once authentication has passed
    payload = await read_course_payload(request)

    try:
        course = course_service.create_course(
            db,
            owner=current_user,
            title=payload.title,
            description=payload.description,
            estimated_time=payload.estimated_time,
            materials_needed=payload.materials_needed,
        )
    except StoreError as e:
        if e.kind == StoreErrorKind.VALIDATION:
            raise ValidationFailed(e.messages) from e
        raise

    return Response(
        status_code=status.HTTP_201_CREATED,
        headers={"Location": course_location(course.id)},
    )


@router.put("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def update_course(
    course_id: str,
    request: Request,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Replace a course's fields.

    Checks run in order: authentication (401), existence (404),
    ownership (403), then the body: JSON and field types, required
    fields (400). A non-owner gets 403 whatever the body holds.
    """
    course = get_course_or_404(db, course_id)
    ensure_owner(course, current_user)

    payload = await read_course_payload(request)

    errors = []
    if not payload.description:
        errors.append("Please provide a description")
    if not payload.title:
        errors.append("Please provide a title")
    if errors:
        raise ValidationFailed(errors)

    try:
        course_service.update_course(
            db,
            course,
            owner=current_user,
            title=payload.title,
            description=payload.description,
            estimated_time=payload.estimated_time,
            materials_needed=payload.materials_needed,
        )
    except StoreError as e:
        if e.kind == StoreErrorKind.VALIDATION:
            raise ValidationFailed(e.messages) from e
        raise

    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={"Location": course_location(course.id)},
    )


@router.delete("/{course_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_course(
    course_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Delete a course owned by the authenticated user"""
    course = get_course_or_404(db, course_id)
    ensure_owner(course, current_user)
    course_service.delete_course(db, course)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
from typing import Optional
from coursehub.core.database import get_db
from coursehub.core.errors import StoreError, StoreErrorKind, ValidationFailed
from coursehub.api.dependencies import get_current_user
from coursehub.api.schemas import CamelModel
from coursehub.models.user import User
from coursehub.services.user_service import user_service

router = APIRouter(prefix="/users", tags=["users"])


class UserCreate(CamelModel):
    # Everything is optional here so missing fields reach the manual
    # validation below and are reported together
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    password: Optional[str] = None
    password_confirm: Optional[str] = None


class UserResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    email_address: str


def validate_registration(db: Session, payload: UserCreate) -> list[str]:
    """
    Collect every registration error, in a fixed order.

    The uniqueness lookup sits between the email and password checks and
    only runs when an email was supplied.
    """
    errors = []
    if not payload.first_name:
        errors.append('Please provide a "firstName"')
    if not payload.last_name:
        errors.append('Please provide a "lastName"')
    if not payload.email_address:
        errors.append('Please provide an "emailAddress"')
    elif user_service.email_taken(db, payload.email_address):
        errors.append("Please use a unique email address")
    if not payload.password:
        errors.append("Please provide a password")
    if not payload.password_confirm:
        errors.append("Please confirm your password")
    if payload.password and payload.password_confirm and payload.password != payload.password_confirm:
        errors.append("Password don't match")
    return errors


@router.get("", response_model=UserResponse)
def get_authenticated_user(current_user: User = Depends(get_current_user)):
    """Profile of the user whose credentials came with the request"""
    return current_user


@router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    errors = validate_registration(db, payload)
    if errors:
        raise ValidationFailed(errors)

    try:
        user_service.create_user(
            db,
            first_name=payload.first_name,
            last_name=payload.last_name,
            email_address=payload.email_address,
            password=payload.password,
        )
    except StoreError as e:
        # Another request registered the same email after our check
        if e.kind == StoreErrorKind.UNIQUE_VIOLATION:
            raise ValidationFailed(e.messages) from e
        raise

    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": "/"})

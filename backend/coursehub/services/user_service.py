import logging
from typing import Optional
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from coursehub.core.errors import StoreError, StoreErrorKind
from coursehub.core.security import get_password_hash
from coursehub.models.user import User

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def get_by_email(db: Session, email_address: str) -> Optional[User]:
        """Exact, case-sensitive match on the stored email address"""
        return db.query(User).filter(User.email_address == email_address).first()

    @staticmethod
    def email_taken(db: Session, email_address: str) -> bool:
        return UserService.get_by_email(db, email_address) is not None

    @staticmethod
    def create_user(
        db: Session,
        first_name: str,
        last_name: str,
        email_address: str,
        password: str,
    ) -> User:
        """
        Hash the plaintext password and store a new user.

        Raises StoreError(UNIQUE_VIOLATION) when another user with the same
        email was committed between the caller's uniqueness check and this
        insert; the database unique index is the last line here.
        """
        db_user = User(
            first_name=first_name,
            last_name=last_name,
            email_address=email_address,
            hashed_password=get_password_hash(password),
        )
        try:
            db.add(db_user)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise StoreError(StoreErrorKind.UNIQUE_VIOLATION, ["Please use a unique email address"])
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(StoreErrorKind.DATABASE, [str(e)]) from e

        db.refresh(db_user)
        logger.info(f"Created user {db_user.id} ({db_user.email_address})")
        return db_user


user_service = UserService()

import logging
from typing import List, Optional
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from coursehub.core.errors import StoreError, StoreErrorKind
from coursehub.models.course import Course
from coursehub.models.user import User

logger = logging.getLogger(__name__)


class CourseService:
    @staticmethod
    def list_courses(db: Session) -> List[Course]:
        """All courses with their owners loaded in the same query"""
        return (
            db.query(Course)
            .options(joinedload(Course.owner))
            .order_by(Course.id)
            .all()
        )

    @staticmethod
    def get_course(db: Session, course_id: int) -> Optional[Course]:
        return (
            db.query(Course)
            .options(joinedload(Course.owner))
            .filter(Course.id == course_id)
            .first()
        )

    @staticmethod
    def create_course(
        db: Session,
        owner: User,
        title: Optional[str],
        description: Optional[str],
        estimated_time: Optional[str] = None,
        materials_needed: Optional[str] = None,
    ) -> Course:
        """Store a new course owned by `owner`."""
        course = Course(
            title=title,
            description=description,
            estimated_time=estimated_time,
            materials_needed=materials_needed,
            user_id=owner.id,
        )
        CourseService._save(db, course)
        logger.info(f"User {owner.id} created course {course.id}")
        return course

    @staticmethod
    def update_course(
        db: Session,
        course: Course,
        owner: User,
        title: Optional[str],
        description: Optional[str],
        estimated_time: Optional[str] = None,
        materials_needed: Optional[str] = None,
    ) -> Course:
        """
        Overwrite every editable field of `course`.

        user_id is re-assigned to `owner` on every update. Callers have
        already checked ownership, so this never moves a course.
        """
        course.title = title
        course.description = description
        course.estimated_time = estimated_time
        course.materials_needed = materials_needed
        course.user_id = owner.id
        CourseService._save(db, course)
        logger.info(f"User {owner.id} updated course {course.id}")
        return course

    @staticmethod
    def delete_course(db: Session, course: Course) -> None:
        course_id = course.id
        try:
            db.delete(course)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(StoreErrorKind.DATABASE, [str(e)]) from e
        logger.info(f"Deleted course {course_id}")

    @staticmethod
    def _save(db: Session, course: Course) -> None:
        # Model rules run before anything reaches the database
        errors = course.validation_errors()
        if errors:
            if course in db:
                db.rollback()
            raise StoreError(StoreErrorKind.VALIDATION, errors)

        try:
            db.add(course)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StoreError(StoreErrorKind.DATABASE, [str(e)]) from e
        db.refresh(course)


course_service = CourseService()

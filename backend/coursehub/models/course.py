from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from coursehub.core.database import Base

# Columns that must hold a non-empty value, in the order errors are reported
REQUIRED_FIELDS = ("title", "description")


class Course(Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    estimated_time = Column(String, nullable=True)
    materials_needed = Column(Text, nullable=True)
    # Owning user - only this user may update or delete the course
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    owner = relationship("User", back_populates="courses")

    def validation_errors(self) -> list[str]:
        """Messages for every required field that is missing or blank."""
        errors = []
        for field in REQUIRED_FIELDS:
            value = getattr(self, field)
            if value is None or (isinstance(value, str) and not value.strip()):
                errors.append(f'Please provide a value for "{field}"')
        return errors

    def __repr__(self):
        return f"<Course {self.id} {self.title!r}>"

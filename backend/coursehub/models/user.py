from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from coursehub.core.database import Base


class User(Base):
    """
    User model representing registered course authors.

    Stores authentication credentials and profile information.
    Passwords are stored as hashes (never plaintext).
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    # Email is the Basic Auth username, unique and indexed for lookups
    email_address = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # user.courses lists every course this user owns
    courses = relationship("Course", back_populates="owner")

    def __repr__(self):
        return f"<User {self.email_address}>"

from coursehub.models.user import User
from coursehub.models.course import Course

__all__ = ["User", "Course"]

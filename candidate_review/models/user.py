"""User model."""

from sqlalchemy import Boolean, Column, String

from candidate_review.db.base import Base


class User(Base):
    """Business owners and job seekers referenced by jobs and applications."""

    __tablename__ = "users"

    email = Column(String(255), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=True)
    user_type = Column(String(20), nullable=False, default="jobseeker")  # business, jobseeker, admin
    is_active = Column(Boolean, default=True, nullable=False)

    def __repr__(self):
        return f"<User {self.email} ({self.user_type})>"

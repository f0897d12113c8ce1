# /eduguide/db/models/user_model.py

"""
SQLAlchemy model for the `User` entity. A user is either an administrator, who
runs roster imports, or a teacher, who owns students.
"""

from sqlalchemy import Column, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class User(Base):
    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    # Stored normalized (trimmed, lower-cased) so lookups are exact matches.
    email = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    role = Column(String, index=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    students = relationship("Student", back_populates="teacher")
    uploads = relationship("Upload", back_populates="uploader")

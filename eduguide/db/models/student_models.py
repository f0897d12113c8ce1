# /eduguide/db/models/student_models.py

"""
This module defines the SQLAlchemy ORM models for the `Student` entity and its
two append-only child collections, `LiteracyScore` and `Reflection`.
"""

from sqlalchemy import Column, String, Integer, Float, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Student(Base):
    """
    SQLAlchemy model representing a single student.

    Every student is owned by exactly one teacher. The `teacher_id` foreign key
    is NOT NULL, so a student can never be stored without an owner.
    """
    id = Column(String, primary_key=True, index=True)
    name = Column(String, index=True, nullable=False)
    age = Column(Integer, nullable=True)
    class_name = Column(String, nullable=True)

    teacher_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)

    # The fixed SEL triple, each rated 1-5 when assessed.
    empathy = Column(Integer, nullable=True)
    regulation = Column(Integer, nullable=True)
    cooperation = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    teacher = relationship("User", back_populates="students")

    # Insertion order is kept by the `position` column.
    literacy_scores = relationship(
        "LiteracyScore",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="LiteracyScore.position",
    )
    reflections = relationship(
        "Reflection",
        back_populates="student",
        cascade="all, delete-orphan",
        order_by="Reflection.position",
    )


class LiteracyScore(Base):
    __tablename__ = "literacy_scores"

    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    score = Column(Float, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    student = relationship("Student", back_populates="literacy_scores")


class Reflection(Base):
    id = Column(String, primary_key=True, index=True)
    student_id = Column(String, ForeignKey("students.id"), nullable=False, index=True)
    teacher_id = Column(String, ForeignKey("users.id"), nullable=True)
    note = Column(String, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False)
    position = Column(Integer, nullable=False, default=0)

    student = relationship("Student", back_populates="reflections")

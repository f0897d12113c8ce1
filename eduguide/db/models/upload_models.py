# /eduguide/db/models/upload_models.py

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..base_class import Base


class Upload(Base):
    """
    Audit record of one CSV import. Created in the `processing` state when the
    import starts and finalized exactly once when the import ends.
    """
    id = Column(String, primary_key=True, index=True)
    file_name = Column(String, nullable=False)
    uploaded_by = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    status = Column(String, nullable=False, default="processing")
    records_processed = Column(Integer, nullable=False, default=0)
    students_added = Column(Integer, nullable=False, default=0)
    has_errors = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    finalized_at = Column(DateTime(timezone=True), nullable=True)

    uploader = relationship("User", back_populates="uploads")

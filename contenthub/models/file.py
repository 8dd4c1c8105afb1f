# contenthub/models/file.py
from sqlalchemy import Column, Integer, String, BigInteger, Boolean, DateTime, Text, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from contenthub.database import Base

class ProjectFile(Base):
    __tablename__ = "project_files"

    # Client generated: millisecond timestamp + random suffix
    id = Column(String(64), primary_key=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), nullable=False, index=True)
    name = Column(Text, nullable=False, index=True)
    size = Column(BigInteger)
    type = Column(String(255))  # MIME type
    s3_key = Column(Text)
    url = Column(Text)
    upload_date = Column(DateTime(timezone=True), server_default=func.now())
    version = Column(String(20), nullable=False, default="1.0")
    uploaded_by = Column(String(255))
    is_latest = Column(Boolean, nullable=False, default=True)
    previous_version_id = Column(String(64))

    # Relationships
    project = relationship("Project", back_populates="files")

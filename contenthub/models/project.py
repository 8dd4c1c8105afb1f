# contenthub/models/project.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, JSON
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from contenthub.database import Base

class ProjectStatus(str, enum.Enum):
    DRAFT = "draft"
    EDITOR_REVIEW = "editor_review"
    CLIENT_REVIEW = "client_review"
    NEEDS_REVISION = "needs_revision"
    APPROVED = "approved"
    FINAL_DELIVERED = "final_delivered"

class ContentType(str, enum.Enum):
    VIDEO = "video"
    IMAGE = "image"
    TEXT = "text"

class ProjectPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

class Project(Base):
    __tablename__ = "projects"

    id = Column(Integer, primary_key=True, autoincrement=True)
    client = Column(Text, nullable=False, index=True)  # Company name, not a foreign key
    title = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default=ContentType.VIDEO.value)
    subtype = Column(Text)
    # Plain text so legacy values (in_progress, pending_review) load unchanged
    status = Column(String(50), nullable=False, default=ProjectStatus.DRAFT.value, index=True)
    priority = Column(String(20), nullable=False, default=ProjectPriority.MEDIUM.value)
    version = Column(Integer, nullable=False, default=1)
    due_date = Column(Date, nullable=False)
    estimated_hours = Column(Integer, default=0)
    budget = Column(Integer, default=0)
    description = Column(Text, nullable=False)
    objectives = Column(Text)
    target_audience = Column(Text)
    platforms = Column(JSON, default=list)
    deliverables = Column(Text)
    feedback = Column(Text)
    last_activity = Column(Text)
    tags = Column(JSON, default=list)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    files = relationship(
        "ProjectFile",
        back_populates="project",
        cascade="all, delete-orphan",
        order_by="ProjectFile.upload_date",
    )

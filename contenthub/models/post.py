# contenthub/models/post.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, JSON, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from contenthub.database import Base

class PostStatus(str, enum.Enum):
    DRAFT = "draft"
    SCHEDULED = "scheduled"
    POSTED = "posted"

class PostedContent(Base):
    __tablename__ = "posted_content"
    __table_args__ = (
        CheckConstraint("status IN ('draft', 'scheduled', 'posted')", name="posted_content_status_check"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey('projects.id', ondelete='CASCADE'), index=True)
    project_title = Column(Text, nullable=False)
    client = Column(Text, nullable=False, index=True)
    content_form = Column(Text)
    content_bucket = Column(Text)
    number_of_content = Column(Integer, default=1)
    link = Column(Text)
    caption = Column(Text)
    feedback = Column(Text)
    comments = Column(Text)
    number_of_likes = Column(Integer, default=0)
    live_link = Column(Text)
    platform = Column(Text)
    scheduled_date = Column(Date, index=True)
    posted_date = Column(Date, index=True)
    status = Column(String(20), nullable=False, default=PostStatus.DRAFT.value, index=True)
    analytics = Column(JSON, default=dict)
    editor_id = Column(Integer, ForeignKey('editors.id', ondelete='SET NULL'), index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    editor = relationship("Editor", back_populates="posts")

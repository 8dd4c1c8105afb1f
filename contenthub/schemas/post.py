# contenthub/schemas/post.py
from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import date, datetime
from contenthub.models.post import PostStatus
from contenthub.schemas.validators import require_text


class PostAnalytics(BaseModel):
    views: Optional[int] = Field(None, ge=0)
    shares: Optional[int] = Field(None, ge=0)
    saves: Optional[int] = Field(None, ge=0)
    reach: Optional[int] = Field(None, ge=0)


# Request schemas
class PostCreate(BaseModel):
    project_id: Optional[int] = None
    project_title: str
    client: str
    content_form: Optional[str] = None
    content_bucket: Optional[str] = None
    number_of_content: int = Field(1, ge=0)
    link: Optional[str] = None
    caption: Optional[str] = None
    feedback: Optional[str] = None
    comments: Optional[str] = None
    number_of_likes: int = Field(0, ge=0)
    live_link: Optional[str] = None
    platform: Optional[str] = None
    scheduled_date: Optional[date] = None
    posted_date: Optional[date] = None
    status: PostStatus = PostStatus.DRAFT.value
    analytics: PostAnalytics = Field(default_factory=PostAnalytics)
    editor_id: Optional[int] = None

    @field_validator("project_title", "client")
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

    class Config:
        use_enum_values = True

class PostUpdate(BaseModel):
    project_title: Optional[str] = None
    client: Optional[str] = None
    content_form: Optional[str] = None
    content_bucket: Optional[str] = None
    number_of_content: Optional[int] = Field(None, ge=0)
    link: Optional[str] = None
    caption: Optional[str] = None
    feedback: Optional[str] = None
    comments: Optional[str] = None
    number_of_likes: Optional[int] = Field(None, ge=0)
    live_link: Optional[str] = None
    platform: Optional[str] = None
    scheduled_date: Optional[date] = None
    posted_date: Optional[date] = None
    status: Optional[PostStatus] = None
    analytics: Optional[PostAnalytics] = None
    editor_id: Optional[int] = None

    @field_validator("project_title", "client")
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

    @field_validator("status")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    class Config:
        use_enum_values = True

# Response schemas
class PostResponse(BaseModel):
    id: int
    project_id: Optional[int]
    project_title: str
    client: str
    content_form: Optional[str]
    content_bucket: Optional[str]
    number_of_content: Optional[int]
    link: Optional[str]
    caption: Optional[str]
    feedback: Optional[str]
    comments: Optional[str]
    number_of_likes: Optional[int]
    live_link: Optional[str]
    platform: Optional[str]
    scheduled_date: Optional[date]
    posted_date: Optional[date]
    status: PostStatus
    analytics: PostAnalytics
    editor_id: Optional[int]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    @field_validator("analytics", mode="before")
    @classmethod
    def default_analytics(cls, value):
        return value or {}

    class Config:
        from_attributes = True

class PostListResponse(BaseModel):
    posts: list[PostResponse]
    total: int

class ClearPostsResponse(BaseModel):
    deleted: int

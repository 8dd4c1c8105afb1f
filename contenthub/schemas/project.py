# contenthub/schemas/project.py
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from contenthub.models.project import ProjectStatus, ContentType, ProjectPriority
from contenthub.schemas.file import ProjectFileResponse
from contenthub.schemas.validators import require_text
from contenthub.services.workflow import normalize_status

REQUIRED_TEXT_FIELDS = ("client", "title", "description")


# Request schemas
class ProjectCreate(BaseModel):
    client: str = Field(..., max_length=255, description="Client company name")
    title: str = Field(..., max_length=255)
    type: ContentType = ContentType.VIDEO.value
    subtype: Optional[str] = Field(None, max_length=255, description="e.g. Instagram Reel, Blog Post")
    priority: ProjectPriority = ProjectPriority.MEDIUM.value
    due_date: date
    estimated_hours: Optional[int] = Field(0, ge=0)
    budget: Optional[int] = Field(0, ge=0)
    description: str
    objectives: Optional[str] = None
    target_audience: Optional[str] = None
    platforms: List[str] = Field(default_factory=list)
    deliverables: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

    class Config:
        use_enum_values = True

class ProjectUpdate(BaseModel):
    client: Optional[str] = Field(None, max_length=255)
    title: Optional[str] = Field(None, max_length=255)
    type: Optional[ContentType] = None
    subtype: Optional[str] = Field(None, max_length=255)
    priority: Optional[ProjectPriority] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[int] = Field(None, ge=0)
    budget: Optional[int] = Field(None, ge=0)
    description: Optional[str] = None
    objectives: Optional[str] = None
    target_audience: Optional[str] = None
    platforms: Optional[List[str]] = None
    deliverables: Optional[str] = None
    tags: Optional[List[str]] = None

    # Only runs for fields present in the payload; explicit nulls are rejected
    @field_validator(*REQUIRED_TEXT_FIELDS)
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

    @field_validator("due_date", "type", "priority")
    @classmethod
    def not_null(cls, value):
        if value is None:
            raise ValueError("must not be null")
        return value

    class Config:
        use_enum_values = True

class StatusUpdate(BaseModel):
    status: ProjectStatus

class FeedbackUpdate(BaseModel):
    feedback: str

    @field_validator("feedback")
    @classmethod
    def not_blank(cls, value):
        return require_text(value)

# Response schemas
class ProjectResponse(BaseModel):
    id: int
    client: str
    title: str
    type: str
    subtype: Optional[str]
    status: ProjectStatus
    priority: str
    version: int
    due_date: date
    estimated_hours: Optional[int]
    budget: Optional[int]
    description: str
    objectives: Optional[str]
    target_audience: Optional[str]
    platforms: List[str]
    deliverables: Optional[str]
    feedback: Optional[str]
    last_activity: Optional[str]
    tags: List[str]
    created_at: Optional[datetime]
    updated_at: Optional[datetime]

    # Legacy status values are mapped on read, never written back
    @field_validator("status", mode="before")
    @classmethod
    def map_legacy_status(cls, value):
        return normalize_status(value)

    @field_validator("platforms", "tags", mode="before")
    @classmethod
    def default_list(cls, value):
        return value or []

    class Config:
        from_attributes = True

class ProjectDetailResponse(ProjectResponse):
    files: List[ProjectFileResponse] = []

class ProjectListResponse(BaseModel):
    projects: list[ProjectResponse]
    total: int

class WorkflowResponse(BaseModel):
    project_id: int
    status: ProjectStatus
    display_name: str
    next_status: Optional[ProjectStatus]
    advance_label: Optional[str]
    can_advance: bool
    can_request_changes: bool

class DashboardStats(BaseModel):
    total_projects: int
    pending_review: int
    completed_this_month: int
    active_clients: int

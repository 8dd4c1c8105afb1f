from contenthub.schemas.client import (
    ClientCreate, ClientUpdate, ClientResponse, ClientListResponse
)
from contenthub.schemas.file import (
    ProjectFileResponse, FileListResponse, FileUploadResponse, FileDownloadResponse
)
from contenthub.schemas.project import (
    ProjectCreate, ProjectUpdate, ProjectResponse, ProjectDetailResponse,
    ProjectListResponse, StatusUpdate, FeedbackUpdate, WorkflowResponse,
    DashboardStats
)
from contenthub.schemas.post import (
    PostAnalytics, PostCreate, PostUpdate, PostResponse, PostListResponse,
    ClearPostsResponse
)
from contenthub.schemas.editor import (
    EditorCreate, EditorUpdate, EditorResponse, EditorListResponse
)

__all__ = [
    # Client
    "ClientCreate", "ClientUpdate", "ClientResponse", "ClientListResponse",
    # File
    "ProjectFileResponse", "FileListResponse", "FileUploadResponse", "FileDownloadResponse",
    # Project
    "ProjectCreate", "ProjectUpdate", "ProjectResponse", "ProjectDetailResponse",
    "ProjectListResponse", "StatusUpdate", "FeedbackUpdate", "WorkflowResponse",
    "DashboardStats",
    # Post
    "PostAnalytics", "PostCreate", "PostUpdate", "PostResponse", "PostListResponse",
    "ClearPostsResponse",
    # Editor
    "EditorCreate", "EditorUpdate", "EditorResponse", "EditorListResponse",
]

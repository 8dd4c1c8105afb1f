from contenthub.models.client import Client
from contenthub.models.project import Project, ProjectStatus, ContentType, ProjectPriority
from contenthub.models.file import ProjectFile
from contenthub.models.editor import Editor
from contenthub.models.post import PostedContent, PostStatus

__all__ = [
    "Client",
    "Project",
    "ProjectStatus",
    "ContentType",
    "ProjectPriority",
    "ProjectFile",
    "Editor",
    "PostedContent",
    "PostStatus",
]

# contenthub/dependencies.py
from functools import lru_cache
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from contenthub.database import SessionLocal
from contenthub.models.project import Project
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# DATABASE
# =============================================================================

def get_db():
    """Get database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# SERVICE DEPENDENCIES
# =============================================================================

@lru_cache
def get_storage():
    """Get S3 service instance (one boto3 client per process)"""
    from contenthub.services.storage import S3Service
    return S3Service()


# =============================================================================
# LOOKUPS
# =============================================================================

def get_project_or_404(db: Session, project_id: int) -> Project:
    """Load a project or raise 404"""
    project = db.query(Project).filter(Project.id == project_id).first()

    if not project:
        logger.warning(f"Project {project_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Project not found"
        )

    return project


# =============================================================================
# PAGINATION
# =============================================================================

class PaginationParams:
    """Reusable pagination parameters"""

    def __init__(
        self,
        page: int = 1,
        page_size: int = 20,
    ):
        self.page = max(1, page)
        self.page_size = min(100, max(1, page_size))
        self.skip = (self.page - 1) * self.page_size
        self.limit = self.page_size

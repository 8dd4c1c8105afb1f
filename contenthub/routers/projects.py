"""
Project Management Endpoints

CRUD for content-production projects plus the approval workflow:
- advance: guided forward transition (Send to Review, Send to Client, ...)
- request-changes: send a project under review back for revision
- status: free-choice override of the status field
- feedback: store the latest reviewer feedback
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy import case, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
import logging

from contenthub.dependencies import get_db, get_project_or_404, get_storage, PaginationParams
from contenthub.models.client import Client
from contenthub.models.project import Project, ProjectStatus, ContentType
from contenthub.schemas.project import (
    ProjectCreate,
    ProjectUpdate,
    ProjectResponse,
    ProjectDetailResponse,
    ProjectListResponse,
    StatusUpdate,
    FeedbackUpdate,
    WorkflowResponse,
    DashboardStats,
)
from contenthub.services import workflow
from contenthub.services.storage import S3Service, StorageError

logger = logging.getLogger(__name__)
router = APIRouter()


def _status_sort_key():
    """SQL expression yielding the status a stored value normalizes to"""
    known = [s.value for s in ProjectStatus]
    return case(
        (Project.status.in_(known), Project.status),
        *[(Project.status == old, new.value) for old, new in workflow.LEGACY_STATUS_MAP.items()],
        else_=ProjectStatus.DRAFT.value
    )


SORT_COLUMNS = {
    "due_date": Project.due_date,
    "client": Project.client,
    "status": _status_sort_key(),
    "type": Project.type,
}


def _status_filter(wanted: ProjectStatus):
    """SQL filter matching rows whose stored status normalizes to `wanted`"""
    stored = [wanted.value] + [old for old, new in workflow.LEGACY_STATUS_MAP.items() if new == wanted]
    clause = Project.status.in_(stored)
    if wanted == ProjectStatus.DRAFT:
        # Unrecognized values load as draft
        known = [s.value for s in ProjectStatus] + list(workflow.LEGACY_STATUS_MAP)
        clause = or_(clause, Project.status.is_(None), Project.status.notin_(known))
    return clause


def _persist_status(db: Session, project: Project, new_status: ProjectStatus) -> Project:
    """Write the new status; on failure the project is left as it was, in memory and stored"""
    previous = project.status
    previous_activity = project.last_activity
    try:
        project.status = new_status.value
        project.last_activity = "Status updated"
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        project.status = previous
        project.last_activity = previous_activity
        logger.error(f"Failed to update status of project {project.id} ({previous} -> {new_status.value})")
        raise

    db.refresh(project)
    logger.info(f"✅ Project {project.id} status: {previous} -> {new_status.value}")
    return project


# =============================================================================
# CREATE PROJECT
# =============================================================================

@router.post("", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    project_data: ProjectCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new project.

    Client, title, due date and description are mandatory. New projects
    always start in `draft` at version 1.

    Returns:
        Created project details
    """
    logger.info(f"Creating project '{project_data.title}' for client '{project_data.client}'")

    new_project = Project(
        **project_data.model_dump(),
        status=ProjectStatus.DRAFT.value,
        version=1,
        feedback=None,
        last_activity="Project created",
    )

    db.add(new_project)
    db.commit()
    db.refresh(new_project)

    logger.info(f"✅ Project created: {new_project.id}")
    return new_project


# =============================================================================
# LIST ALL PROJECTS
# =============================================================================

@router.get("", response_model=ProjectListResponse)
async def list_projects(
    type: Optional[ContentType] = Query(None, description="Filter by content type"),
    status: Optional[ProjectStatus] = Query(None, description="Filter by workflow status"),
    sort_by: str = Query("due_date", pattern="^(due_date|client|status|type)$"),
    pagination: PaginationParams = Depends(),
    db: Session = Depends(get_db)
):
    """
    List projects.

    Supports filtering, sorting and pagination:
    - type: video, image or text
    - status: workflow status (legacy stored values are matched too)
    - sort_by: due_date (default), client, status or type, ascending
    - page / page_size

    Returns:
        List of projects with pagination metadata
    """
    query = db.query(Project)

    if type:
        query = query.filter(Project.type == type.value)
    if status:
        query = query.filter(_status_filter(status))

    total = query.count()

    projects = query.order_by(SORT_COLUMNS[sort_by].asc(), Project.id.asc())\
                    .offset(pagination.skip)\
                    .limit(pagination.limit)\
                    .all()

    logger.info(f"Found {total} projects, returning page {pagination.page}")

    return ProjectListResponse(
        projects=projects,
        total=total
    )


# =============================================================================
# DASHBOARD STATISTICS
# =============================================================================

@router.get("/stats", response_model=DashboardStats)
async def dashboard_stats(db: Session = Depends(get_db)):
    """
    Headline numbers for the dashboard.

    - pending_review: projects waiting on the client
    - completed_this_month: approved projects due in the current month
    """
    today = date.today()
    month_start = today.replace(day=1)
    if month_start.month == 12:
        next_month = month_start.replace(year=month_start.year + 1, month=1)
    else:
        next_month = month_start.replace(month=month_start.month + 1)

    total_projects = db.query(Project).count()
    pending_review = db.query(Project).filter(_status_filter(ProjectStatus.CLIENT_REVIEW)).count()
    completed_this_month = db.query(Project).filter(
        _status_filter(ProjectStatus.APPROVED),
        Project.due_date >= month_start,
        Project.due_date < next_month
    ).count()
    active_clients = db.query(Client).count()

    return DashboardStats(
        total_projects=total_projects,
        pending_review=pending_review,
        completed_this_month=completed_this_month,
        active_clients=active_clients
    )


# =============================================================================
# GET SINGLE PROJECT
# =============================================================================

@router.get("/{project_id}", response_model=ProjectDetailResponse)
async def get_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """
    Get a specific project with its files (all versions).

    Raises:
        404: Project not found
    """
    return get_project_or_404(db, project_id)


# =============================================================================
# UPDATE PROJECT
# =============================================================================

@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: int,
    project_data: ProjectUpdate,
    db: Session = Depends(get_db)
):
    """
    Edit a project's fields (partial update).

    Status and feedback have their own endpoints. Mandatory fields cannot be
    blanked.

    Raises:
        404: Project not found
    """
    logger.info(f"Updating project {project_id}")

    project = get_project_or_404(db, project_id)

    update_data = project_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        setattr(project, field, value)
    project.last_activity = "Project updated"

    db.commit()
    db.refresh(project)

    logger.info(f"✅ Project {project_id} updated")
    return project


# =============================================================================
# DELETE PROJECT
# =============================================================================

@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage)
):
    """
    Delete a project.

    Its file records and posts go with it; the stored objects of its files
    are removed afterwards (failures there are logged, not reported).

    Raises:
        404: Project not found
    """
    logger.info(f"Deleting project {project_id}")

    project = get_project_or_404(db, project_id)
    s3_keys = [f.s3_key for f in project.files if f.s3_key]

    db.delete(project)
    db.commit()

    for s3_key in s3_keys:
        try:
            storage.delete(s3_key)
        except StorageError as e:
            logger.warning(f"⚠️  Orphaned object {s3_key} left behind: {e}")

    logger.info(f"✅ Project {project_id} deleted ({len(s3_keys)} stored files removed)")
    return None


# =============================================================================
# WORKFLOW
# =============================================================================

@router.get("/{project_id}/workflow", response_model=WorkflowResponse)
async def get_workflow(
    project_id: int,
    db: Session = Depends(get_db)
):
    """Current status and the guided actions available from it"""
    project = get_project_or_404(db, project_id)
    current = workflow.normalize_status(project.status)

    return WorkflowResponse(
        project_id=project.id,
        status=current,
        display_name=workflow.display_name(current),
        next_status=workflow.advance(current) if workflow.can_advance(current) else None,
        advance_label=workflow.advance_label(current),
        can_advance=workflow.can_advance(current),
        can_request_changes=workflow.can_request_changes(current)
    )


@router.post("/{project_id}/advance", response_model=ProjectResponse)
async def advance_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """
    Move the project one step along the workflow.

    Advancing a final_delivered project is a no-op that still answers 200.
    """
    project = get_project_or_404(db, project_id)
    current = workflow.normalize_status(project.status)
    next_status = workflow.advance(current)

    if next_status == current:
        logger.info(f"Project {project_id} already {current.value}, nothing to advance")
        return project

    return _persist_status(db, project, next_status)


@router.post("/{project_id}/request-changes", response_model=ProjectResponse)
async def request_changes(
    project_id: int,
    db: Session = Depends(get_db)
):
    """
    Send a project in editor or client review back for revision.

    Raises:
        409: Project is not in a review state
    """
    project = get_project_or_404(db, project_id)
    current = workflow.normalize_status(project.status)

    if not workflow.can_request_changes(current):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Changes can only be requested during review (current status: {current.value})"
        )

    return _persist_status(db, project, workflow.request_changes(current))


@router.put("/{project_id}/status", response_model=ProjectResponse)
async def set_project_status(
    project_id: int,
    status_data: StatusUpdate,
    db: Session = Depends(get_db)
):
    """Set any of the six statuses directly, regardless of the current one"""
    project = get_project_or_404(db, project_id)
    current = workflow.normalize_status(project.status)

    return _persist_status(db, project, workflow.set_status(current, status_data.status))


# =============================================================================
# FEEDBACK
# =============================================================================

@router.put("/{project_id}/feedback", response_model=ProjectResponse)
async def save_feedback(
    project_id: int,
    feedback_data: FeedbackUpdate,
    db: Session = Depends(get_db)
):
    """Replace the project's feedback with the latest note"""
    project = get_project_or_404(db, project_id)

    project.feedback = feedback_data.feedback
    project.last_activity = "Feedback added"
    db.commit()
    db.refresh(project)

    logger.info(f"✅ Feedback saved on project {project_id}")
    return project

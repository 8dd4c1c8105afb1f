"""
Posted Content Endpoints

Content calendar: records of social posts that are drafted, scheduled or
already live, usually derived from a delivered project.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import Optional
from datetime import date
import logging

from contenthub.dependencies import get_db, get_project_or_404, PaginationParams
from contenthub.models.editor import Editor
from contenthub.models.post import PostedContent, PostStatus
from contenthub.models.project import ProjectStatus
from contenthub.schemas.post import (
    PostCreate,
    PostUpdate,
    PostResponse,
    PostListResponse,
    ClearPostsResponse
)
from contenthub.services import workflow

logger = logging.getLogger(__name__)
router = APIRouter()


def get_post_or_404(db: Session, post_id: int) -> PostedContent:
    post = db.query(PostedContent).filter(PostedContent.id == post_id).first()

    if not post:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Post not found"
        )

    return post


def _check_editor(db: Session, editor_id: Optional[int]) -> None:
    if editor_id is None:
        return
    if not db.query(Editor).filter(Editor.id == editor_id).first():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Editor not found"
        )


# =============================================================================
# CREATE POST
# =============================================================================

@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    db: Session = Depends(get_db)
):
    """
    Log a post manually.

    Project title and client are required; the project reference is
    optional.

    Raises:
        404: Referenced project or editor not found
    """
    if post_data.project_id is not None:
        get_project_or_404(db, post_data.project_id)
    _check_editor(db, post_data.editor_id)

    values = post_data.model_dump(exclude={"analytics"})
    post = PostedContent(
        **values,
        analytics=post_data.analytics.model_dump(exclude_none=True)
    )

    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info(f"✅ Post created: {post.id} ({post.client} / {post.project_title})")
    return post


@router.post(
    "/from-project/{project_id}",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_post_from_project(
    project_id: int,
    db: Session = Depends(get_db)
):
    """
    Start a draft post from a project.

    Copies the project's title, client and content type; uses its first
    platform and today's date for both scheduled and posted dates.

    Raises:
        404: Project not found
        409: Project has not been delivered yet
    """
    project = get_project_or_404(db, project_id)
    current = workflow.normalize_status(project.status)

    if current != ProjectStatus.FINAL_DELIVERED:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Posts can only be created from delivered projects (current status: {current.value})"
        )

    today = date.today()

    post = PostedContent(
        project_id=project.id,
        project_title=project.title,
        client=project.client,
        content_form=project.type,
        content_bucket="",
        number_of_content=1,
        number_of_likes=0,
        platform=(project.platforms or [""])[0],
        scheduled_date=today,
        posted_date=today,
        status=PostStatus.DRAFT.value,
        analytics={}
    )

    db.add(post)
    db.commit()
    db.refresh(post)

    logger.info(f"✅ Draft post {post.id} created from project {project_id}")
    return post


# =============================================================================
# LIST POSTS
# =============================================================================

@router.get("", response_model=PostListResponse)
async def list_posts(
    status: Optional[PostStatus] = Query(None, description="Filter by post status"),
    client: Optional[str] = Query(None, description="Filter by client"),
    project_id: Optional[int] = Query(None, description="Filter by project"),
    pagination: PaginationParams = Depends(),
    db: Session = Depends(get_db)
):
    """List posts, latest scheduled date first"""
    query = db.query(PostedContent)

    if status:
        query = query.filter(PostedContent.status == status.value)
    if client:
        query = query.filter(PostedContent.client == client)
    if project_id is not None:
        query = query.filter(PostedContent.project_id == project_id)

    total = query.count()

    posts = query.order_by(PostedContent.scheduled_date.desc(), PostedContent.id.desc())\
                 .offset(pagination.skip)\
                 .limit(pagination.limit)\
                 .all()

    return PostListResponse(posts=posts, total=total)


# =============================================================================
# GET / UPDATE / DELETE
# =============================================================================

@router.get("/{post_id}", response_model=PostResponse)
async def get_post(
    post_id: int,
    db: Session = Depends(get_db)
):
    return get_post_or_404(db, post_id)


@router.patch("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: int,
    post_data: PostUpdate,
    db: Session = Depends(get_db)
):
    """Edit a post in place (partial update)"""
    post = get_post_or_404(db, post_id)

    update_data = post_data.model_dump(exclude_unset=True)
    if "editor_id" in update_data:
        _check_editor(db, update_data["editor_id"])
    if "analytics" in update_data:
        analytics = update_data["analytics"] or {}
        update_data["analytics"] = {k: v for k, v in analytics.items() if v is not None}

    for field, value in update_data.items():
        setattr(post, field, value)

    db.commit()
    db.refresh(post)

    logger.info(f"✅ Post {post_id} updated")
    return post


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: int,
    db: Session = Depends(get_db)
):
    post = get_post_or_404(db, post_id)

    db.delete(post)
    db.commit()

    logger.info(f"✅ Post {post_id} deleted")
    return None


@router.delete("", response_model=ClearPostsResponse)
async def clear_posts(db: Session = Depends(get_db)):
    """Remove every post from the calendar"""
    deleted = db.query(PostedContent).delete(synchronize_session=False)
    db.commit()

    logger.warning(f"🗑️  Cleared all posts ({deleted} removed)")
    return ClearPostsResponse(deleted=deleted)

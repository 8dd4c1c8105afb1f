"""
Editor Endpoints

The people who produce and post content. Posts may reference an editor;
deleting an editor clears that reference.
"""

from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
import logging

from contenthub.dependencies import get_db
from contenthub.models.editor import Editor
from contenthub.schemas.editor import (
    EditorCreate,
    EditorUpdate,
    EditorResponse,
    EditorListResponse
)

logger = logging.getLogger(__name__)
router = APIRouter()


def get_editor_or_404(db: Session, editor_id: int) -> Editor:
    editor = db.query(Editor).filter(Editor.id == editor_id).first()

    if not editor:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Editor not found"
        )

    return editor


@router.post("", response_model=EditorResponse, status_code=status.HTTP_201_CREATED)
async def create_editor(
    editor_data: EditorCreate,
    db: Session = Depends(get_db)
):
    editor = Editor(**editor_data.model_dump())

    db.add(editor)
    db.commit()
    db.refresh(editor)

    logger.info(f"✅ Editor created: {editor.id} ({editor.name})")
    return editor


@router.get("", response_model=EditorListResponse)
async def list_editors(
    active_only: bool = Query(False, description="Hide inactive editors"),
    db: Session = Depends(get_db)
):
    query = db.query(Editor)
    if active_only:
        query = query.filter(Editor.is_active.is_(True))

    editors = query.order_by(Editor.name.asc()).all()
    return EditorListResponse(editors=editors, total=len(editors))


@router.get("/{editor_id}", response_model=EditorResponse)
async def get_editor(
    editor_id: int,
    db: Session = Depends(get_db)
):
    return get_editor_or_404(db, editor_id)


@router.patch("/{editor_id}", response_model=EditorResponse)
async def update_editor(
    editor_id: int,
    editor_data: EditorUpdate,
    db: Session = Depends(get_db)
):
    editor = get_editor_or_404(db, editor_id)

    for field, value in editor_data.model_dump(exclude_unset=True).items():
        if value is None and field in ("name", "is_active"):
            continue
        setattr(editor, field, value)

    db.commit()
    db.refresh(editor)

    logger.info(f"✅ Editor {editor_id} updated")
    return editor


@router.delete("/{editor_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_editor(
    editor_id: int,
    db: Session = Depends(get_db)
):
    """Delete an editor; their posts stay, unassigned"""
    editor = get_editor_or_404(db, editor_id)

    db.delete(editor)
    db.commit()

    logger.info(f"✅ Editor {editor_id} deleted")
    return None

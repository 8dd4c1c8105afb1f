"""
Project File Endpoints

Versioned file attachments stored in S3:
- upload: one or more files, processed one at a time in the given order
- versions: every upload of a filename within a project
- archive: all of a project's files as a single ZIP
- delete: removes the stored object, then the record

Re-uploading a filename creates a new version (1.0 -> 1.1 -> ...) and
moves the "latest" flag to it; older versions are kept.
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, Response, UploadFile, status
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List, Optional
from datetime import datetime, timezone
import io
import logging
import re
import secrets
import string
import time
import zipfile

from contenthub.config import settings
from contenthub.dependencies import get_db, get_project_or_404, get_storage
from contenthub.models.file import ProjectFile
from contenthub.models.project import Project
from contenthub.schemas.file import (
    ProjectFileResponse,
    FileListResponse,
    FileUploadResponse,
    FileDownloadResponse,
)
from contenthub.services.storage import S3Service, StorageError, build_file_key
from contenthub.services.versioning import resolve_version, version_history

logger = logging.getLogger(__name__)
router = APIRouter()

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_file_id() -> str:
    """Millisecond timestamp followed by 9 random base-36 characters"""
    suffix = ''.join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{int(time.time() * 1000)}{suffix}"


def get_file_or_404(db: Session, file_id: str) -> ProjectFile:
    project_file = db.query(ProjectFile).filter(ProjectFile.id == file_id).first()

    if not project_file:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File not found"
        )

    return project_file


def attach_file_version(db: Session, new_file: ProjectFile) -> ProjectFile:
    """
    Version `new_file` against its same-named siblings and insert it.

    The siblings are row-locked (Postgres) while resolving; clearing their
    is_latest flags and inserting the new latest record commit together, so
    no reader ever sees zero or two latest versions of a name.
    """
    siblings = db.query(ProjectFile).filter(
        ProjectFile.project_id == new_file.project_id,
        ProjectFile.name == new_file.name
    ).with_for_update().all()

    resolution = resolve_version(siblings, new_file.name)

    for sibling in siblings:
        sibling.is_latest = False

    new_file.version = resolution.version
    new_file.previous_version_id = resolution.previous_version_id
    new_file.is_latest = True

    db.add(new_file)
    db.commit()
    db.refresh(new_file)
    return new_file


def store_upload(
    db: Session,
    storage: S3Service,
    project: Project,
    file_name: str,
    body: bytes,
    content_type: Optional[str],
    uploaded_by: str
) -> ProjectFile:
    """Put one file in S3 and record it as the latest version of its name"""
    file_id = generate_file_id()
    s3_key = build_file_key(project.id, file_id, file_name)

    url = storage.put(s3_key, body, content_type)

    new_file = ProjectFile(
        id=file_id,
        project_id=project.id,
        name=file_name,
        size=len(body),
        type=content_type,
        s3_key=s3_key,
        url=url,
        upload_date=datetime.now(timezone.utc),
        uploaded_by=uploaded_by,
    )

    try:
        return attach_file_version(db, new_file)
    except SQLAlchemyError:
        db.rollback()
        logger.error(f"Failed to record {file_name} for project {project.id}, removing uploaded object")
        try:
            storage.delete(s3_key)
        except StorageError as e:
            logger.warning(f"⚠️  Orphaned object {s3_key} left behind: {e}")
        raise


def archive_name(project: Project) -> str:
    client = re.sub(r'[^a-zA-Z0-9]', '_', project.client)
    title = re.sub(r'[^a-zA-Z0-9]', '_', project.title)
    return f"{client}_{title}_Files.zip"


# =============================================================================
# UPLOAD FILES
# =============================================================================

@router.post(
    "/project/{project_id}",
    response_model=FileUploadResponse,
    status_code=status.HTTP_201_CREATED
)
async def upload_files(
    project_id: int,
    response: Response,
    files: List[UploadFile] = File(..., description="Files to attach, processed in order"),
    uploaded_by: Optional[str] = Form(None),
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage)
):
    """
    Upload files to a project.

    Files are uploaded sequentially. A failure stops the batch; files that
    were already stored stay committed and the response is 207 with the
    error. If the very first file fails, the error is returned as is.

    Raises:
        404: Project not found
    """
    project = get_project_or_404(db, project_id)
    uploader = uploaded_by or settings.DEFAULT_UPLOADER

    logger.info(f"Uploading {len(files)} file(s) to project {project_id}")

    stored: List[ProjectFile] = []
    error: Optional[str] = None

    for upload in files:
        body = await upload.read()
        try:
            record = store_upload(
                db, storage, project,
                file_name=upload.filename,
                body=body,
                content_type=upload.content_type,
                uploaded_by=uploader
            )
        except (StorageError, SQLAlchemyError) as e:
            logger.error(f"❌ Upload of {upload.filename} failed after {len(stored)} file(s): {e}")
            if not stored:
                raise
            error = f"{upload.filename}: {str(e)}"
            break
        stored.append(record)
        logger.info(f"✅ {record.name} v{record.version} stored as {record.id}")

    if len(stored) == 1:
        project.last_activity = f"{stored[0].name} v{stored[0].version} uploaded"
    else:
        project.last_activity = f"{len(stored)} files uploaded"
    db.commit()

    if error:
        response.status_code = status.HTTP_207_MULTI_STATUS

    return FileUploadResponse(
        files=[ProjectFileResponse.model_validate(f) for f in stored],
        uploaded=len(stored),
        requested=len(files),
        error=error
    )


# =============================================================================
# LIST / HISTORY / ARCHIVE
# =============================================================================

@router.get("/project/{project_id}", response_model=FileListResponse)
async def list_project_files(
    project_id: int,
    latest_only: bool = Query(False, description="Only the latest version of each filename"),
    db: Session = Depends(get_db)
):
    """List a project's files in upload order"""
    get_project_or_404(db, project_id)

    query = db.query(ProjectFile).filter(ProjectFile.project_id == project_id)
    if latest_only:
        query = query.filter(ProjectFile.is_latest.is_(True))

    files = query.order_by(ProjectFile.upload_date.asc(), ProjectFile.id.asc()).all()

    return FileListResponse(files=files, total=len(files))


@router.get("/project/{project_id}/versions", response_model=FileListResponse)
async def list_file_versions(
    project_id: int,
    name: str = Query(..., min_length=1, description="Exact filename"),
    db: Session = Depends(get_db)
):
    """All versions of one filename, newest version first"""
    get_project_or_404(db, project_id)

    files = db.query(ProjectFile).filter(
        ProjectFile.project_id == project_id,
        ProjectFile.name == name
    ).all()

    history = version_history(files, name)
    return FileListResponse(files=history, total=len(history))


@router.get("/project/{project_id}/archive")
async def download_project_archive(
    project_id: int,
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage)
):
    """
    Download every file of a project as one ZIP.

    Entries live in a "{client} - {title}" folder and are numbered in
    upload order. Files that cannot be fetched are skipped.

    Raises:
        404: Project not found or has no files
    """
    project = get_project_or_404(db, project_id)

    if not project.files:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No files to download in this project"
        )

    folder = f"{project.client} - {project.title}"
    buffer = io.BytesIO()
    added = 0

    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for index, project_file in enumerate(project.files, start=1):
            if not project_file.s3_key:
                logger.warning(f"File {project_file.id} has no stored object, skipping")
                continue
            try:
                content = storage.get(project_file.s3_key)
            except StorageError as e:
                logger.warning(f"Failed to download file {project_file.name}: {e}")
                continue
            archive.writestr(f"{folder}/{index}_{project_file.name}", content)
            added += 1

    logger.info(f"Archived {added}/{len(project.files)} files of project {project_id}")
    buffer.seek(0)

    return StreamingResponse(
        buffer,
        media_type="application/zip",
        headers={"Content-Disposition": f'attachment; filename="{archive_name(project)}"'}
    )


# =============================================================================
# SINGLE FILE
# =============================================================================

@router.get("/{file_id}", response_model=ProjectFileResponse)
async def get_file(
    file_id: str,
    db: Session = Depends(get_db)
):
    """Get file metadata by ID"""
    return get_file_or_404(db, file_id)


@router.get("/{file_id}/download-url", response_model=FileDownloadResponse)
async def generate_download_url(
    file_id: str,
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage)
):
    """Generate a presigned URL for downloading a file from S3"""
    project_file = get_file_or_404(db, file_id)

    if not project_file.s3_key:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="File has no stored object"
        )

    download_url = storage.generate_download_presigned_url(project_file.s3_key)

    return FileDownloadResponse(
        file_id=project_file.id,
        name=project_file.name,
        presigned_url=download_url,
        expires_in=settings.PRESIGNED_URL_EXPIRES
    )


@router.delete("/{file_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_file(
    file_id: str,
    db: Session = Depends(get_db),
    storage: S3Service = Depends(get_storage)
):
    """
    Delete a file from both S3 and the database.

    The stored object goes first; if that fails the record is kept. Other
    versions of the same name are left untouched, even when the deleted
    file was the latest one.
    """
    project_file = get_file_or_404(db, file_id)
    project = project_file.project
    label = f"{project_file.name} v{project_file.version}"

    if project_file.s3_key:
        storage.delete(project_file.s3_key)

    db.delete(project_file)
    project.last_activity = "File deleted"
    db.commit()

    logger.info(f"✅ File {file_id} ({label}) deleted")
    return None

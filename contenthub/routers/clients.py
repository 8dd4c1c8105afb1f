"""
Client Management Endpoints

Provides CRUD operations for client contacts (name, email, company).
Projects refer to clients by company name only, so deleting a client
leaves its projects in place.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
import logging

from contenthub.dependencies import get_db, PaginationParams
from contenthub.models.client import Client
from contenthub.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientListResponse
)

logger = logging.getLogger(__name__)
router = APIRouter()


def get_client_or_404(db: Session, client_id: int) -> Client:
    client = db.query(Client).filter(Client.id == client_id).first()

    if not client:
        logger.warning(f"Client {client_id} not found")
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Client not found"
        )

    return client


# =============================================================================
# CREATE CLIENT
# =============================================================================

@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
async def create_client(
    client_data: ClientCreate,
    db: Session = Depends(get_db)
):
    """
    Create a new client.

    Args:
        client_data: Name, email and company are required

    Returns:
        Created client details
    """
    logger.info(f"Creating client '{client_data.name}' ({client_data.company})")

    new_client = Client(
        name=client_data.name,
        email=client_data.email,
        company=client_data.company,
        phone=client_data.phone
    )

    db.add(new_client)
    db.commit()
    db.refresh(new_client)

    logger.info(f"✅ Client created: {new_client.id}")
    return new_client


# =============================================================================
# LIST CLIENTS
# =============================================================================

@router.get("", response_model=ClientListResponse)
async def list_clients(
    pagination: PaginationParams = Depends(),
    db: Session = Depends(get_db)
):
    """
    List clients, newest first.

    Supports pagination via query parameters:
    - page: Page number (default: 1)
    - page_size: Items per page (default: 20, max: 100)
    """
    query = db.query(Client)

    total = query.count()

    clients = query.order_by(Client.created_at.desc(), Client.id.desc())\
                   .offset(pagination.skip)\
                   .limit(pagination.limit)\
                   .all()

    logger.info(f"Found {total} clients, returning page {pagination.page}")

    return ClientListResponse(
        clients=clients,
        total=total
    )


# =============================================================================
# GET SINGLE CLIENT
# =============================================================================

@router.get("/{client_id}", response_model=ClientResponse)
async def get_client(
    client_id: int,
    db: Session = Depends(get_db)
):
    """
    Get a specific client by ID.

    Raises:
        404: Client not found
    """
    return get_client_or_404(db, client_id)


# =============================================================================
# UPDATE CLIENT
# =============================================================================

@router.patch("/{client_id}", response_model=ClientResponse)
async def update_client(
    client_id: int,
    client_data: ClientUpdate,
    db: Session = Depends(get_db)
):
    """
    Update a client's information (partial update).

    Raises:
        404: Client not found
    """
    logger.info(f"Updating client {client_id}")

    client = get_client_or_404(db, client_id)

    update_data = client_data.model_dump(exclude_unset=True)
    for field, value in update_data.items():
        if value is None and field != "phone":
            continue
        setattr(client, field, value)

    db.commit()
    db.refresh(client)

    logger.info(f"✅ Client {client_id} updated")
    return client


# =============================================================================
# DELETE CLIENT
# =============================================================================

@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_client(
    client_id: int,
    db: Session = Depends(get_db)
):
    """
    Delete a client.

    Projects naming this client's company are not touched.

    Raises:
        404: Client not found
    """
    logger.info(f"Deleting client {client_id}")

    client = get_client_or_404(db, client_id)

    db.delete(client)
    db.commit()

    logger.info(f"✅ Client {client_id} deleted")
    return None

"""Client router - API endpoints for clients and activities."""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from workhours.database import get_database
from workhours.models.client import Client, ClientCreate, ClientKind, ClientUpdate
from workhours.routers.auth import get_current_user_id
from workhours.services.client_service import ClientService


router = APIRouter(prefix="/clients", tags=["clients"])


@router.post("", response_model=Client, status_code=status.HTTP_201_CREATED)
async def create_client(
    client: ClientCreate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Create a new client or activity."""
    service = ClientService(db)
    return await service.create_client(user_id=user_id, client_create=client)


@router.get("", response_model=list[Client])
async def list_clients(
    kind: Optional[ClientKind] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    List clients for the authenticated user.

    - Optional filter: kind (client or activity)
    """
    service = ClientService(db)
    return await service.list_clients(user_id=user_id, kind=kind)


@router.get("/{client_id}", response_model=Client)
async def get_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Get a client by ID."""
    service = ClientService(db)
    try:
        return await service.get_client(user_id=user_id, client_id=client_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{client_id}", response_model=Client)
async def update_client(
    client_id: str,
    client_update: ClientUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Update a client."""
    service = ClientService(db)
    try:
        return await service.update_client(
            user_id=user_id,
            client_id=client_id,
            client_update=client_update,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{client_id}")
async def delete_client(
    client_id: str,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """
    Delete a client.

    - Existing work entries keep the client's name
    """
    service = ClientService(db)
    try:
        return await service.delete_client(user_id=user_id, client_id=client_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

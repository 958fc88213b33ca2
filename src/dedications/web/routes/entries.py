"""Dedication entry API routes.

Endpoints:
    GET    /entries       - List entries (optional ?status= filter)
    GET    /entries/{id}  - Get one entry
    POST   /entries       - Create an entry
    PATCH  /entries/{id}  - Update status and/or assigned_date
    DELETE /entries/{id}  - Delete an entry
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from dedications.schemas import CreateEntryInput, UpdateEntryInput
from dedications.service import EntryService

router = APIRouter()


def get_service(request: Request) -> EntryService:
    """Return the service built for this app in the lifespan."""
    return request.app.state.entry_service


@router.get("/entries")
async def list_entries(
    status: Optional[str] = Query(None, description="Only entries with this status"),
    service: EntryService = Depends(get_service),
) -> dict:
    """List entries, newest first."""
    entries = service.list_entries(status)
    return {"entries": [e.to_dict() for e in entries]}


@router.get("/entries/{entry_id}")
async def get_entry(entry_id: int, service: EntryService = Depends(get_service)) -> dict:
    """Get an entry by ID."""
    entry = service.get_entry(entry_id)
    return {"entry": entry.to_dict()}


@router.post("/entries", status_code=201)
async def create_entry(
    payload: Optional[CreateEntryInput] = None,
    service: EntryService = Depends(get_service),
) -> dict:
    """Create a new pending entry."""
    entry = service.create_entry(payload or CreateEntryInput())
    return {"entry": entry.to_dict()}


@router.patch("/entries/{entry_id}")
async def update_entry(
    entry_id: int,
    payload: Optional[UpdateEntryInput] = None,
    service: EntryService = Depends(get_service),
) -> dict:
    """Change an entry's status and/or assigned date."""
    entry = service.update_entry(entry_id, payload or UpdateEntryInput())
    return {"entry": entry.to_dict()}


@router.delete("/entries/{entry_id}")
async def delete_entry(entry_id: int, service: EntryService = Depends(get_service)) -> dict:
    """Delete an entry permanently."""
    service.delete_entry(entry_id)
    return {"message": "Entry deleted successfully"}

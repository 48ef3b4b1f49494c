import logging

from fastapi import APIRouter, Depends, HTTPException

from ..schemas.complaint import (
    ComplaintCreate,
    ComplaintCreated,
    ComplaintList,
    ComplaintOut,
    ComplaintStatusUpdate,
)
from ..services.complaints import ComplaintService
from ..services.errors import ConcurrentUpdateError, NotFoundError, StoreError
from ..services.kv_store import KVStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["complaints"])


def get_complaint_service(store: KVStore = Depends(get_store)) -> ComplaintService:
    return ComplaintService(store)


@router.post("/complaint", response_model=ComplaintCreated)
def create_complaint(payload: ComplaintCreate,
                     service: ComplaintService = Depends(get_complaint_service)):
    try:
        complaint = service.create_complaint(payload)
    except StoreError as e:
        logger.error(f"Error saving complaint: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to save complaint: {e}")
    return ComplaintCreated(complaint_id=complaint["complaintId"], complaint=complaint)


@router.get("/complaints", response_model=ComplaintList)
def list_complaints(service: ComplaintService = Depends(get_complaint_service)):
    try:
        complaints = service.list_complaints()
    except StoreError as e:
        logger.error(f"Error retrieving complaints: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve complaints: {e}")
    return ComplaintList(complaints=complaints)


@router.get("/complaint/{complaint_id}", response_model=ComplaintOut)
def get_complaint(complaint_id: str, service: ComplaintService = Depends(get_complaint_service)):
    try:
        complaint = service.get_complaint(complaint_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StoreError as e:
        logger.error(f"Error retrieving complaint {complaint_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to retrieve complaint: {e}")
    return ComplaintOut(complaint=complaint)


@router.put("/complaint/{complaint_id}/status", response_model=ComplaintOut)
def update_complaint_status(complaint_id: str, payload: ComplaintStatusUpdate,
                            service: ComplaintService = Depends(get_complaint_service)):
    try:
        complaint = service.update_status(complaint_id, payload.status, payload.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrentUpdateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StoreError as e:
        logger.error(f"Error updating complaint status {complaint_id}: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to update complaint status: {e}")
    return ComplaintOut(complaint=complaint)

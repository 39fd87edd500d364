from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List

from ..schemas import ConsultationCreate, ConsultationUpdate, ConsultationRecord
from ..storage import Storage, get_storage
from .params import RecordId

router = APIRouter(prefix="/consultations", tags=["consultations"])


@router.get("", response_model=List[ConsultationRecord])
def list_consultations(storage: Storage = Depends(get_storage)):
    """All consultations, latest appointment first."""
    return storage.list_consultations()


@router.get("/today", response_model=List[ConsultationRecord])
def list_today_consultations(storage: Storage = Depends(get_storage)):
    """Today's schedule in server-local time, earliest appointment first."""
    return storage.list_today_consultations()


@router.get("/patient/{patient_id}", response_model=List[ConsultationRecord])
def list_patient_consultations(patient_id: RecordId, storage: Storage = Depends(get_storage)):
    return storage.list_consultations_by_patient(patient_id)


@router.get("/{consultation_id}", response_model=ConsultationRecord)
def get_consultation(consultation_id: RecordId, storage: Storage = Depends(get_storage)):
    consultation = storage.get_consultation(consultation_id)
    if not consultation:
        raise HTTPException(status_code=404, detail="Consultation not found")
    return consultation


@router.post("", response_model=ConsultationRecord, status_code=status.HTTP_201_CREATED)
def create_consultation(
    consultation_in: ConsultationCreate,
    storage: Storage = Depends(get_storage),
):
    return storage.create_consultation(consultation_in)


@router.put("/{consultation_id}", response_model=ConsultationRecord)
def update_consultation(
    consultation_id: RecordId,
    consultation_in: ConsultationUpdate,
    storage: Storage = Depends(get_storage),
):
    consultation = storage.update_consultation(consultation_id, consultation_in)
    if not consultation:
        raise HTTPException(status_code=404, detail="Consultation not found")
    return consultation


@router.delete("/{consultation_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_consultation(consultation_id: RecordId, storage: Storage = Depends(get_storage)):
    if not storage.delete_consultation(consultation_id):
        raise HTTPException(status_code=404, detail="Consultation not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

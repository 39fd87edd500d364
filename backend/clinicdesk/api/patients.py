from fastapi import APIRouter, Depends, HTTPException, Response, status
from typing import List, Optional

from ..schemas import PatientCreate, PatientUpdate, PatientRecord
from ..storage import Storage, get_storage
from .params import RecordId

router = APIRouter(prefix="/patients", tags=["patients"])


@router.get("", response_model=List[PatientRecord])
def list_patients(storage: Storage = Depends(get_storage)):
    """All patients, newest registrations first."""
    return storage.list_patients()


@router.get("/search", response_model=List[PatientRecord])
def search_patients(q: Optional[str] = None, storage: Storage = Depends(get_storage)):
    """Search patients by name, email or phone number."""
    query = (q or "").strip()
    if not query:
        raise HTTPException(status_code=400, detail="Query parameter 'q' is required")
    return storage.search_patients(query)


@router.get("/{patient_id}", response_model=PatientRecord)
def get_patient(patient_id: RecordId, storage: Storage = Depends(get_storage)):
    patient = storage.get_patient(patient_id)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.post("", response_model=PatientRecord, status_code=status.HTTP_201_CREATED)
def create_patient(patient_in: PatientCreate, storage: Storage = Depends(get_storage)):
    return storage.create_patient(patient_in)


@router.put("/{patient_id}", response_model=PatientRecord)
def update_patient(
    patient_id: RecordId,
    patient_in: PatientUpdate,
    storage: Storage = Depends(get_storage),
):
    """Partial update; fields absent from the body keep their current value."""
    patient = storage.update_patient(patient_id, patient_in)
    if not patient:
        raise HTTPException(status_code=404, detail="Patient not found")
    return patient


@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_patient(patient_id: RecordId, storage: Storage = Depends(get_storage)):
    """Delete a patient together with all of their consultations."""
    if not storage.delete_patient(patient_id):
        raise HTTPException(status_code=404, detail="Patient not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)

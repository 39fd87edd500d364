from .patient import PatientCreate, PatientUpdate, PatientRecord
from .consultation import ConsultationCreate, ConsultationUpdate, ConsultationRecord

__all__ = [
    "PatientCreate",
    "PatientUpdate",
    "PatientRecord",
    "ConsultationCreate",
    "ConsultationUpdate",
    "ConsultationRecord",
]

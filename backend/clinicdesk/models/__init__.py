from .base import Base
from .patient import Patient
from .consultation import Consultation

__all__ = ["Base", "Patient", "Consultation"]

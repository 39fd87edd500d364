from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class ConsultationStatus:
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    ALL = [SCHEDULED, IN_PROGRESS, COMPLETED, CANCELLED]


class Consultation(Base, TimestampMixin):
    __tablename__ = "consultations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    patient_id = Column(Integer, ForeignKey("patients.id"), nullable=False, index=True)
    appointment_date = Column(DateTime, nullable=False, index=True)  # server-local time
    consultation_type = Column(String(100), nullable=False)  # e.g. "Routine Checkup"
    status = Column(String(20), nullable=False, default=ConsultationStatus.SCHEDULED)

    notes = Column(Text, nullable=True)
    diagnosis = Column(Text, nullable=True)
    treatment = Column(Text, nullable=True)
    prescriptions = Column(Text, nullable=True)
    follow_up_date = Column(Date, nullable=True)

    patient = relationship("Patient", back_populates="consultations")

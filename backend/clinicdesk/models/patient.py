from sqlalchemy import Column, Integer, String, Date, Text
from sqlalchemy.orm import relationship
from .base import Base, TimestampMixin


class Gender:
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"

    ALL = [MALE, FEMALE, OTHER]


class Patient(Base, TimestampMixin):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    gender = Column(String(10), nullable=False)

    # Contact
    phone_number = Column(String(50), nullable=False)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)

    # Medical summary, free text
    blood_type = Column(String(5), nullable=True)  # A+, O-, AB+ ...
    allergies = Column(Text, nullable=True)
    current_medications = Column(Text, nullable=True)
    emergency_contact = Column(Text, nullable=True)

    insurance_provider = Column(String(200), nullable=True)
    policy_number = Column(String(100), nullable=True)

    # Cascades are issued explicitly by the storage layer
    consultations = relationship("Consultation", back_populates="patient", passive_deletes=True)

"""Storage contract tests, run against both the in-memory and the database backend."""
from datetime import datetime

from clinicdesk.schemas import ConsultationCreate, ConsultationUpdate, PatientUpdate

NOW = datetime(2026, 10, 19, 10, 30)


class TestPatientStorage:
    def test_create_assigns_increasing_ids_and_timestamp(self, make_patient):
        first = make_patient()
        second = make_patient(first_name="Bob")
        assert first.id > 0
        assert second.id > first.id
        assert isinstance(first.created_at, datetime)

    def test_get_returns_stored_record(self, storage, make_patient):
        created = make_patient(email="ann@example.com")
        fetched = storage.get_patient(created.id)
        assert fetched == created

    def test_get_unknown_returns_none(self, storage):
        assert storage.get_patient(999) is None

    def test_list_is_newest_first(self, storage, make_patient):
        older = make_patient(first_name="Older")
        newer = make_patient(first_name="Newer")
        assert [p.id for p in storage.list_patients()] == [newer.id, older.id]

    def test_update_merges_only_sent_fields(self, storage, make_patient):
        patient = make_patient(address="1 Main St")
        updated = storage.update_patient(
            patient.id, PatientUpdate.model_validate({"email": "ann@example.com"})
        )
        assert updated.email == "ann@example.com"
        assert updated.address == "1 Main St"
        assert updated.first_name == "Ann"
        assert updated.id == patient.id
        assert updated.created_at == patient.created_at
        assert storage.get_patient(patient.id) == updated

    def test_update_unknown_returns_none(self, storage):
        assert storage.update_patient(999, PatientUpdate.model_validate({"email": "x@y.z"})) is None

    def test_delete_unknown_returns_false(self, storage, make_patient):
        patient = make_patient()
        assert storage.delete_patient(999) is False
        assert storage.get_patient(patient.id) is not None

    def test_delete_unknown_leaves_dangling_consultations(self, mem_storage):
        """The memory store does not check patient ids, so orphans can exist."""
        orphan = mem_storage.create_consultation(
            ConsultationCreate(
                patient_id=99,
                appointment_date=datetime(2026, 10, 19, 9, 0),
                consultation_type="Follow-up",
                status="scheduled",
            )
        )
        assert mem_storage.delete_patient(99) is False
        assert mem_storage.get_consultation(orphan.id) == orphan

    def test_delete_cascades_to_consultations(self, storage, make_patient, make_consultation):
        patient = make_patient()
        other = make_patient(first_name="Bob")
        doomed = [
            make_consultation(patient.id, datetime(2026, 10, 1, 9, 0)),
            make_consultation(patient.id, datetime(2026, 10, 2, 9, 0)),
        ]
        survivor = make_consultation(other.id, datetime(2026, 10, 3, 9, 0))

        assert storage.delete_patient(patient.id) is True

        assert storage.get_patient(patient.id) is None
        for consultation in doomed:
            assert storage.get_consultation(consultation.id) is None
        assert storage.list_consultations_by_patient(patient.id) == []
        assert storage.get_consultation(survivor.id) == survivor


class TestPatientSearch:
    def test_name_match_is_case_insensitive(self, storage, make_patient):
        smith = make_patient(last_name="Smith", phone_number="111")
        hyphenated = make_patient(last_name="smith-Jones", phone_number="222")
        make_patient(last_name="Brown", phone_number="333")

        found = {p.id for p in storage.search_patients("smith")}
        assert found == {smith.id, hyphenated.id}

    def test_first_name_and_email_match(self, storage, make_patient):
        by_first = make_patient(first_name="Marguerite", phone_number="111")
        by_email = make_patient(email="Contact@Clinic.example", phone_number="222")

        assert [p.id for p in storage.search_patients("MARG")] == [by_first.id]
        assert [p.id for p in storage.search_patients("clinic.example")] == [by_email.id]

    def test_phone_matches_literal_substring(self, storage, make_patient):
        dashed = make_patient(last_name="A", phone_number="555-1234")
        plain = make_patient(last_name="B", phone_number="(020) 5551 999")
        make_patient(last_name="C", phone_number="5-5-5")

        found = {p.id for p in storage.search_patients("555")}
        assert found == {dashed.id, plain.id}

    def test_phone_match_is_case_sensitive(self, storage, make_patient):
        lettered = make_patient(first_name="Rae", last_name="Lane", phone_number="555 X12")
        assert storage.search_patients("x") == []
        assert [p.id for p in storage.search_patients("X1")] == [lettered.id]

    def test_results_are_newest_first(self, storage, make_patient):
        older = make_patient(last_name="Smith", phone_number="111")
        newer = make_patient(last_name="Smithers", phone_number="222")
        assert [p.id for p in storage.search_patients("smith")] == [newer.id, older.id]

    def test_no_match_returns_empty_list(self, storage, make_patient):
        make_patient()
        assert storage.search_patients("zzz") == []


class TestConsultationStorage:
    def test_create_and_get(self, storage, make_patient, make_consultation):
        patient = make_patient()
        consultation = make_consultation(patient.id, datetime(2026, 10, 19, 9, 0), notes="Cough")
        assert consultation.id > 0
        assert consultation.created_at is not None
        assert storage.get_consultation(consultation.id) == consultation

    def test_list_is_latest_appointment_first(self, storage, make_patient, make_consultation):
        patient = make_patient()
        early = make_consultation(patient.id, datetime(2026, 1, 1, 9, 0))
        late = make_consultation(patient.id, datetime(2026, 6, 1, 9, 0))
        middle = make_consultation(patient.id, datetime(2026, 3, 1, 9, 0))
        assert [c.id for c in storage.list_consultations()] == [late.id, middle.id, early.id]

    def test_list_by_patient_filters_and_orders(self, storage, make_patient, make_consultation):
        ann = make_patient()
        bob = make_patient(first_name="Bob")
        first = make_consultation(ann.id, datetime(2026, 1, 1, 9, 0))
        make_consultation(bob.id, datetime(2026, 2, 1, 9, 0))
        second = make_consultation(ann.id, datetime(2026, 3, 1, 9, 0))

        assert [c.id for c in storage.list_consultations_by_patient(ann.id)] == [second.id, first.id]

    def test_update_merges_only_sent_fields(self, storage, make_patient, make_consultation):
        patient = make_patient()
        consultation = make_consultation(patient.id, datetime(2026, 10, 19, 9, 0), notes="Cough")
        updated = storage.update_consultation(
            consultation.id,
            ConsultationUpdate.model_validate({"status": "completed", "diagnosis": "Flu"}),
        )
        assert updated.status == "completed"
        assert updated.diagnosis == "Flu"
        assert updated.notes == "Cough"
        assert updated.appointment_date == consultation.appointment_date
        assert updated.created_at == consultation.created_at

    def test_update_unknown_returns_none(self, storage):
        update = ConsultationUpdate.model_validate({"status": "completed"})
        assert storage.update_consultation(999, update) is None

    def test_delete_does_not_touch_patient(self, storage, make_patient, make_consultation):
        patient = make_patient()
        consultation = make_consultation(patient.id, datetime(2026, 10, 19, 9, 0))
        assert storage.delete_consultation(consultation.id) is True
        assert storage.get_consultation(consultation.id) is None
        assert storage.get_patient(patient.id) is not None

    def test_delete_unknown_returns_false(self, storage):
        assert storage.delete_consultation(999) is False


class TestTodayWindow:
    def test_only_today_in_ascending_order(self, storage, make_patient, make_consultation):
        patient = make_patient()
        make_consultation(patient.id, datetime(2026, 10, 18, 23, 59, 59))
        afternoon = make_consultation(patient.id, datetime(2026, 10, 19, 15, 0))
        midnight = make_consultation(patient.id, datetime(2026, 10, 19, 0, 0, 0))
        morning = make_consultation(patient.id, datetime(2026, 10, 19, 9, 0))
        make_consultation(patient.id, datetime(2026, 10, 20, 0, 0, 0))

        today = storage.list_today_consultations(now=NOW)
        assert [c.id for c in today] == [midnight.id, morning.id, afternoon.id]

    def test_last_second_of_day_is_included(self, storage, make_patient, make_consultation):
        patient = make_patient()
        late = make_consultation(patient.id, datetime(2026, 10, 19, 23, 59, 59))
        assert [c.id for c in storage.list_today_consultations(now=NOW)] == [late.id]

    def test_empty_day(self, storage, make_patient, make_consultation):
        patient = make_patient()
        make_consultation(patient.id, datetime(2026, 10, 21, 9, 0))
        assert storage.list_today_consultations(now=NOW) == []

    def test_defaults_to_current_day(self, storage, make_patient, make_consultation):
        patient = make_patient()
        now = datetime.now()
        todays = make_consultation(patient.id, now.replace(hour=12, minute=0, second=0, microsecond=0))
        assert [c.id for c in storage.list_today_consultations()] == [todays.id]

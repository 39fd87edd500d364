"""ClinicDesk - patient and consultation management backend."""

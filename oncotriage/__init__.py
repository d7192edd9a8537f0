"""OncoTriage - symptom triage and severity assessment service."""

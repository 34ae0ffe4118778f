"""eventhub: event management backend (FastAPI + SQLAlchemy)."""

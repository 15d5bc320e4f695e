"""API REST de finanzas con FastAPI."""

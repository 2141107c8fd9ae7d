"""HTTP layer: FastAPI application, dependencies and routes."""

"""
Mapsy API package.

Provides the FastAPI application for the Mapsy location widget backend.
The application lives in api.app (`uvicorn api.app:app`).
"""

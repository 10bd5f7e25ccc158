"""
Chatmate API package.

Provides the FastAPI application for the Chatmate widget backend.
The application instance lives in api.app.
"""

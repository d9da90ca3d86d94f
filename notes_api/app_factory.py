"""Entry point for uvicorn/gunicorn (``uvicorn --factory notes_api.app_factory:create_app``)."""
from notes_api.app import create_app, main

__all__ = ["create_app", "main"]

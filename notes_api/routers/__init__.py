"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter that app.py includes. Handlers translate
requests into repository calls and leave error mapping to the app-level
exception handler.
"""

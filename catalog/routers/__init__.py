"""
FastAPI routers grouped by domain.

Each module exposes an APIRouter included by ``catalog.app.create_app``.
Routers run the validation checks, call repositories and translate typed
results into status codes; they hold no business rules of their own.
"""

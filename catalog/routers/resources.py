from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Body, Query, Request, Response
from fastapi.responses import JSONResponse

from catalog.domain.results import NotFound, ValidationError
from catalog.domain.validation import validate_feedback, validate_rating, validate_resource
from catalog.repositories.feedback import FeedbackRepository
from catalog.repositories.ratings import RatingRepository
from catalog.repositories.resources import ResourceRepository

router = APIRouter(prefix="/resources", tags=["resources"])


def _state_attr(request: Request, name: str):
    value = getattr(getattr(request.app, "state", None), name, None)
    if value is None:
        raise RuntimeError(f"{name} not configured")
    return value


def _resources(request: Request) -> ResourceRepository:
    return _state_attr(request, "resources")


def _ratings(request: Request) -> RatingRepository:
    return _state_attr(request, "ratings")


def _feedback(request: Request) -> FeedbackRepository:
    return _state_attr(request, "feedback")


def _fields(payload: Any) -> dict:
    return payload if isinstance(payload, dict) else {}


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _respond(result: Any, status_code: int = 200):
    if isinstance(result, ValidationError):
        return _error(result.reason, 400)
    if isinstance(result, NotFound):
        return _error(result.message, 404)
    if result is True:
        return Response(status_code=204)
    return JSONResponse(result, status_code=status_code)


@router.get("")
def list_resources(
    request: Request,
    type: Optional[str] = Query(None),
    author_id: Optional[str] = Query(None, alias="authorId"),
):
    # Empty query values mean "no filter".
    return _resources(request).list(type=type or None, author_id=author_id or None)


@router.get("/{resource_id}")
def get_resource(resource_id: str, request: Request):
    return _respond(_resources(request).get_by_id(resource_id))


@router.post("")
def create_resource(request: Request, payload: Any = Body(None)):
    checked = validate_resource(payload)
    if isinstance(checked, ValidationError):
        return _respond(checked)
    return _respond(_resources(request).create(checked.value), status_code=201)


@router.put("/{resource_id}")
def update_resource(resource_id: str, request: Request, payload: Any = Body(None)):
    return _respond(_resources(request).update(resource_id, payload))


@router.delete("/{resource_id}")
def delete_resource(resource_id: str, request: Request):
    return _respond(_resources(request).delete(resource_id))


@router.get("/{resource_id}/ratings")
def list_ratings(resource_id: str, request: Request):
    return _ratings(request).list_for_resource(resource_id)


@router.post("/{resource_id}/ratings")
def add_rating(resource_id: str, request: Request, payload: Any = Body(None)):
    body = _fields(payload)
    checked = validate_rating(body.get("ratingValue"))
    if isinstance(checked, ValidationError):
        return _respond(checked)
    rating = _ratings(request).add_for_resource(resource_id, checked.value, body.get("userId"))
    return _respond(rating, status_code=201)


@router.get("/{resource_id}/feedback")
def list_feedback(resource_id: str, request: Request):
    return _feedback(request).list_for_resource(resource_id)


@router.post("/{resource_id}/feedback")
def add_feedback(resource_id: str, request: Request, payload: Any = Body(None)):
    body = _fields(payload)
    checked = validate_feedback(body.get("feedbackText"))
    if isinstance(checked, ValidationError):
        return _respond(checked)
    item = _feedback(request).add_for_resource(resource_id, checked.value, body.get("userId"))
    return _respond(item, status_code=201)


@router.put("/{resource_id}/feedback/{feedback_id}")
def update_feedback(resource_id: str, feedback_id: str, request: Request, payload: Any = Body(None)):
    checked = validate_feedback(_fields(payload).get("feedbackText"))
    if isinstance(checked, ValidationError):
        return _respond(checked)
    return _respond(_feedback(request).update_for_resource(resource_id, feedback_id, checked.value))


@router.delete("/{resource_id}/feedback/{feedback_id}")
def delete_feedback(resource_id: str, feedback_id: str, request: Request):
    return _respond(_feedback(request).delete_for_resource(resource_id, feedback_id))

"""Exercise tracker API routes."""

from typing import Any, Dict, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pymongo.errors import PyMongoError
from models.database import get_database
from schemas import ErrorResponse, ExerciseRequest, NewUserRequest
from services import exercise_service
from services.exercise_service import ExerciseTrackerError
from utils.helpers import MAX_INT64, parse_limit
from utils.logger import setup_logger

logger = setup_logger(__name__)

router = APIRouter(prefix="/api/exercise", tags=["exercise"])


async def read_payload(request: Request) -> Dict[str, Any]:
    """Request body as a dict, from JSON or from form fields."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid JSON body")
        if not isinstance(payload, dict):
            raise HTTPException(status_code=400, detail="Request body must be an object")
        return payload
    
    form = await request.form()
    return dict(form)


def error_payload(message: str) -> Dict[str, str]:
    """In-band error body; sent with a 200 status."""
    return ErrorResponse(error=message).model_dump(by_alias=True)


@router.post("/new-user")
async def create_user(request: Request, database=Depends(get_database)):
    """Register a new user and return its generated userId."""
    payload = NewUserRequest.model_validate(await read_payload(request))
    try:
        user = await exercise_service.register_user(database, payload.username)
        return user.model_dump(by_alias=True)
    except ExerciseTrackerError as e:
        return error_payload(e.message)
    except PyMongoError as e:
        logger.error(f"Error creating user: {e}", exc_info=True)
        return error_payload(str(e))


@router.post("/add")
async def add_exercise(request: Request, database=Depends(get_database)):
    """Store an exercise against an existing user."""
    payload = ExerciseRequest.model_validate(await read_payload(request))
    try:
        exercise = await exercise_service.add_exercise(database, payload)
        return exercise.model_dump(by_alias=True, exclude_none=True)
    except ExerciseTrackerError as e:
        return error_payload(e.message)
    except PyMongoError as e:
        logger.error(f"Error adding exercise for userId {payload.user_id}: {e}", exc_info=True)
        return error_payload(str(e))


@router.get("/users")
async def get_users(database=Depends(get_database)):
    """Get array of all users."""
    try:
        return await exercise_service.list_users(database)
    except PyMongoError as e:
        logger.error(f"Error listing users: {e}", exc_info=True)
        return error_payload(str(e))


@router.get("/log")
async def get_exercise_log(
    user_id: int = Query(..., alias="userId", ge=-MAX_INT64 - 1, le=MAX_INT64, description="User identifier"),
    from_: Optional[str] = Query(None, alias="from", description="Earliest date, YYYY-MM-DD"),
    to: Optional[str] = Query(None, description="Latest date, YYYY-MM-DD"),
    limit: Optional[str] = Query(None, description="Maximum number of entries; blank means no cap"),
    database=Depends(get_database),
):
    """Get a user's exercise log, optionally filtered by date and capped."""
    try:
        max_entries = parse_limit(limit)
    except ValueError:
        raise HTTPException(status_code=400, detail="limit: Input should be a non-negative integer")
    
    try:
        log = await exercise_service.get_exercise_log(database, user_id, from_, to, max_entries)
        return log.model_dump(by_alias=True, exclude_none=True)
    except ExerciseTrackerError as e:
        return error_payload(e.message)
    except PyMongoError as e:
        logger.error(f"Error fetching exercise log for userId {user_id}: {e}", exc_info=True)
        return error_payload(str(e))

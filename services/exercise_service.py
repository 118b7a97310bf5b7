"""User registration, exercise recording and exercise log queries."""

import random
from datetime import datetime
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from config.settings import settings
from models.database import get_exercises_collection, get_users_collection
from schemas import (
    Exercise,
    ExerciseLog,
    ExerciseLogEntry,
    ExerciseRequest,
    ExerciseResponse,
    User,
    UserResponse,
)
from services.log_filter import InvalidDate, resolve_log_filter
from utils.helpers import format_date, parse_date, parse_duration, serialize_document
from utils.logger import setup_logger

logger = setup_logger(__name__)

USER_ID_LIMIT = 100000

USERNAME_TAKEN = "Username already exists"
INVALID_EXERCISE_DATE = "Please enter valid date in format [YYYY-MM-DD]"
INVALID_DURATION = "Please enter numeric duration value in minutes"
UNKNOWN_USER = "User does not exist"
INVALID_LOG_DATE = "Please enter valid date"


class ExerciseTrackerError(Exception):
    """A request that was understood but cannot be fulfilled."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def generate_user_id() -> int:
    """Random user identifier in [0, 100000)."""
    return random.randrange(USER_ID_LIMIT)


async def register_user(database, username: str) -> UserResponse:
    """Register a new user.

    The unique indexes on the users collection decide conflicts. A
    duplicate key on ``username`` means the name is taken; otherwise the
    random ``userId`` collided and another one is drawn.
    """
    users_collection = get_users_collection(database)
    
    for _ in range(settings.user_id_attempts):
        user = User(user_id=generate_user_id(), username=username)
        try:
            await users_collection.insert_one(user.model_dump(by_alias=True))
        except DuplicateKeyError:
            if await users_collection.find_one({"username": username}):
                raise ExerciseTrackerError(USERNAME_TAKEN)
            logger.warning(f"userId {user.user_id} already taken, retrying")
            continue
        
        logger.info(f"Created user {user.username} with userId {user.user_id}")
        return UserResponse(user_id=user.user_id, username=user.username)
    
    raise ExerciseTrackerError("Could not allocate a userId, please try again")


async def list_users(database) -> List[Dict[str, Any]]:
    """Every stored user document."""
    cursor = get_users_collection(database).find({})
    users = await cursor.to_list(length=None)
    return [serialize_document(user) for user in users]


async def find_user(database, user_id: int) -> User:
    """Look up a user, failing if there is none."""
    document = await get_users_collection(database).find_one({"userId": user_id})
    if not document:
        raise ExerciseTrackerError(UNKNOWN_USER)
    return User.model_validate(document)


async def add_exercise(database, request: ExerciseRequest) -> ExerciseResponse:
    """Validate and store an exercise for an existing user."""
    if request.date:
        date = parse_date(request.date)
        if date is None:
            raise ExerciseTrackerError(INVALID_EXERCISE_DATE)
    else:
        date = datetime.now()
    
    duration = parse_duration(request.duration)
    if duration is None:
        raise ExerciseTrackerError(INVALID_DURATION)
    
    user = await find_user(database, request.user_id)
    
    exercise = Exercise(
        user_id=user.user_id,
        description=request.description,
        duration=duration,
        date=date,
    )
    await get_exercises_collection(database).insert_one(exercise.model_dump(by_alias=True))
    logger.info(f"Added exercise for userId {user.user_id} on {format_date(date)}")
    
    return ExerciseResponse(
        user_id=user.user_id,
        username=user.username,
        description=exercise.description,
        duration=exercise.duration,
        date=format_date(exercise.date),
    )


async def get_exercise_log(
    database,
    user_id: int,
    from_: Optional[str] = None,
    to: Optional[str] = None,
    limit: Optional[int] = None,
) -> ExerciseLog:
    """A user's exercises sorted by date, filtered and capped as requested."""
    user = await find_user(database, user_id)
    
    log_filter = resolve_log_filter(from_, to)
    if isinstance(log_filter, InvalidDate):
        raise ExerciseTrackerError(INVALID_LOG_DATE)
    
    cursor = get_exercises_collection(database).find(
        {"userId": user.user_id, **log_filter.query()},
        sort=[("date", ASCENDING)],
        limit=limit or 0,
    )
    exercises = await cursor.to_list(length=None)
    
    entries = [
        ExerciseLogEntry(
            description=exercise.get("description"),
            duration=exercise["duration"],
            date=format_date(exercise["date"]),
        )
        for exercise in exercises
    ]
    
    return ExerciseLog(
        username=user.username,
        user_id=user.user_id,
        count=len(entries),
        exercise_logs=entries,
        **log_filter.response_dates(),
    )

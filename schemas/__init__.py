"""Collection and API schemas."""

from schemas.user import User, NewUserRequest, UserResponse
from schemas.exercise import (
    Exercise,
    ExerciseRequest,
    ExerciseResponse,
    ExerciseLogEntry,
    ExerciseLog,
)
from schemas.error import ErrorResponse

__all__ = [
    "User",
    "NewUserRequest",
    "UserResponse",
    "Exercise",
    "ExerciseRequest",
    "ExerciseResponse",
    "ExerciseLogEntry",
    "ExerciseLog",
    "ErrorResponse",
]

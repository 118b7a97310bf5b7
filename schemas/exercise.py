"""Exercises collection schema."""

from datetime import datetime
from typing import Any, List, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from utils.helpers import MAX_INT64


class Exercise(BaseModel):
    """Exercises collection model."""
    model_config = ConfigDict(populate_by_name=True)
    
    user_id: int = Field(..., alias="userId", description="Owning user identifier")
    description: Optional[str] = Field(None, description="What was done")
    duration: Union[int, float] = Field(..., description="Duration in minutes")
    date: datetime = Field(..., description="Exercise date")


class ExerciseRequest(BaseModel):
    """Payload for adding an exercise.

    ``duration`` and ``date`` stay raw here; they are checked by the
    service so that their errors are reported in the response body.
    """
    model_config = ConfigDict(populate_by_name=True)
    
    user_id: int = Field(..., alias="userId", ge=-MAX_INT64 - 1, le=MAX_INT64, description="Owning user identifier")
    description: Optional[str] = Field(None, description="What was done")
    duration: Any = Field(None, description="Duration in minutes")
    date: Optional[str] = Field(None, description="Exercise date, YYYY-MM-DD")


class ExerciseResponse(BaseModel):
    """Stored exercise as returned to the client."""
    model_config = ConfigDict(populate_by_name=True)
    
    user_id: int = Field(..., alias="userId")
    username: str
    description: Optional[str] = None
    duration: Union[int, float]
    date: str = Field(..., description="D/M/YYYY")


class ExerciseLogEntry(BaseModel):
    """One row of an exercise log."""
    description: Optional[str] = None
    duration: Union[int, float]
    date: str = Field(..., description="D/M/YYYY")


class ExerciseLog(BaseModel):
    """Exercise log response."""
    model_config = ConfigDict(populate_by_name=True)
    
    username: str
    user_id: int = Field(..., alias="userId")
    date_from: Optional[str] = Field(None, alias="dateFrom")
    date_to: Optional[str] = Field(None, alias="dateTo")
    count: int
    exercise_logs: List[ExerciseLogEntry] = Field(default_factory=list, alias="exerciseLogs")

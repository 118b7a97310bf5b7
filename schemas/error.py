"""In-band error payload."""

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Logical failure reported with a 200 status."""
    model_config = ConfigDict(populate_by_name=True)
    
    error: str = Field(..., alias="Error")

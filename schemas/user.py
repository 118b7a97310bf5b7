"""Users collection schema."""

from pydantic import BaseModel, ConfigDict, Field


class User(BaseModel):
    """Users collection model."""
    model_config = ConfigDict(populate_by_name=True)
    
    user_id: int = Field(..., alias="userId", description="Randomly assigned user identifier")
    username: str = Field(..., description="Unique user name")


class NewUserRequest(BaseModel):
    """Registration payload."""
    username: str = Field(..., min_length=1, description="User name to register")


class UserResponse(User):
    """Registration response."""

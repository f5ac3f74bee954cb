"""
Common API schemas.
"""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class ResponseStatus(str, Enum):
    """Response status enum."""

    SUCCESS = "success"
    ERROR = "error"


class BaseResponse(BaseModel):
    """Base response model."""

    status: ResponseStatus = ResponseStatus.SUCCESS
    message: Optional[str] = None


"""
Response models for command output
"""

from typing import Any, Optional
from pydantic import BaseModel


class CommandResponse(BaseModel):
    """Result of a CLI command, printed as {"success": ..., "data": ...} in JSON mode"""
    success: bool = True
    data: Any = None


class ErrorResponse(BaseModel):
    """Error response model"""
    message: str
    error_code: Optional[str] = None
    details: Optional[dict] = None

"""
Error bodies returned by the mind map view service.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error body for failed graph view, share and health requests."""

    error: str = Field(..., description="Error code, e.g. graph_fetch_error")
    message: str = Field(..., description="Message shown to the user")
    request_id: Optional[str] = Field(None, description="Request ID for tracing")
    details: Optional[Dict[str, Any]] = Field(
        None, description="Validation errors or the internal error id"
    )

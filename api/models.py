"""
API Response Models.

Pydantic models for the relay's JSON responses. Request bodies are read as
raw JSON so that missing fields produce the relay's own 400 rather than a
framework validation error.
"""

from typing import Optional

from pydantic import BaseModel, Field


class EnquiryAcceptedResponse(BaseModel):
    """Returned for accepted enquiries (and, indistinguishably, for bots)."""
    success: bool = True
    message: str = "Enquiry submitted successfully"

    class Config:
        json_schema_extra = {
            "example": {
                "success": True,
                "message": "Enquiry submitted successfully"
            }
        }


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str

    class Config:
        json_schema_extra = {
            "example": {
                "error": "All fields are required"
            }
        }


class HealthResponse(BaseModel):
    status: str = Field("OK", description="Always OK while the process is serving")
    message: str = "Server is running"
    version: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "status": "OK",
                "message": "Server is running",
                "version": "1.0.0"
            }
        }

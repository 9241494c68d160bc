"""
Pydantic models for API response schemas.

Responsibilities:
- Define standard response structures
- Ensure consistent API output
- Describe the file payloads returned by the CAD service
"""

from typing import Optional
from pydantic import BaseModel, Field


class ConvertResponse(BaseModel):
    success: bool = True
    conversionId: str


class ConvertErrorResponse(BaseModel):
    success: bool = False
    error: str


class CadFiles(BaseModel):
    """Generated model files, as returned by the CAD service."""
    step_file: str = Field(..., description="STEP model contents")
    stl_file: str = Field(..., description="STL model contents")
    obj_file: str = Field(..., description="OBJ model contents")


class ConversionStatus(BaseModel):
    id: str
    status: str
    current_step: Optional[int] = None
    error_message: Optional[str] = None
    cad_file_url: Optional[str] = None
    stl_file_url: Optional[str] = None
    obj_file_url: Optional[str] = None
    completed_at: Optional[str] = None


class ConversionStatusResponse(BaseModel):
    conversion: ConversionStatus
    progress_percentage: int

"""
Pydantic models for request validation.

Responsibilities:
- Define the schema of the incoming convert-to-cad body
- Define the payload sent to the CAD service
"""

from typing import Any, List, Optional
from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    conversionId: str = Field(..., min_length=1, description="Conversion job UUID")
    userId: str = Field(..., min_length=1, description="Requesting user")


class GemstoneSpecPayload(BaseModel):
    shape: Optional[str] = None
    size_mm: float
    dia_wt: float
    quantity: Optional[Any] = None
    setting_type: Optional[str] = None


class MetalSpecPayload(BaseModel):
    type: Optional[str] = None
    karat: Optional[Any] = None
    weight_grams: float
    tone: Optional[str] = None


class CadConvertRequest(BaseModel):
    """Body of POST {CAD_SERVICE_URL}/convert."""
    svg_url: str
    design_id: str
    gemstone_specs: List[GemstoneSpecPayload] = []
    metal_specs: MetalSpecPayload

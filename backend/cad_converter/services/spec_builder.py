"""
Builds the CAD service payload from gemstone and metal spec rows.

Numeric columns are stored loosely (often as text), so each one is parsed
explicitly. A value that is not a finite number stops the conversion before
the CAD service is called.
"""

import math
from typing import Any, Dict, List

from cad_converter.core.exceptions import PreconditionError
from cad_converter.models.request_models import (
    CadConvertRequest,
    GemstoneSpecPayload,
    MetalSpecPayload,
)


def parse_number(value: Any, field: str) -> float:
    """
    Parse a spec value into a float.

    Raises:
        PreconditionError: If the value is missing, non-numeric or not finite
    """
    if isinstance(value, bool) or value is None:
        raise PreconditionError(f"Invalid numeric value for {field}: {value!r}")

    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value.strip())
        except ValueError:
            raise PreconditionError(f"Invalid numeric value for {field}: {value!r}")
    else:
        raise PreconditionError(f"Invalid numeric value for {field}: {value!r}")

    if not math.isfinite(number):
        raise PreconditionError(f"Invalid numeric value for {field}: {value!r}")
    return number


def build_gemstone_spec(row: Dict[str, Any]) -> GemstoneSpecPayload:
    return GemstoneSpecPayload(
        shape=row.get("shape"),
        size_mm=parse_number(row.get("mm_size"), "gemstone mm_size"),
        dia_wt=parse_number(row.get("dia_wt"), "gemstone dia_wt"),
        quantity=row.get("quantity"),
        setting_type=row.get("setting_type"),
    )


def build_metal_spec(row: Dict[str, Any]) -> MetalSpecPayload:
    return MetalSpecPayload(
        type=row.get("color"),
        karat=row.get("karat"),
        weight_grams=parse_number(row.get("gold_weight"), "metal gold_weight"),
        tone=row.get("tone"),
    )


def build_cad_request(
    svg_url: str,
    conversion_id: str,
    gemstone_rows: List[Dict[str, Any]],
    metal_row: Dict[str, Any],
) -> CadConvertRequest:
    """Combine the vector artifact and both spec sets into one request."""
    return CadConvertRequest(
        svg_url=svg_url,
        design_id=conversion_id,
        gemstone_specs=[build_gemstone_spec(row) for row in gemstone_rows],
        metal_specs=build_metal_spec(metal_row),
    )

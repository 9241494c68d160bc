"""
Status endpoint for conversion monitoring.

Lets the frontend poll a conversion while the CAD files are generated.
"""

from fastapi import APIRouter, HTTPException, Request
from cad_converter.core.database import (
    STATUS_COMPLETED,
    STATUS_FAILED,
    STATUS_GENERATING,
    STATUS_PENDING,
)
from cad_converter.core.logger import logger
from cad_converter.models.response_models import ConversionStatus, ConversionStatusResponse

router = APIRouter(prefix="/status", tags=["Status"])


@router.get("/{conversion_id}", response_model=ConversionStatusResponse)
def get_conversion_status(conversion_id: str, request: Request):
    """
    Get status information for a conversion.

    Returns:
        conversion: status, current_step, error and file URLs
        progress_percentage: Estimated completion percentage
    """
    database = request.app.state.database
    try:
        conversion = database.get_conversion_status(conversion_id)
    except Exception as e:
        logger.error(f"Failed to get status for conversion {conversion_id}: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

    if not conversion:
        raise HTTPException(status_code=404, detail="Conversion not found")

    return ConversionStatusResponse(
        conversion=ConversionStatus(**conversion),
        progress_percentage=_calculate_progress(conversion["status"]),
    )


def _calculate_progress(status: str) -> int:
    """
    Estimated progress percentage for a status.

    - pending: vectorization done, CAD not started
    - generating_cad: waiting on the CAD service and uploads
    - completed: 100%
    - failed: -1
    """
    if status == STATUS_PENDING:
        return 50
    elif status == STATUS_GENERATING:
        return 75
    elif status == STATUS_COMPLETED:
        return 100
    elif status == STATUS_FAILED:
        return -1  # Special value for failed
    else:
        return 0

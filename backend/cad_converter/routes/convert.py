"""
Handles the convert-to-cad request.

Responsibilities:
- Answer CORS preflight
- Validate the JSON body ({conversionId, userId})
- Run the conversion pipeline off the event loop
- Shape every answer as JSON carrying the CORS headers
"""

import asyncio
import json

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response
from pydantic import ValidationError

from cad_converter.core.logger import logger
from cad_converter.models.request_models import ConvertRequest
from cad_converter.models.response_models import ConvertErrorResponse

router = APIRouter(tags=["Convert"])

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "authorization, x-client-info, apikey, content-type",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
}


def _json(content: dict, status_code: int) -> JSONResponse:
    return JSONResponse(content=content, status_code=status_code, headers=CORS_HEADERS)


@router.options("/convert-to-cad")
async def preflight():
    """CORS preflight, answered without looking at the request."""
    return Response(status_code=204, headers=CORS_HEADERS)


REJECTED_METHODS = ["GET", "HEAD", "PUT", "PATCH", "DELETE", "TRACE", "CONNECT"]


@router.api_route("/convert-to-cad", methods=REJECTED_METHODS)
async def method_not_allowed():
    """Every method other than POST and OPTIONS."""
    return _json({"error": "Method Not Allowed"}, 405)


@router.post("/convert-to-cad")
async def convert_to_cad(request: Request):
    """
    Generate STEP/STL/OBJ files for a conversion job and store them.

    Returns:
        200 {success: true, conversionId} when the job reached "completed"
        400 {error} when the body is not a usable JSON object
        500 {success: false, error} when any pipeline step failed
    """
    try:
        body = json.loads(await request.body())
    except ValueError:
        return _json({"error": "Invalid JSON"}, 400)

    if not isinstance(body, dict):
        return _json({"error": "Invalid JSON"}, 400)

    try:
        convert_request = ConvertRequest(**body)
    except ValidationError:
        return _json({"error": "Invalid request body"}, 400)

    orchestrator = request.app.state.orchestrator

    # The pipeline blocks on the job store, the CAD service and storage
    loop = asyncio.get_running_loop()
    try:
        result = await loop.run_in_executor(
            None,
            orchestrator.run,
            convert_request.conversionId,
            convert_request.userId,
        )
    except Exception as e:
        logger.error(f"convert-to-cad request failed for {convert_request.conversionId}: {str(e)}")
        return _json(ConvertErrorResponse(error=str(e)).model_dump(), 500)

    return _json(result.model_dump(), 200)

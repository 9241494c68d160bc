"""
Client for the external CAD generation service.

Responsibilities:
- POST the design payload to {CAD_SERVICE_URL}/convert
- Bound the whole call (connect, wait and body transfer) by one deadline
- Turn transport failures and non-2xx answers into CadServiceError

The call is attempted exactly once.
"""

import json
import time
from typing import Optional

import requests
from pydantic import ValidationError

from cad_converter.core.exceptions import CadServiceError
from cad_converter.core.logger import get_logger
from cad_converter.models.request_models import CadConvertRequest
from cad_converter.models.response_models import CadFiles

CHUNK_SIZE = 64 * 1024


class CadServiceClient:
    def __init__(
        self,
        base_url: str,
        timeout: float = 300.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.clock = time.monotonic
        self.logger = get_logger(__name__)

    @property
    def convert_url(self) -> str:
        return f"{self.base_url}/convert"

    def convert(self, request: CadConvertRequest) -> CadFiles:
        """
        Generate STEP, STL and OBJ models for a design.

        Args:
            request: Payload describing the vector artifact and specs

        Returns:
            The three generated file payloads

        Raises:
            CadServiceError: On timeout, network failure, non-2xx status or a
                response without the three files
        """
        self.logger.info(f"Calling CAD service {self.convert_url} for design {request.design_id}")
        deadline = self.clock() + self.timeout

        try:
            response = self.session.post(
                self.convert_url,
                json=request.model_dump(),
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
                stream=True,
            )
            try:
                body = self._read_body(response, deadline)
            finally:
                response.close()
        except requests.exceptions.Timeout as e:
            raise self._timed_out() from e
        except requests.exceptions.RequestException as e:
            raise CadServiceError(f"CAD service unreachable: {e}") from e

        if not response.ok:
            text = body.decode(response.encoding or "utf-8", errors="replace")
            raise CadServiceError(f"CAD service error: {text}")

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise CadServiceError("CAD service returned a non-JSON response") from e

        if not isinstance(payload, dict):
            raise CadServiceError("CAD service returned an unexpected response")

        try:
            files = CadFiles(**payload)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
                for err in e.errors()
            )
            raise CadServiceError(f"CAD service returned invalid files: {problems}") from e

        self.logger.info(f"CAD service returned files for design {request.design_id}")
        return files

    def _read_body(self, response, deadline: float) -> bytes:
        # requests' timeout only bounds each socket read, not the whole body
        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            if self.clock() > deadline:
                raise self._timed_out()
            chunks.append(chunk)
        return b"".join(chunks)

    def _timed_out(self) -> CadServiceError:
        return CadServiceError(f"CAD service timed out after {self.timeout:g}s")

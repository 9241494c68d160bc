"""
Orchestrator for the convert-to-cad pipeline.

Responsibilities:
- Manage state transitions (pending -> generating_cad -> completed / failed)
- Coordinate calls between the job store, the CAD service and storage
- Record the error on the job when any step fails

Every step runs sequentially, once. Nothing is retried and files that were
already uploaded are left in place when a later step fails.
"""

from typing import Dict

from cad_converter.core.database import DatabaseManager
from cad_converter.core.exceptions import PreconditionError
from cad_converter.core.logger import get_logger
from cad_converter.core.storage import CAD_FORMATS, StorageManager
from cad_converter.models.response_models import ConvertResponse
from cad_converter.services.cad_service import CadServiceClient
from cad_converter.services.spec_builder import build_cad_request


class ConversionOrchestrator:
    def __init__(
        self,
        database: DatabaseManager,
        storage: StorageManager,
        cad_client: CadServiceClient
    ):
        self.database = database
        self.storage = storage
        self.cad_client = cad_client
        self.logger = get_logger(__name__)

    def run(self, conversion_id: str, user_id: str) -> ConvertResponse:
        """
        Drive one conversion from its vector artifact to stored CAD files.

        Args:
            conversion_id: Conversion job UUID
            user_id: Requesting user, used for logging only

        Returns:
            ConvertResponse on success

        Raises:
            Exception: Whatever stopped the pipeline, after the job was marked failed
        """
        self.logger.info(f"convert-to-cad called for {conversion_id} (user {user_id})")

        try:
            file_urls = self._convert(conversion_id)
        except Exception as e:
            self.logger.error(f"convert-to-cad failed for {conversion_id}: {e}", exc_info=True)
            self._mark_failed(conversion_id, str(e))
            raise

        self.logger.info(f"CAD conversion completed: {conversion_id}")
        return ConvertResponse(success=True, conversionId=conversion_id)

    def _convert(self, conversion_id: str) -> Dict[str, str]:
        conversion = self.database.get_conversion(conversion_id)
        if not conversion:
            raise PreconditionError("Conversion not found")

        svg_url = conversion.get("vectorized_svg_url")
        if not svg_url or not str(svg_url).strip():
            raise PreconditionError("No vector SVG URL on conversion")

        self.database.mark_generating(conversion_id)

        gemstone_rows = self.database.get_gemstone_specs(conversion_id)
        metal_row = self.database.get_metal_spec(conversion_id)

        cad_request = build_cad_request(svg_url, conversion_id, gemstone_rows, metal_row)
        files = self.cad_client.convert(cad_request)

        payloads = {
            "step": files.step_file,
            "stl": files.stl_file,
            "obj": files.obj_file,
        }
        paths = {
            file_format: self.storage.upload_cad_file(conversion_id, file_format, payloads[file_format])
            for file_format in CAD_FORMATS
        }
        file_urls = {
            file_format: self.storage.get_public_url(path)
            for file_format, path in paths.items()
        }

        self.database.complete_conversion(conversion_id, file_urls)
        return file_urls

    def _mark_failed(self, conversion_id: str, message: str):
        try:
            self.database.fail_conversion(conversion_id, message)
        except Exception as e:
            self.logger.error(f"Could not mark conversion {conversion_id} as failed: {e}")

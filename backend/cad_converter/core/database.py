"""
Database helper functions for reading and writing the conversion tables.

Provides clean interfaces for the reads and status transitions performed
by the convert-to-cad pipeline. Each transition is a single update call;
writes are sequential and not wrapped in a transaction.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime, timezone
from supabase import Client
from cad_converter.core.exceptions import PreconditionError
from cad_converter.core.logger import logger


STATUS_PENDING = "pending"
STATUS_GENERATING = "generating_cad"
STATUS_COMPLETED = "completed"
STATUS_FAILED = "failed"

STEP_FAILED = 0
STEP_GENERATING = 3
STEP_COMPLETED = 4


class DatabaseManager:
    """Handles all job store operations for the pipeline."""

    TABLE_CONVERSIONS = "cad_conversions"
    TABLE_GEMSTONES = "gemstone_specs"
    TABLE_METALS = "metal_specs"

    def __init__(self, client: Client):
        self.client = client

    # ==================== CONVERSION JOBS ====================

    def get_conversion(self, conversion_id: str) -> Optional[Dict[str, Any]]:
        """
        Retrieve a conversion record, or None if it does not exist.

        Raises:
            PreconditionError: If the lookup itself is rejected (e.g. a malformed id)
        """
        try:
            response = self.client.table(self.TABLE_CONVERSIONS)\
                .select("*")\
                .eq("id", conversion_id)\
                .execute()
        except Exception as e:
            logger.error(f"Lookup of conversion {conversion_id} failed: {str(e)}")
            raise PreconditionError("Conversion not found") from e
        return response.data[0] if response.data else None

    def mark_generating(self, conversion_id: str):
        """Move the job into the CAD generation step."""
        self._update(conversion_id, {
            "status": STATUS_GENERATING,
            "current_step": STEP_GENERATING,
        })
        logger.info(f"Conversion {conversion_id} status updated to {STATUS_GENERATING}")

    def complete_conversion(self, conversion_id: str, file_urls: Dict[str, str]):
        """
        Mark the job as completed.

        Args:
            conversion_id: Conversion UUID
            file_urls: Public URLs keyed by format ("step", "stl", "obj")
        """
        self._update(conversion_id, {
            "status": STATUS_COMPLETED,
            "current_step": STEP_COMPLETED,
            "cad_file_url": file_urls["step"],
            "stl_file_url": file_urls["stl"],
            "obj_file_url": file_urls["obj"],
            "completed_at": datetime.now(timezone.utc).isoformat(),
        })
        logger.info(f"Conversion {conversion_id} completed")

    def fail_conversion(self, conversion_id: str, error_message: str):
        """Mark the job as failed and reset its progress marker."""
        self._update(conversion_id, {
            "status": STATUS_FAILED,
            "current_step": STEP_FAILED,
            "error_message": error_message,
        })
        logger.info(f"Conversion {conversion_id} status updated to {STATUS_FAILED}")

    def get_conversion_status(self, conversion_id: str) -> Optional[Dict[str, Any]]:
        """Status projection of a conversion for monitoring."""
        response = self.client.table(self.TABLE_CONVERSIONS)\
            .select("id,status,current_step,error_message,cad_file_url,"
                    "stl_file_url,obj_file_url,completed_at")\
            .eq("id", conversion_id)\
            .execute()
        return response.data[0] if response.data else None

    def _update(self, conversion_id: str, data: Dict[str, Any]):
        self.client.table(self.TABLE_CONVERSIONS).update(data).eq("id", conversion_id).execute()

    # ==================== SPECIFICATIONS ====================

    def get_gemstone_specs(self, conversion_id: str) -> List[Dict[str, Any]]:
        """Gemstone rows for a conversion; zero rows is a valid design."""
        response = self.client.table(self.TABLE_GEMSTONES)\
            .select("*")\
            .eq("conversion_id", conversion_id)\
            .execute()
        return response.data or []

    def get_metal_spec(self, conversion_id: str) -> Dict[str, Any]:
        """
        The single metal row for a conversion.

        Raises:
            PreconditionError: If there is no metal row, or more than one
        """
        response = self.client.table(self.TABLE_METALS)\
            .select("*")\
            .eq("conversion_id", conversion_id)\
            .execute()
        rows = response.data or []

        if not rows:
            raise PreconditionError("Missing metal specs")
        if len(rows) > 1:
            raise PreconditionError(
                f"Expected one metal spec for conversion {conversion_id}, found {len(rows)}"
            )
        return rows[0]

"""
Supabase Storage helper functions for CAD file uploads.

All generated models go to one bucket (default `cad-files`) under a fixed
path per format:
- step/design_<conversion_id>.step
- stl/design_<conversion_id>.stl
- obj/design_<conversion_id>.obj

Uploads overwrite, so converting the same id twice reuses the same objects.
"""

from typing import Dict, Union
from supabase import Client
from cad_converter.core.exceptions import StorageError
from cad_converter.core.logger import logger


# format -> (extension, content type)
CAD_FORMATS: Dict[str, tuple] = {
    "step": ("step", "model/step"),
    "stl": ("stl", "model/stl"),
    "obj": ("obj", "model/obj"),
}


def cad_file_path(file_format: str, conversion_id: str) -> str:
    """Deterministic bucket path for one generated model."""
    extension, _ = CAD_FORMATS[file_format]
    return f"{file_format}/design_{conversion_id}.{extension}"


class StorageManager:
    """Handles file uploads to the CAD files bucket."""

    def __init__(self, client: Client, bucket: str = "cad-files"):
        self.client = client
        self.bucket = bucket

    def get_public_url(self, file_path: str) -> str:
        """
        Get the public URL for a file in storage.

        Args:
            file_path: File path within bucket

        Returns:
            Public URL to access the file
        """
        try:
            return self.client.storage.from_(self.bucket).get_public_url(file_path)
        except Exception as e:
            logger.error(f"Failed to resolve public URL for {self.bucket}/{file_path}: {str(e)}")
            raise StorageError(f"Could not resolve public URL for {file_path}: {e}") from e

    def upload_file(
        self,
        file_path: str,
        file_data: Union[bytes, str],
        content_type: str = "application/octet-stream"
    ):
        """
        Upload a file to Supabase Storage, replacing any existing object.

        Args:
            file_path: Destination path within bucket
            file_data: File contents; text is stored UTF-8 encoded
            content_type: MIME type of the file

        Raises:
            StorageError: If upload fails
        """
        data = file_data.encode("utf-8") if isinstance(file_data, str) else file_data

        try:
            self.client.storage.from_(self.bucket).upload(
                path=file_path,
                file=data,
                file_options={"content-type": content_type, "upsert": "true"}
            )
        except Exception as e:
            logger.error(f"Failed to upload file to {self.bucket}/{file_path}: {str(e)}")
            raise StorageError(f"Upload of {file_path} failed: {e}") from e

        logger.info(f"Uploaded file to {self.bucket}/{file_path}")

    def upload_cad_file(
        self,
        conversion_id: str,
        file_format: str,
        file_data: Union[bytes, str]
    ) -> str:
        """Upload one generated model and return its bucket path."""
        _, content_type = CAD_FORMATS[file_format]
        file_path = cad_file_path(file_format, conversion_id)
        self.upload_file(file_path, file_data, content_type)
        return file_path

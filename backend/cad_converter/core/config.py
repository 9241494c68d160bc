"""
Application configuration settings.

Responsibilities:
- Load environment variables once at startup
- Validate that every required value is present before serving requests
- Carry the CAD service timeout and storage bucket name
"""

import os
from dataclasses import dataclass

DEFAULT_CAD_TIMEOUT = 300.0
DEFAULT_CAD_BUCKET = "cad-files"


@dataclass(frozen=True)
class Settings:
    supabase_url: str = ""
    supabase_service_role_key: str = ""
    cad_service_url: str = ""
    cad_service_timeout: float = DEFAULT_CAD_TIMEOUT
    cad_bucket: str = DEFAULT_CAD_BUCKET
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        raw_timeout = os.getenv("CAD_SERVICE_TIMEOUT", str(DEFAULT_CAD_TIMEOUT))
        try:
            timeout = float(raw_timeout)
        except ValueError:
            raise ValueError(
                f"CAD_SERVICE_TIMEOUT must be a number of seconds, got {raw_timeout!r}"
            )

        return cls(
            supabase_url=os.getenv("SUPABASE_URL", "").strip(),
            supabase_service_role_key=os.getenv("SUPABASE_SERVICE_ROLE_KEY", "").strip(),
            cad_service_url=os.getenv("CAD_SERVICE_URL", "").strip().rstrip("/"),
            cad_service_timeout=timeout,
            cad_bucket=os.getenv("CAD_BUCKET", DEFAULT_CAD_BUCKET).strip() or DEFAULT_CAD_BUCKET,
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> "Settings":
        """
        Check that all required values are set.

        Raises:
            ValueError: If any required variable is missing or the timeout is not positive
        """
        required = {
            "SUPABASE_URL": self.supabase_url,
            "SUPABASE_SERVICE_ROLE_KEY": self.supabase_service_role_key,
            "CAD_SERVICE_URL": self.cad_service_url,
        }
        missing = [name for name, value in required.items() if not value or not value.strip()]
        if missing:
            raise ValueError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Please set these environment variables."
            )

        if self.cad_service_timeout <= 0:
            raise ValueError("CAD_SERVICE_TIMEOUT must be greater than zero")

        return self

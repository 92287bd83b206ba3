# agilstore/config.py
import os
from typing import Optional, Mapping

from pydantic import BaseModel, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseModel):
    data_file: str = "products.json"
    log_level: str = "ERROR"

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return v

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, **overrides) -> "Settings":
        env = os.environ if environ is None else environ
        values = {}
        if env.get("AGILSTORE_DATA_FILE"):
            values["data_file"] = env["AGILSTORE_DATA_FILE"]
        if env.get("AGILSTORE_LOG_LEVEL"):
            values["log_level"] = env["AGILSTORE_LOG_LEVEL"]
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

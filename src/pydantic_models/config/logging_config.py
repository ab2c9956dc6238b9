from typing import Optional
from pydantic import BaseModel, field_validator

class LoggingConfig(BaseModel):
    log_file: Optional[str] = None                  # ohne Datei nur stderr
    log_level: Optional[str] = "INFO"               # Defaultwert

    @field_validator("log_level", mode="before")
    @classmethod
    def upper_level(cls, v: Optional[str]) -> Optional[str]:
        """
        loguru erwartet Level-Namen in Großbuchstaben (z.B. "debug" -> "DEBUG").
        """
        return v.strip().upper() if isinstance(v, str) else v

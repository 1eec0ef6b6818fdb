"""Platform selection and message lookup schemas."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class PlatformConfig(BaseModel):
    # auto: pick from sys.platform at first system_category() call
    target: str = Field("auto", pattern="^(auto|win32|posix)$")

    model_config = ConfigDict(extra="forbid")


class MessagesConfig(BaseModel):
    initial_buffer: int = Field(128, gt=0)
    max_buffer: int = Field(65536, gt=0)
    unknown: str = "Unknown error"

    model_config = ConfigDict(extra="forbid")

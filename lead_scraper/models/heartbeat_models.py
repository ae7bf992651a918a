from pydantic import BaseModel, Field
from datetime import datetime
from typing import Any, Dict


class VersionInfo(BaseModel):
    major: int
    minor: int
    patch: int
    suffix: str = ""


class HeartbeatModel(BaseModel):
    status: str = "ok"
    timestamp: datetime  = Field(default_factory=datetime.now)
    app_version: VersionInfo
    resources: Dict[str, Any] = Field(default_factory=dict)

    class Config:
        populate_by_name = True
        json_encoders = {
            datetime: lambda dt: dt.isoformat()
        }

from enum import Enum
from pydantic import BaseModel


class SyncStatus(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class SyncMode(str, Enum):
    FULL = "full"
    INCREMENTAL = "incremental"


class SyncResponse(BaseModel):
    success: bool = True
    message: str
    records_updated: int
    matchdays_synced: int
    mode: SyncMode


class SyncErrorResponse(BaseModel):
    success: bool = False
    error: str
    traceback: str | None = None


class SyncResult(BaseModel):
    records_updated: int = 0
    matchdays_synced: int = 0
    mode: SyncMode

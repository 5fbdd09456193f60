from __future__ import annotations

from typing import Dict, List, Optional
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# -------------------------
# Tokens
# -------------------------

class Role(str, Enum):
    SUBSCRIBER = "subscriber"  # subscribe only
    PUBLISHER = "publisher"    # publish, subscribe, signal
    MODERATOR = "moderator"    # publisher + forceUnpublish / forceDisconnect


class TokenOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: Role = Role.PUBLISHER
    expire_time: Optional[int] = None  # seconds since epoch; None or 0 -> default
    data: Optional[str] = None         # connection metadata


DEFAULT_TOKEN_OPTIONS = TokenOptions()


class DecodedToken(BaseModel):
    model_config = ConfigDict(frozen=True)

    partner_id: int
    sig: str
    data_string: str
    claims: Dict[str, str]  # insertion order matches the data string


# -------------------------
# Sessions
# -------------------------

class ArchiveMode(str, Enum):
    MANUAL = "manual"
    ALWAYS = "always"


class SessionProperties(BaseModel):
    model_config = ConfigDict(frozen=True)

    location: Optional[str] = None  # IP address hint for media server selection
    p2p: bool = False
    archive_mode: ArchiveMode = ArchiveMode.MANUAL

    def to_params(self) -> Dict[str, str]:
        """Form parameters for the session-create call."""
        params = {
            "p2p.preference": "enabled" if self.p2p else "disabled",
            "archiveMode": self.archive_mode.value,
        }
        if self.location:
            params["location"] = self.location
        return params


# -------------------------
# Archives
# -------------------------

class ArchiveStatus(str, Enum):
    AVAILABLE = "available"
    DELETED = "deleted"
    EXPIRED = "expired"
    FAILED = "failed"
    STARTED = "started"
    STOPPED = "stopped"
    UPLOADED = "uploaded"


class Archive(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    session_id: str = Field(..., alias="sessionId")
    partner_id: int = Field(..., alias="partnerId")
    name: Optional[str] = None
    status: ArchiveStatus
    created_at: int = Field(0, alias="createdAt")  # ms since epoch
    duration: int = 0  # seconds
    size: int = 0      # bytes
    reason: str = ""
    url: Optional[str] = None  # set once the archive is available


class ArchiveList(BaseModel):
    model_config = ConfigDict(extra="ignore")

    count: int = 0  # total on the server, not len(items)
    items: List[Archive] = Field(default_factory=list)

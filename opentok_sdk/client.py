from typing import Optional

import httpx
from pydantic import ValidationError

from opentok_sdk.api.archives import ArchiveService
from opentok_sdk.api.sessions import SessionService
from opentok_sdk.core.config import DEFAULT_API_URL, Settings, settings as default_settings
from opentok_sdk.core.errors import InvalidArgumentError
from opentok_sdk.domain.schemas import Archive, ArchiveList, Role, SessionProperties, TokenOptions
from opentok_sdk.domain.session import Session
from opentok_sdk.http.client import HttpClient


class OpenTok:
    """
    Entry point to the service for one account.

    Credentials are fixed at construction. Token generation is local and
    synchronous; everything that talks to the service is async and shares
    one HTTP connection pool, so close the client (or use ``async with``)
    when done.
    """

    def __init__(
        self,
        api_key: int,
        api_secret: str,
        api_url: str = DEFAULT_API_URL,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_secret:
            raise InvalidArgumentError("API secret cannot be empty")
        self._api_key = int(api_key)
        self._api_secret = api_secret
        self._http = HttpClient(self._api_key, api_secret, api_url, timeout=timeout, transport=transport)
        self._sessions = SessionService(self._http, self._api_key, api_secret)
        self._archives = ArchiveService(self._http, self._api_key)

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None, **kwargs) -> "OpenTok":
        cfg = cfg or default_settings
        if cfg.OPENTOK_API_KEY is None or not cfg.OPENTOK_API_SECRET:
            raise InvalidArgumentError("OPENTOK_API_KEY and OPENTOK_API_SECRET must be configured")
        kwargs.setdefault("timeout", cfg.OPENTOK_TIMEOUT)
        return cls(cfg.OPENTOK_API_KEY, cfg.OPENTOK_API_SECRET, cfg.OPENTOK_API_URL, **kwargs)

    @property
    def api_key(self) -> int:
        return self._api_key

    @property
    def api_url(self) -> str:
        return self._http.api_url

    def __repr__(self) -> str:
        return f"OpenTok(api_key={self._api_key}, api_url={self.api_url!r})"

    # -------------------------
    # Sessions & tokens
    # -------------------------

    async def create_session(self, properties: Optional[SessionProperties] = None) -> Session:
        return await self._sessions.create_session(properties)

    def session(self, session_id: str) -> Session:
        """Wrap an existing session id with this account's credentials."""
        if not session_id or not session_id.strip():
            raise InvalidArgumentError("Session ID cannot be empty")
        return Session(session_id=session_id, api_key=self._api_key, api_secret=self._api_secret)

    def generate_token(
        self,
        session_id: str,
        role: Role = Role.PUBLISHER,
        expire_time: Optional[int] = None,
        data: Optional[str] = None,
    ) -> str:
        try:
            options = TokenOptions(role=role, expire_time=expire_time, data=data)
        except ValidationError as e:
            raise InvalidArgumentError(f"Invalid token options: {e}") from e
        return self.session(session_id).generate_token(options)

    # -------------------------
    # Archives
    # -------------------------

    async def start_archive(self, session_id: str, name: Optional[str] = None) -> Archive:
        return await self._archives.start(session_id, name)

    async def stop_archive(self, archive_id: str) -> Archive:
        return await self._archives.stop(archive_id)

    async def get_archive(self, archive_id: str) -> Archive:
        return await self._archives.get(archive_id)

    async def list_archives(self, offset: int = 0, count: Optional[int] = None) -> ArchiveList:
        return await self._archives.list(offset, count)

    async def delete_archive(self, archive_id: str) -> None:
        await self._archives.delete(archive_id)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "OpenTok":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

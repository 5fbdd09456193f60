import logging
from typing import Any, Dict, Optional

from opentok_sdk.core.errors import InvalidArgumentError, RequestError
from opentok_sdk.domain.schemas import Archive, ArchiveList
from opentok_sdk.http.client import HttpClient

logger = logging.getLogger(__name__)

MAX_LIST_COUNT = 1000

# Service-specific meaning of the common failure codes
_START_ERRORS = {
    403: "Invalid credentials",
    404: "Session does not exist",
    409: "Session is already being recorded or has no connected clients",
}
_STOP_ERRORS = {
    403: "Invalid credentials",
    404: "Archive does not exist",
    409: "Archive is not being recorded",
}
_GET_ERRORS = {
    403: "Invalid credentials",
    404: "Archive does not exist",
}
_DELETE_ERRORS = {
    403: "Invalid credentials",
    404: "Archive does not exist",
    409: "Archive status is not available, uploaded or deleted",
}


def _require(value: Optional[str], name: str) -> str:
    if not value or not value.strip():
        raise InvalidArgumentError(f"{name} cannot be empty")
    return value


class ArchiveService:
    def __init__(self, http: HttpClient, api_key: int):
        self.http = http
        self.base_path = f"/v2/partner/{api_key}/archive"

    async def _call(self, errors: Dict[int, str], method: str, path: str, **kwargs):
        try:
            return await self.http.request(method, path, **kwargs)
        except RequestError as e:
            reason = errors.get(e.status_code)
            if reason is None:
                raise
            raise RequestError(f"{reason}: {e.args[0]}", status_code=e.status_code) from e

    @staticmethod
    def _parse(response, model):
        try:
            return model.model_validate(response.json())
        except ValueError as e:
            raise RequestError(f"Unexpected archive response: {e}") from e

    async def start(self, session_id: str, name: Optional[str] = None) -> Archive:
        _require(session_id, "Session ID")
        body: Dict[str, Any] = {"sessionId": session_id}
        if name is not None:
            body["name"] = name
        response = await self._call(_START_ERRORS, "POST", self.base_path, json=body)
        archive = self._parse(response, Archive)
        logger.info(f"Started archive {archive.id} for session {session_id}")
        return archive

    async def stop(self, archive_id: str) -> Archive:
        _require(archive_id, "Archive ID")
        response = await self._call(
            _STOP_ERRORS, "POST", f"{self.base_path}/{archive_id}", json={"action": "stop"}
        )
        archive = self._parse(response, Archive)
        logger.info(f"Stopped archive {archive_id}")
        return archive

    async def get(self, archive_id: str) -> Archive:
        _require(archive_id, "Archive ID")
        response = await self._call(_GET_ERRORS, "GET", f"{self.base_path}/{archive_id}")
        return self._parse(response, Archive)

    async def list(self, offset: int = 0, count: Optional[int] = None) -> ArchiveList:
        if offset < 0:
            raise InvalidArgumentError(f"Offset must be >= 0. offset: {offset}")
        if count is not None and not 0 <= count <= MAX_LIST_COUNT:
            raise InvalidArgumentError(f"Count must be between 0 and {MAX_LIST_COUNT}. count: {count}")

        params: Dict[str, Any] = {}
        if offset:
            params["offset"] = offset
        if count is not None:
            params["count"] = count
        response = await self._call(_GET_ERRORS, "GET", self.base_path, params=params)
        return self._parse(response, ArchiveList)

    async def delete(self, archive_id: str) -> None:
        _require(archive_id, "Archive ID")
        await self._call(_DELETE_ERRORS, "DELETE", f"{self.base_path}/{archive_id}")
        logger.info(f"Deleted archive {archive_id}")

import logging
import xml.etree.ElementTree as ET
from typing import Optional

from opentok_sdk.core.errors import RequestError
from opentok_sdk.domain.schemas import SessionProperties
from opentok_sdk.domain.session import Session
from opentok_sdk.http.client import HttpClient

logger = logging.getLogger(__name__)

SESSION_CREATE_PATH = "/session/create"


def parse_session_id(body: str) -> str:
    """Pull <Session><session_id> out of a session-create response."""
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise RequestError(f"Unparseable session create response: {e}") from e

    node = root.find(".//Session/session_id")
    if node is None or not (node.text or "").strip():
        # Error payloads come back as XML too, surface them verbatim
        raise RequestError(f"Session create response has no session_id: {body[:200]}")
    return node.text.strip()


class SessionService:
    def __init__(self, http: HttpClient, api_key: int, api_secret: str):
        self.http = http
        self.api_key = api_key
        self.api_secret = api_secret

    async def create_session(self, properties: Optional[SessionProperties] = None) -> Session:
        properties = properties or SessionProperties()
        response = await self.http.request(
            "POST", SESSION_CREATE_PATH, data=properties.to_params()
        )
        session_id = parse_session_id(response.text)
        logger.info(f"Created session {session_id}")
        return Session(
            session_id=session_id,
            api_key=self.api_key,
            api_secret=self.api_secret,
            properties=properties,
        )

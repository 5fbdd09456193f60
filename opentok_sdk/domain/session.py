from pydantic import BaseModel, ConfigDict, Field

from opentok_sdk.domain.schemas import DEFAULT_TOKEN_OPTIONS, SessionProperties, TokenOptions
from opentok_sdk.tokens.generator import generate_token


class Session(BaseModel):
    """
    One remote session as returned by the session-create call.

    The key/secret pair must be the one the session was created with,
    otherwise the service rejects every token signed for it.
    """
    model_config = ConfigDict(frozen=True)

    session_id: str
    api_key: int
    api_secret: str = Field(..., repr=False)
    properties: SessionProperties = Field(default_factory=SessionProperties)

    def generate_token(self, options: TokenOptions = DEFAULT_TOKEN_OPTIONS) -> str:
        """Publisher token valid for 24 hours unless options say otherwise."""
        return generate_token(self, options)

from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class NonceResponse(BaseModel):
    session_id: str = Field(..., min_length=1, description="Session identifier issued for this login attempt.")
    nonce: str = Field(..., min_length=1, description="One-time value embedded in the signed challenge.")

class VerifyRequest(BaseModel):
    session_id: str = Field(..., description="Session identifier returned by the nonce endpoint.")
    address: str = Field(..., description="Wallet address that signed the challenge.")
    signature: str = Field(..., description="personal_sign signature over the challenge text.")

class VerifyResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    ok: bool = True
    wallet: Optional[str] = Field(None, description="Lower-cased wallet address bound to the session.")
    chain: Optional[str] = None
    mlkem_pk_b64: Optional[str] = Field(None, description="Wallet's ML-KEM public key, created on first login.")

class SessionInfo(BaseModel):
    model_config = ConfigDict(extra="allow")

    active: Optional[bool] = None
    wallet: Optional[str] = None
    chain: Optional[str] = None
    created_at_ms: Optional[int] = None
    expires_at_ms: Optional[int] = None

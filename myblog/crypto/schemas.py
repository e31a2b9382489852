"""Pydantic schemas for the key-exchange endpoints."""

from typing import Optional

from pydantic import BaseModel, Field


class JWK(BaseModel):
    kty: str = "EC"
    crv: str = "P-256"
    x: str
    y: str
    use: str = "enc"
    alg: str = "ECDH-ES+A256KW"


class PublicKeyResponse(BaseModel):
    success: bool = True
    session_id: str
    public_key: JWK
    key_format: str = "jwk"
    algorithm: str = "ECDH-ES"
    curve: str = "P-256"
    expires_at: int = Field(..., description="Unix time of session expiry")
    expires_in: int = Field(..., description="Seconds until session expiry")


class EncryptedEnvelope(BaseModel):
    """Client-submitted ciphertext and the key needed to decrypt it."""

    session_id: Optional[str] = None
    encrypted_data: Optional[str] = Field(
        None, description="Standard base64 of nonce || ciphertext || tag"
    )
    client_public_key: Optional[str] = Field(None, description="PEM SPKI")
    algorithm: Optional[str] = None

    def is_complete(self) -> bool:
        return bool(self.session_id and self.encrypted_data and self.client_public_key)


class DecryptResponse(BaseModel):
    success: bool = True
    decrypted: str

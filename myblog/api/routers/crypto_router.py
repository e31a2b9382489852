"""Key exchange for client-side encryption of secrets."""

import logging
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request

from myblog.core.errors import BadRequestError, CryptoError
from myblog.crypto.schemas import (
    DecryptResponse,
    EncryptedEnvelope,
    PublicKeyResponse,
)
from myblog.crypto.sessions import ECCSessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/crypto", tags=["crypto"])


def get_ecc_store(request: Request) -> ECCSessionStore:
    return request.app.state.ecc_sessions


@router.get("/public-key", response_model=PublicKeyResponse)
def get_public_key(
    session_id: Optional[str] = None,
    store: ECCSessionStore = Depends(get_ecc_store),
):
    """
    Return the session's public key as a JWK.

    A new session is created when ``session_id`` is absent, unknown or
    expired; the response carries the id to use for ``/decrypt``.
    """
    manager = store.get_or_create(session_id)
    remaining = manager.expires_at - datetime.now(timezone.utc)
    return PublicKeyResponse(
        session_id=manager.session_id,
        public_key=manager.public_key_jwk(),
        expires_at=int(manager.expires_at.timestamp()),
        expires_in=max(int(remaining.total_seconds()), 0),
    )


@router.post("/decrypt", response_model=DecryptResponse)
def decrypt(
    envelope: EncryptedEnvelope,
    store: ECCSessionStore = Depends(get_ecc_store),
):
    """
    Decrypt data the client encrypted against this session's public key.

    - **session_id**: id returned by ``/public-key``
    - **client_public_key**: the client's ephemeral key, PEM
    - **encrypted_data**: base64 of nonce || ciphertext || tag
    """
    if not envelope.is_complete():
        raise BadRequestError("missing required fields")

    manager = store.get(envelope.session_id)

    try:
        plaintext = manager.hybrid_decrypt(
            envelope.encrypted_data, envelope.client_public_key
        )
    except CryptoError as e:
        logger.warning(f"Decryption failed for {envelope.session_id}: {e}")
        raise BadRequestError("decryption failed", str(e)) from e

    return DecryptResponse(decrypted=plaintext.decode("utf-8", errors="replace"))

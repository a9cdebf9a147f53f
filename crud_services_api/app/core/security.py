"""
Security helpers for password hashing and JWT authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
the username, the issuing service (``aud``) and an expiration
timestamp (``exp``).  A secret key from the application settings is
used to sign and verify the token.  A token issued by one service is
refused by every other service even though they share the secret.

Passwords are hashed with PBKDF2‑HMAC using SHA‑256 and a random
salt per password.  Existing bcrypt hashes still verify, and they are
replaced with a PBKDF2 hash whenever the password changes.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Callable, Dict, Optional

import bcrypt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings

logger = logging.getLogger(__name__)

INVALID_TOKEN_MESSAGE = "Invalid JWT Token"

_PBKDF2_ITERATIONS = 100_000
_BCRYPT_PREFIXES = ("$2a$", "$2b$", "$2y$")


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    """Compute HMAC‑SHA256 signature of a message using the given secret."""
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, str], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  The token is a string of the
    form ``header.payload.signature``, where each part is base64url
    encoded.  Clients must include this token in the
    ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token, e.g.
        ``{"username": "JoeBiden", "aud": "twitter"}``.
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A signed JWT token.
    """
    to_encode = dict(data)
    if expires_delta is None:
        expires_delta = settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + expires_delta
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, object]]:
    """Verify and decode a JWT token.

    Splits the token into header, payload and signature, verifies the
    HMAC signature and checks the ``exp`` field.  Returns the payload
    dictionary when the token is valid, otherwise ``None``.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        # Constant‑time comparison to prevent timing attacks
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(data, dict):
            return None
        if data.get("exp") is None or int(data["exp"]) <= int(time.time()):
            return None
    except (ValueError, TypeError):
        return None
    return data


def issue_token(username: str, service: str, expires_delta: Optional[int] = None) -> str:
    """Return an access token for ``username`` that only ``service`` accepts."""
    return create_access_token({"username": username, "aud": service}, expires_delta=expires_delta)


security = HTTPBearer(auto_error=False)


def _invalid_token() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=INVALID_TOKEN_MESSAGE,
        headers={"WWW-Authenticate": "Bearer"},
    )


def require_token(service: str) -> Callable[[Optional[HTTPAuthorizationCredentials]], str]:
    """Dependency factory that authenticates requests to ``service``.

    Use this in FastAPI routes via ``Depends(require_token("twitter"))``
    or in a router's ``dependencies``.  The dependency returns the
    username carried by the bearer token.  A missing header, a forged
    or expired token, or a token issued by another service results in
    HTTP 401 ``Invalid JWT Token``.
    """

    def _token_dependency(
        credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    ) -> str:
        if credentials is None:
            raise _invalid_token()
        payload = decode_access_token(credentials.credentials)
        if not payload or payload.get("aud") != service or not payload.get("username"):
            logger.warning("Rejected token for %s", service)
            raise _invalid_token()
        return str(payload["username"])

    return _token_dependency


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2‑HMAC with SHA‑256.

    A 16‑byte random salt is generated for each password.  The
    resulting string contains the salt and hash separated by a ``$``
    (salt in hex, then hash in hex).
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, _PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a plain password against a stored salt+hash string.

    Rows written before the switch to PBKDF2 hold bcrypt hashes
    (``$2a$``/``$2b$`` prefix); those are checked with ``bcrypt``.
    Returns ``False`` for a malformed or missing stored value.
    """
    if not hashed_password:
        return False
    if hashed_password.startswith(_BCRYPT_PREFIXES):
        try:
            return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
        except ValueError:
            return False
    if '$' not in hashed_password:
        return False
    salt_hex, hash_hex = hashed_password.split('$', 1)
    try:
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac('sha256', plain_password.encode('utf-8'), salt, _PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)

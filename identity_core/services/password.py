"""Credential Service — salted, adaptive one-way hashing of plaintext secrets.

Invariants:
    - compare(p, hash(p)) is True for every non-empty p; compare(p, hash(q)) is False for p != q
    - compare() never raises: mismatches and malformed hashes both return False
    - The work factor is fixed per instance (from Settings), never chosen per call
    - bcrypt runs on a worker thread; the event loop is never blocked by hashing

Design Decisions:
    - bcrypt over base64(sha256(secret)): bcrypt alone stops at 72 bytes and
      rejects NUL bytes; the digest keeps every secret in range and distinct
    - Work factor: 14 in production, 4 (bcrypt minimum) elsewhere, overridable
"""

import asyncio
import base64
import hashlib
import logging

import bcrypt

from identity_core.config import Settings
from identity_core.core.domain_types import PasswordHash

logger = logging.getLogger(__name__)


def _prepare(plaintext: str) -> bytes:
    digest = hashlib.sha256(plaintext.encode("utf-8")).digest()
    return base64.b64encode(digest)


class CredentialService:
    """Hashes and verifies passwords with a process-wide work factor."""

    def __init__(self, settings: Settings):
        self.rounds = settings.hash_rounds

    async def hash(self, plaintext: str) -> PasswordHash:
        hashed = await asyncio.to_thread(
            bcrypt.hashpw, _prepare(plaintext), bcrypt.gensalt(rounds=self.rounds),
        )
        return PasswordHash(hashed.decode("ascii"))

    async def compare(self, plaintext: str, hashed: str) -> bool:
        try:
            return await asyncio.to_thread(
                bcrypt.checkpw, _prepare(plaintext), hashed.encode("ascii"),
            )
        except ValueError as e:
            logger.warning(f"Unverifiable password hash: {e}")
            return False

"""Encryption key storage and AES-GCM encryption of stored secrets."""

from __future__ import annotations

import base64
import binascii
import logging
import os
import secrets
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

log = logging.getLogger(__name__)

KEYRING_SERVICE = "harbor-cli"
KEYRING_USER = "harbor-cli-encryption-key"
ENCRYPTION_KEY_ENV = "HARBOR_ENCRYPTION_KEY"

_NONCE_SIZE = 12
_UNSAFE_FILENAME_CHARS = '<>:"/\\|?*'


class KeyringError(Exception):
    """Raised when a secret cannot be stored, read or removed."""


class KeyringProvider(ABC):
    """A place to keep secrets, addressed by service and user."""

    @abstractmethod
    def set(self, service: str, user: str, password: str) -> None: ...

    @abstractmethod
    def get(self, service: str, user: str) -> str: ...

    @abstractmethod
    def delete(self, service: str, user: str) -> None: ...


def _sanitize_filename(name: str) -> str:
    return "".join("_" if ch in _UNSAFE_FILENAME_CHARS else ch for ch in name)


@dataclass
class FileKeyring(KeyringProvider):
    """Keeps each secret in its own file below ``base_dir``."""

    base_dir: Path

    def __post_init__(self) -> None:
        self.base_dir = Path(self.base_dir)

    def _path(self, service: str, user: str) -> Path:
        return self.base_dir / _sanitize_filename(f"{service}_{user}")

    def set(self, service: str, user: str, password: str) -> None:
        try:
            self.base_dir.mkdir(mode=0o700, parents=True, exist_ok=True)
        except OSError as exc:
            raise KeyringError(f"failed to create directory: {exc}") from exc
        try:
            fd = os.open(self._path(service, user), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(password)
        except OSError as exc:
            raise KeyringError(f"failed to write secret: {exc}") from exc

    def get(self, service: str, user: str) -> str:
        try:
            return self._path(service, user).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise KeyringError(f"failed to read secret: {exc}") from exc

    def delete(self, service: str, user: str) -> None:
        try:
            self._path(service, user).unlink()
        except OSError as exc:
            raise KeyringError(f"failed to delete secret: {exc}") from exc


@dataclass
class EnvironmentKeyring(KeyringProvider):
    """Keeps the secret in one environment variable of this process."""

    env_var_name: str

    def set(self, service: str, user: str, password: str) -> None:
        try:
            os.environ[self.env_var_name] = password
        except (OSError, ValueError) as exc:
            raise KeyringError(f"failed to set environment variable: {exc}") from exc

    def get(self, service: str, user: str) -> str:
        value = os.environ.get(self.env_var_name, "")
        if not value:
            raise KeyringError(f"environment variable {self.env_var_name} not found or empty")
        return value

    def delete(self, service: str, user: str) -> None:
        raise KeyringError("deleting environment variables at runtime is not supported")


def get_keyring_provider() -> KeyringProvider:
    """Pick the environment variable if it is set, otherwise a file keyring."""
    if os.environ.get(ENCRYPTION_KEY_ENV):
        log.debug("Using environment-based encryption key")
        return EnvironmentKeyring(ENCRYPTION_KEY_ENV)
    try:
        home = Path.home()
    except (RuntimeError, KeyError):
        home = Path(".")
    log.debug("Using file-based keyring")
    return FileKeyring(home / ".harbor" / "keyring")


_state: dict[str, KeyringProvider | None] = {"provider": None}


def set_keyring_provider(provider: KeyringProvider | None) -> KeyringProvider | None:
    """Use ``provider`` from now on; None goes back to automatic selection.

    Returns the provider that was in use before.
    """
    previous = _state["provider"]
    _state["provider"] = provider
    return previous


def _current_provider() -> KeyringProvider:
    provider = _state["provider"]
    if provider is None:
        provider = get_keyring_provider()
        _state["provider"] = provider
    return provider


def generate_encryption_key() -> None:
    """Store a fresh 256-bit key unless one is already stored."""
    provider = _current_provider()
    try:
        if provider.get(KEYRING_SERVICE, KEYRING_USER):
            return
    except KeyringError:
        pass
    key = secrets.token_bytes(32)
    provider.set(KEYRING_SERVICE, KEYRING_USER, base64.b64encode(key).decode("ascii"))


def get_encryption_key() -> bytes:
    """Return the stored AES key, generating one first when none exists."""
    provider = _current_provider()
    lookup_error: KeyringError | None = None
    try:
        key_b64 = provider.get(KEYRING_SERVICE, KEYRING_USER)
    except KeyringError as exc:
        key_b64 = ""
        lookup_error = exc
    if not key_b64:
        try:
            generate_encryption_key()
        except KeyringError as exc:
            raise KeyringError(
                f"failed to retrieve or generate encryption key: {lookup_error or exc}"
            ) from exc
        try:
            key_b64 = provider.get(KEYRING_SERVICE, KEYRING_USER)
        except KeyringError as exc:
            raise KeyringError(
                f"failed to retrieve encryption key after generation: {exc}"
            ) from exc
    try:
        key = base64.b64decode(key_b64, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise KeyringError(f"failed to decode encryption key: {exc}") from exc
    if len(key) not in (16, 24, 32):
        raise KeyringError(
            f"invalid encryption key size: {len(key)} bytes. "
            "Must be 16, 24, or 32 bytes (after base64 decoding)"
        )
    return key


def _cipher(key: bytes) -> AESGCM:
    try:
        return AESGCM(key)
    except (ValueError, TypeError) as exc:
        raise ValueError(f"failed to create cipher: {exc}") from exc


def encrypt(key: bytes, plaintext: bytes | str) -> str:
    """Encrypt with AES-GCM and return base64 of nonce followed by ciphertext."""
    cipher = _cipher(key)
    if isinstance(plaintext, str):
        plaintext = plaintext.encode("utf-8")
    nonce = secrets.token_bytes(_NONCE_SIZE)
    sealed = cipher.encrypt(nonce, plaintext, None)
    return base64.b64encode(nonce + sealed).decode("ascii")


def decrypt(key: bytes, ciphertext: str) -> str:
    """Reverse :func:`encrypt`, raising ValueError on any failure."""
    cipher = _cipher(key)
    try:
        data = base64.b64decode(ciphertext, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError(f"failed to decode ciphertext: {exc}") from exc
    if len(data) < _NONCE_SIZE:
        raise ValueError("ciphertext too short")
    nonce, sealed = data[:_NONCE_SIZE], data[_NONCE_SIZE:]
    try:
        plaintext = cipher.decrypt(nonce, sealed, None)
    except InvalidTag as exc:
        raise ValueError("failed to decrypt ciphertext: message authentication failed") from exc
    return plaintext.decode("utf-8", errors="replace")
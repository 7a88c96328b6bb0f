"""SSH keys: models and API calls."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .client import Client, ListOptions, Response, add_options
from .links import Links

KEYS_BASE_PATH = "v2/account/keys"


@dataclass
class Key:
    """An SSH key registered with the account."""

    id: int = 0
    name: str = ""
    fingerprint: str = ""
    public_key: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Key":
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            fingerprint=data.get("fingerprint") or "",
            public_key=data.get("public_key") or "",
        )


@dataclass
class KeyCreateRequest:
    """A request to register a new SSH key."""

    name: str = ""
    public_key: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "public_key": self.public_key}


@dataclass
class KeyUpdateRequest:
    """A request to rename an SSH key."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}


def _key_from_root(root: Mapping[str, Any]) -> Key | None:
    data = root.get("ssh_key")
    return Key.from_dict(data) if data is not None else None


def _check_id(key_id: int) -> None:
    if key_id < 1:
        raise ValueError("keyID is invalid because cannot be less than 1")


def _check_fingerprint(fingerprint: str) -> None:
    if not fingerprint:
        raise ValueError("fingerprint is invalid because cannot be empty")


def _check_update(request: KeyUpdateRequest | None) -> None:
    if request is None:
        raise ValueError("updateRequest is invalid because cannot be nil")


class KeysService:
    """Calls to the SSH keys endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def list(self, options: ListOptions | None = None) -> tuple[list[Key], Response]:
        """List all keys."""
        path = add_options(KEYS_BASE_PATH, options)
        response = self._client.do(self._client.new_request("GET", path))
        root = response.json()
        links = root.get("links")
        if links is not None:
            response.links = Links.from_dict(links)
        return [Key.from_dict(k) for k in root.get("ssh_keys") or []], response

    def get_by_id(self, key_id: int) -> tuple[Key | None, Response]:
        """Fetch a key by its id."""
        _check_id(key_id)
        return self._get(f"{KEYS_BASE_PATH}/{key_id}")

    def get_by_fingerprint(self, fingerprint: str) -> tuple[Key | None, Response]:
        """Fetch a key by its fingerprint."""
        _check_fingerprint(fingerprint)
        return self._get(f"{KEYS_BASE_PATH}/{fingerprint}")

    def create(self, request: KeyCreateRequest) -> tuple[Key | None, Response]:
        """Register a new key."""
        if request is None:
            raise ValueError("createRequest is invalid because cannot be nil")
        response = self._client.do(
            self._client.new_request("POST", KEYS_BASE_PATH, request)
        )
        return _key_from_root(response.json()), response

    def update_by_id(
        self, key_id: int, request: KeyUpdateRequest
    ) -> tuple[Key | None, Response]:
        """Rename a key identified by its id."""
        _check_id(key_id)
        _check_update(request)
        return self._put(f"{KEYS_BASE_PATH}/{key_id}", request)

    def update_by_fingerprint(
        self, fingerprint: str, request: KeyUpdateRequest
    ) -> tuple[Key | None, Response]:
        """Rename a key identified by its fingerprint."""
        _check_fingerprint(fingerprint)
        _check_update(request)
        return self._put(f"{KEYS_BASE_PATH}/{fingerprint}", request)

    def delete_by_id(self, key_id: int) -> Response:
        """Delete a key identified by its id."""
        _check_id(key_id)
        return self._delete(f"{KEYS_BASE_PATH}/{key_id}")

    def delete_by_fingerprint(self, fingerprint: str) -> Response:
        """Delete a key identified by its fingerprint."""
        _check_fingerprint(fingerprint)
        return self._delete(f"{KEYS_BASE_PATH}/{fingerprint}")

    def _get(self, path: str) -> tuple[Key | None, Response]:
        response = self._client.do(self._client.new_request("GET", path))
        return _key_from_root(response.json()), response

    def _put(self, path: str, request: KeyUpdateRequest) -> tuple[Key | None, Response]:
        response = self._client.do(self._client.new_request("PUT", path, request))
        return _key_from_root(response.json()), response

    def _delete(self, path: str) -> Response:
        return self._client.do(self._client.new_request("DELETE", path))
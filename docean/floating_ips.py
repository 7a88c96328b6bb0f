"""Floating IPs and their actions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .client import Client, ListOptions, Response, add_options
from .links import Links

FLOATING_IPS_BASE_PATH = "v2/floating_ips"


def _apply_links(response: Response, root: Mapping[str, Any]) -> None:
    links = root.get("links")
    if links is not None:
        response.links = Links.from_dict(links)


@dataclass
class FloatingIP:
    """A floating IP with the region and droplet it belongs to, as sent by the API."""

    region: dict[str, Any] | None = None
    droplet: dict[str, Any] | None = None
    ip: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FloatingIP":
        region = data.get("region")
        droplet = data.get("droplet")
        return cls(
            region=dict(region) if region is not None else None,
            droplet=dict(droplet) if droplet is not None else None,
            ip=data.get("ip") or "",
        )

    def urn(self) -> str:
        """Return the uniform resource name of this floating IP."""
        return f"do:floatingip:{self.ip}"


@dataclass
class FloatingIPCreateRequest:
    """A request to create a floating IP, assigned to a droplet if one is given."""

    region: str = ""
    droplet_id: int = 0

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"region": self.region}
        if self.droplet_id:
            result["droplet_id"] = self.droplet_id
        return result


def _floating_ip_from_root(root: Mapping[str, Any]) -> FloatingIP | None:
    data = root.get("floating_ip")
    return FloatingIP.from_dict(data) if data is not None else None


class FloatingIPsService:
    """Calls to the floating IPs endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def list(self, options: ListOptions | None = None) -> tuple[list[FloatingIP], Response]:
        """List all floating IPs."""
        path = add_options(FLOATING_IPS_BASE_PATH, options)
        response = self._client.do(self._client.new_request("GET", path))
        root = response.json()
        _apply_links(response, root)
        return [FloatingIP.from_dict(f) for f in root.get("floating_ips") or []], response

    def get(self, ip: str) -> tuple[FloatingIP | None, Response]:
        """Fetch one floating IP."""
        path = f"{FLOATING_IPS_BASE_PATH}/{ip}"
        response = self._client.do(self._client.new_request("GET", path))
        return _floating_ip_from_root(response.json()), response

    def create(self, request: FloatingIPCreateRequest) -> tuple[FloatingIP | None, Response]:
        """Create a floating IP."""
        response = self._client.do(
            self._client.new_request("POST", FLOATING_IPS_BASE_PATH, request)
        )
        root = response.json()
        _apply_links(response, root)
        return _floating_ip_from_root(root), response

    def delete(self, ip: str) -> Response:
        """Delete a floating IP."""
        path = f"{FLOATING_IPS_BASE_PATH}/{ip}"
        return self._client.do(self._client.new_request("DELETE", path))


def _action_path(ip: str) -> str:
    return f"{FLOATING_IPS_BASE_PATH}/{ip}/actions"


class FloatingIPActionsService:
    """Calls to the floating IP actions endpoints; actions are returned as dicts."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def assign(self, ip: str, droplet_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Assign a floating IP to a droplet."""
        return self._do_action(ip, {"type": "assign", "droplet_id": droplet_id})

    def unassign(self, ip: str) -> tuple[dict[str, Any] | None, Response]:
        """Unassign a floating IP from its droplet."""
        return self._do_action(ip, {"type": "unassign"})

    def get(self, ip: str, action_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Fetch one action of a floating IP."""
        path = f"{_action_path(ip)}/{action_id}"
        response = self._client.do(self._client.new_request("GET", path))
        return response.json().get("action"), response

    def list(
        self, ip: str, options: ListOptions | None = None
    ) -> tuple[list[dict[str, Any]], Response]:
        """List the actions of a floating IP."""
        path = add_options(_action_path(ip), options)
        response = self._client.do(self._client.new_request("GET", path))
        root = response.json()
        _apply_links(response, root)
        return list(root.get("actions") or []), response

    def _do_action(
        self, ip: str, request: dict[str, Any]
    ) -> tuple[dict[str, Any] | None, Response]:
        response = self._client.do(self._client.new_request("POST", _action_path(ip), request))
        return response.json().get("action"), response
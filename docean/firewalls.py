"""Firewalls: models and API calls."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import Any, Mapping

from .client import Client, ListOptions, Response, add_options
from .links import Links

FIREWALLS_BASE_PATH = "/v2/firewalls"
_DROPLETS_BASE_PATH = "v2/droplets"


def _join(*parts: str) -> str:
    return posixpath.normpath(posixpath.join(*parts))


def _targets_kwargs(data: Mapping[str, Any]) -> dict[str, list[Any]]:
    return {
        "addresses": list(data.get("addresses") or []),
        "tags": list(data.get("tags") or []),
        "droplet_ids": list(data.get("droplet_ids") or []),
        "load_balancer_uids": list(data.get("load_balancer_uids") or []),
    }


def _targets_dict(
    addresses: list[str],
    tags: list[str],
    droplet_ids: list[int],
    load_balancer_uids: list[str],
) -> dict[str, Any]:
    fields = {
        "addresses": addresses,
        "tags": tags,
        "droplet_ids": droplet_ids,
        "load_balancer_uids": load_balancer_uids,
    }
    return {key: list(value) for key, value in fields.items() if value}


@dataclass
class Sources:
    """Where inbound traffic may come from."""

    addresses: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    droplet_ids: list[int] = field(default_factory=list)
    load_balancer_uids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Sources":
        return cls(**_targets_kwargs(data))

    def to_dict(self) -> dict[str, Any]:
        return _targets_dict(
            self.addresses, self.tags, self.droplet_ids, self.load_balancer_uids
        )


@dataclass
class Destinations:
    """Where outbound traffic may go to."""

    addresses: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    droplet_ids: list[int] = field(default_factory=list)
    load_balancer_uids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Destinations":
        return cls(**_targets_kwargs(data))

    def to_dict(self) -> dict[str, Any]:
        return _targets_dict(
            self.addresses, self.tags, self.droplet_ids, self.load_balancer_uids
        )


@dataclass
class InboundRule:
    """A firewall rule for incoming traffic."""

    protocol: str = ""
    port_range: str = ""
    sources: Sources | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "InboundRule":
        sources = data.get("sources")
        return cls(
            protocol=data.get("protocol") or "",
            port_range=data.get("ports") or "",
            sources=Sources.from_dict(sources) if sources is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.protocol:
            result["protocol"] = self.protocol
        if self.port_range:
            result["ports"] = self.port_range
        result["sources"] = self.sources.to_dict() if self.sources is not None else None
        return result


@dataclass
class OutboundRule:
    """A firewall rule for outgoing traffic."""

    protocol: str = ""
    port_range: str = ""
    destinations: Destinations | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OutboundRule":
        destinations = data.get("destinations")
        return cls(
            protocol=data.get("protocol") or "",
            port_range=data.get("ports") or "",
            destinations=(
                Destinations.from_dict(destinations) if destinations is not None else None
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.protocol:
            result["protocol"] = self.protocol
        if self.port_range:
            result["ports"] = self.port_range
        result["destinations"] = (
            self.destinations.to_dict() if self.destinations is not None else None
        )
        return result


@dataclass
class PendingChange:
    """A change to a firewall that has not been applied yet."""

    droplet_id: int = 0
    removing: bool = False
    status: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PendingChange":
        return cls(
            droplet_id=data.get("droplet_id") or 0,
            removing=bool(data.get("removing")),
            status=data.get("status") or "",
        )


@dataclass
class Firewall:
    """A firewall configuration."""

    id: str = ""
    name: str = ""
    status: str = ""
    inbound_rules: list[InboundRule] = field(default_factory=list)
    outbound_rules: list[OutboundRule] = field(default_factory=list)
    droplet_ids: list[int] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    created: str = ""
    pending_changes: list[PendingChange] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Firewall":
        return cls(
            id=data.get("id") or "",
            name=data.get("name") or "",
            status=data.get("status") or "",
            inbound_rules=[InboundRule.from_dict(r) for r in data.get("inbound_rules") or []],
            outbound_rules=[
                OutboundRule.from_dict(r) for r in data.get("outbound_rules") or []
            ],
            droplet_ids=list(data.get("droplet_ids") or []),
            tags=list(data.get("tags") or []),
            created=data.get("created_at") or "",
            pending_changes=[
                PendingChange.from_dict(c) for c in data.get("pending_changes") or []
            ],
        )

    def urn(self) -> str:
        """Return the uniform resource name of this firewall."""
        return f"do:firewall:{self.id}"


def _rules_to_dict(rules: list[Any] | None) -> list[dict[str, Any]] | None:
    return None if rules is None else [rule.to_dict() for rule in rules]


@dataclass
class FirewallRequest:
    """Configuration for a new firewall or for replacing an existing one."""

    name: str = ""
    inbound_rules: list[InboundRule] | None = None
    outbound_rules: list[OutboundRule] | None = None
    droplet_ids: list[int] | None = None
    tags: list[str] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "inbound_rules": _rules_to_dict(self.inbound_rules),
            "outbound_rules": _rules_to_dict(self.outbound_rules),
            "droplet_ids": None if self.droplet_ids is None else list(self.droplet_ids),
            "tags": None if self.tags is None else list(self.tags),
        }


@dataclass
class FirewallRulesRequest:
    """Rules to add to or remove from an existing firewall."""

    inbound_rules: list[InboundRule] | None = None
    outbound_rules: list[OutboundRule] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "inbound_rules": _rules_to_dict(self.inbound_rules),
            "outbound_rules": _rules_to_dict(self.outbound_rules),
        }


def _firewall_from_root(root: Mapping[str, Any]) -> Firewall | None:
    data = root.get("firewall")
    return Firewall.from_dict(data) if data is not None else None


class FirewallsService:
    """Calls to the firewalls endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def get(self, firewall_id: str) -> tuple[Firewall | None, Response]:
        """Fetch a firewall by its identifier."""
        return self._fetch_one("GET", _join(FIREWALLS_BASE_PATH, firewall_id), None)

    def create(self, request: FirewallRequest) -> tuple[Firewall | None, Response]:
        """Create a firewall."""
        return self._fetch_one("POST", FIREWALLS_BASE_PATH, request)

    def update(
        self, firewall_id: str, request: FirewallRequest
    ) -> tuple[Firewall | None, Response]:
        """Replace the configuration of a firewall."""
        return self._fetch_one("PUT", _join(FIREWALLS_BASE_PATH, firewall_id), request)

    def delete(self, firewall_id: str) -> Response:
        """Delete a firewall."""
        return self._send("DELETE", _join(FIREWALLS_BASE_PATH, firewall_id), None)

    def list(self, options: ListOptions | None = None) -> tuple[list[Firewall], Response]:
        """List all firewalls."""
        return self._fetch_many(add_options(FIREWALLS_BASE_PATH, options))

    def list_by_droplet(
        self, droplet_id: int, options: ListOptions | None = None
    ) -> tuple[list[Firewall], Response]:
        """List the firewalls applied to a droplet."""
        base = _join(_DROPLETS_BASE_PATH, str(droplet_id), "firewalls")
        return self._fetch_many(add_options(base, options))

    def add_droplets(self, firewall_id: str, *args: int) -> Response:
        """Apply a firewall to the droplets whose ids are given."""
        body = {"droplet_ids": list(args) or None}
        return self._send("POST", _join(FIREWALLS_BASE_PATH, firewall_id, "droplets"), body)

    def remove_droplets(self, firewall_id: str, *args: int) -> Response:
        """Remove the droplets whose ids are given from a firewall."""
        body = {"droplet_ids": list(args) or None}
        return self._send("DELETE", _join(FIREWALLS_BASE_PATH, firewall_id, "droplets"), body)

    def add_tags(self, firewall_id: str, *args: str) -> Response:
        """Apply a firewall to the droplets carrying the given tags."""
        body = {"tags": list(args) or None}
        return self._send("POST", _join(FIREWALLS_BASE_PATH, firewall_id, "tags"), body)

    def remove_tags(self, firewall_id: str, *args: str) -> Response:
        """Remove the given tags from a firewall."""
        body = {"tags": list(args) or None}
        return self._send("DELETE", _join(FIREWALLS_BASE_PATH, firewall_id, "tags"), body)

    def add_rules(self, firewall_id: str, rules: FirewallRulesRequest) -> Response:
        """Add rules to a firewall."""
        return self._send("POST", _join(FIREWALLS_BASE_PATH, firewall_id, "rules"), rules)

    def remove_rules(self, firewall_id: str, rules: FirewallRulesRequest) -> Response:
        """Remove rules from a firewall."""
        return self._send("DELETE", _join(FIREWALLS_BASE_PATH, firewall_id, "rules"), rules)

    def _send(self, method: str, path: str, body: Any) -> Response:
        return self._client.do(self._client.new_request(method, path, body))

    def _fetch_one(
        self, method: str, path: str, body: Any
    ) -> tuple[Firewall | None, Response]:
        response = self._send(method, path, body)
        return _firewall_from_root(response.json()), response

    def _fetch_many(self, path: str) -> tuple[list[Firewall], Response]:
        response = self._send("GET", path, None)
        root = response.json()
        links = root.get("links")
        if links is not None:
            response.links = Links.from_dict(links)
        return [Firewall.from_dict(f) for f in root.get("firewalls") or []], response
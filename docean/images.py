"""Images and image actions: models and API calls."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from .client import Client, ListOptions, Response, add_options
from .links import Links

IMAGES_BASE_PATH = "v2/images"


@dataclass
class Image:
    """An image that droplets can be created from."""

    id: int = 0
    name: str = ""
    type: str = ""
    distribution: str = ""
    slug: str = ""
    public: bool = False
    regions: list[str] = field(default_factory=list)
    min_disk_size: int = 0
    size_gigabytes: float = 0.0
    created: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)
    status: str = ""
    error_message: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Image":
        return cls(
            id=int(data.get("id") or 0),
            name=data.get("name") or "",
            type=data.get("type") or "",
            distribution=data.get("distribution") or "",
            slug=data.get("slug") or "",
            public=bool(data.get("public")),
            regions=list(data.get("regions") or []),
            min_disk_size=data.get("min_disk_size") or 0,
            size_gigabytes=float(data.get("size_gigabytes") or 0.0),
            created=data.get("created_at") or "",
            description=data.get("description") or "",
            tags=list(data.get("tags") or []),
            status=data.get("status") or "",
            error_message=data.get("error_message") or "",
        )


@dataclass
class ImageUpdateRequest:
    """A request to rename an image."""

    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name}


@dataclass
class CustomImageCreateRequest:
    """A request to create a custom image from a URL."""

    name: str = ""
    url: str = ""
    region: str = ""
    distribution: str = ""
    description: str = ""
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "name": self.name,
            "url": self.url,
            "region": self.region,
        }
        if self.distribution:
            result["distribution"] = self.distribution
        if self.description:
            result["description"] = self.description
        if self.tags:
            result["tags"] = list(self.tags)
        return result


def _image_from_root(root: Mapping[str, Any]) -> Image | None:
    data = root.get("image")
    return Image.from_dict(data) if data is not None else None


def _require_positive(name: str, value: int) -> None:
    if value < 1:
        raise ValueError(f"{name} is invalid because cannot be less than 1")


class ImagesService:
    """Calls to the images endpoints."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def list(self, options: ListOptions | None = None) -> tuple[list[Image], Response]:
        """List all available images."""
        return self._list(options, None)

    def list_distribution(
        self, options: ListOptions | None = None
    ) -> tuple[list[Image], Response]:
        """List the distribution images."""
        return self._list(options, {"type": "distribution"})

    def list_application(
        self, options: ListOptions | None = None
    ) -> tuple[list[Image], Response]:
        """List the application images."""
        return self._list(options, {"type": "application"})

    def list_user(self, options: ListOptions | None = None) -> tuple[list[Image], Response]:
        """List the user's private images."""
        return self._list(options, {"private": True})

    def list_by_tag(
        self, tag: str, options: ListOptions | None = None
    ) -> tuple[list[Image], Response]:
        """List the images carrying a tag."""
        return self._list(options, {"tag_name": tag} if tag else {})

    def get_by_id(self, image_id: int) -> tuple[Image | None, Response]:
        """Fetch an image by its id."""
        _require_positive("imageID", image_id)
        return self._get(image_id)

    def get_by_slug(self, slug: str) -> tuple[Image | None, Response]:
        """Fetch an image by its slug."""
        if not slug:
            raise ValueError("slug is invalid because cannot be blank")
        return self._get(slug)

    def create(self, request: CustomImageCreateRequest) -> tuple[Image | None, Response]:
        """Create a custom image."""
        if request is None:
            raise ValueError("createRequest is invalid because cannot be nil")
        response = self._client.do(
            self._client.new_request("POST", IMAGES_BASE_PATH, request)
        )
        return _image_from_root(response.json()), response

    def update(
        self, image_id: int, request: ImageUpdateRequest
    ) -> tuple[Image | None, Response]:
        """Rename an image."""
        _require_positive("imageID", image_id)
        if request is None:
            raise ValueError("updateRequest is invalid because cannot be nil")
        path = f"{IMAGES_BASE_PATH}/{image_id}"
        response = self._client.do(self._client.new_request("PUT", path, request))
        return _image_from_root(response.json()), response

    def delete(self, image_id: int) -> Response:
        """Delete an image."""
        _require_positive("imageID", image_id)
        path = f"{IMAGES_BASE_PATH}/{image_id}"
        return self._client.do(self._client.new_request("DELETE", path))

    def _get(self, identifier: int | str) -> tuple[Image | None, Response]:
        path = f"{IMAGES_BASE_PATH}/{identifier}"
        response = self._client.do(self._client.new_request("GET", path))
        return _image_from_root(response.json()), response

    def _list(
        self, options: ListOptions | None, filters: dict[str, Any] | None
    ) -> tuple[list[Image], Response]:
        path = add_options(IMAGES_BASE_PATH, options)
        path = add_options(path, filters)
        response = self._client.do(self._client.new_request("GET", path))
        root = response.json()
        links = root.get("links")
        if links is not None:
            response.links = Links.from_dict(links)
        return [Image.from_dict(i) for i in root.get("images") or []], response


class ImageActionsService:
    """Calls to the image actions endpoints; actions are returned as dicts."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def transfer(
        self, image_id: int, request: dict[str, Any]
    ) -> tuple[dict[str, Any] | None, Response]:
        """Transfer an image to another region."""
        _require_positive("imageID", image_id)
        if request is None:
            raise ValueError("transferRequest is invalid because cannot be nil")
        return self._post(image_id, request)

    def convert(self, image_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Convert an image to a snapshot."""
        _require_positive("imageID", image_id)
        return self._post(image_id, {"type": "convert"})

    def get(self, image_id: int, action_id: int) -> tuple[dict[str, Any] | None, Response]:
        """Fetch one action of an image."""
        _require_positive("imageID", image_id)
        _require_positive("actionID", action_id)
        path = f"{IMAGES_BASE_PATH}/{image_id}/actions/{action_id}"
        response = self._client.do(self._client.new_request("GET", path))
        return response.json().get("action"), response

    def _post(
        self, image_id: int, request: dict[str, Any]
    ) -> tuple[dict[str, Any] | None, Response]:
        path = f"{IMAGES_BASE_PATH}/{image_id}/actions"
        response = self._client.do(self._client.new_request("POST", path, request))
        return response.json().get("action"), response
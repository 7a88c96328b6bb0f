import json

import pytest
import responses

from docean.client import Client, ErrorResponse, ListOptions
from docean.floating_ips import (
    FloatingIP,
    FloatingIPActionsService,
    FloatingIPCreateRequest,
    FloatingIPsService,
)

BASE = "https://api.digitalocean.com"
LIST_BODY = (
    '{"floating_ips": [{"region":{"slug":"nyc3"},"droplet":{"id":1},"ip":"192.168.0.1"},'
    '{"region":{"slug":"nyc3"},"droplet":{"id":2},"ip":"192.168.0.2"}]'
)
ONE_BODY = '{"floating_ip":{"region":{"slug":"nyc3"},"droplet":{"id":1},"ip":"192.168.0.1"}}'
ACTION_BODY = '{"action":{"status":"in-progress"}}'


@pytest.fixture
def api():
    with responses.RequestsMock() as mock:
        yield mock


@pytest.fixture
def ips():
    return FloatingIPsService(Client())


@pytest.fixture
def actions():
    return FloatingIPActionsService(Client())


def test_list(api, ips):
    api.add(responses.GET, f"{BASE}/v2/floating_ips", body=LIST_BODY + "}")
    floating_ips, _ = ips.list(None)
    assert floating_ips == [
        FloatingIP(region={"slug": "nyc3"}, droplet={"id": 1}, ip="192.168.0.1"),
        FloatingIP(region={"slug": "nyc3"}, droplet={"id": 2}, ip="192.168.0.2"),
    ]


def test_list_multiple_pages(api, ips):
    body = LIST_BODY + ', "links":{"pages":{"next":"http://example.com/v2/floating_ips/?page=2"}}}'
    api.add(responses.GET, f"{BASE}/v2/floating_ips", body=body)
    _, response = ips.list(None)
    assert response.links.current_page() == 1


def test_retrieve_page_by_number(api, ips):
    body = LIST_BODY + """,
        "links": {"pages": {
            "next": "http://example.com/v2/floating_ips/?page=3",
            "prev": "http://example.com/v2/floating_ips/?page=1",
            "last": "http://example.com/v2/floating_ips/?page=3",
            "first": "http://example.com/v2/floating_ips/?page=1"}}}"""
    api.add(responses.GET, f"{BASE}/v2/floating_ips?page=2", body=body)
    _, response = ips.list(ListOptions(page=2))
    assert response.links.current_page() == 2


def test_get(api, ips):
    api.add(responses.GET, f"{BASE}/v2/floating_ips/192.168.0.1", body=ONE_BODY)
    floating_ip, _ = ips.get("192.168.0.1")
    assert floating_ip == FloatingIP(region={"slug": "nyc3"}, droplet={"id": 1}, ip="192.168.0.1")


def test_create(api, ips):
    api.add(responses.POST, f"{BASE}/v2/floating_ips", body=ONE_BODY)
    floating_ip, _ = ips.create(FloatingIPCreateRequest(region="nyc3", droplet_id=1))
    assert json.loads(api.calls[0].request.body) == {"region": "nyc3", "droplet_id": 1}
    assert floating_ip == FloatingIP(region={"slug": "nyc3"}, droplet={"id": 1}, ip="192.168.0.1")


def test_create_request_omits_missing_droplet():
    assert FloatingIPCreateRequest(region="nyc3").to_dict() == {"region": "nyc3"}


def test_delete(api, ips):
    api.add(responses.DELETE, f"{BASE}/v2/floating_ips/192.168.0.1", status=204)
    response = ips.delete("192.168.0.1")
    assert response.status_code == 204


def test_get_error(api, ips):
    api.add(
        responses.GET,
        f"{BASE}/v2/floating_ips/192.168.0.9",
        status=404,
        json={"message": "not found", "request_id": "r1"},
    )
    with pytest.raises(ErrorResponse) as info:
        ips.get("192.168.0.9")
    assert info.value.request_id == "r1"


def test_urn():
    assert FloatingIP(ip="192.168.0.1").urn() == "do:floatingip:192.168.0.1"


def test_action_assign(api, actions):
    api.add(responses.POST, f"{BASE}/v2/floating_ips/192.168.0.1/actions", body=ACTION_BODY)
    action, _ = actions.assign("192.168.0.1", 12345)
    assert json.loads(api.calls[0].request.body) == {"droplet_id": 12345, "type": "assign"}
    assert action == {"status": "in-progress"}


def test_action_unassign(api, actions):
    api.add(responses.POST, f"{BASE}/v2/floating_ips/192.168.0.1/actions", body=ACTION_BODY)
    action, _ = actions.unassign("192.168.0.1")
    assert json.loads(api.calls[0].request.body) == {"type": "unassign"}
    assert action == {"status": "in-progress"}


def test_action_get(api, actions):
    api.add(responses.GET, f"{BASE}/v2/floating_ips/192.168.0.1/actions/456", body=ACTION_BODY)
    action, _ = actions.get("192.168.0.1", 456)
    assert action == {"status": "in-progress"}


def test_action_list(api, actions):
    api.add(
        responses.GET,
        f"{BASE}/v2/floating_ips/192.168.0.1/actions",
        body='{"actions":[{"status":"in-progress"}]}',
    )
    listed, _ = actions.list("192.168.0.1", None)
    assert listed == [{"status": "in-progress"}]


def test_action_list_multiple_pages(api, actions):
    api.add(
        responses.GET,
        f"{BASE}/v2/floating_ips/192.168.0.1/actions",
        body='{"actions":[{"status":"in-progress"}], "links":{"pages":'
        '{"next":"http://example.com/v2/floating_ips/192.168.0.1/actions?page=2"}}}',
    )
    _, response = actions.list("192.168.0.1", None)
    assert response.links.current_page() == 1


def test_action_list_page_by_number(api, actions):
    body = """
    {
        "actions":[{"status":"in-progress"}],
        "links":{"pages":{
            "next":"http://example.com/v2/regions/?page=3",
            "prev":"http://example.com/v2/regions/?page=1",
            "last":"http://example.com/v2/regions/?page=3",
            "first":"http://example.com/v2/regions/?page=1"}}
    }"""
    api.add(responses.GET, f"{BASE}/v2/floating_ips/192.168.0.1/actions?page=2", body=body)
    _, response = actions.list("192.168.0.1", ListOptions(page=2))
    assert response.links.current_page() == 2
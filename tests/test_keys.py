import json

import pytest
import responses

from docean.client import Client, ListOptions
from docean.keys import Key, KeyCreateRequest, KeysService, KeyUpdateRequest

BASE = "https://api.digitalocean.com"
FINGERPRINT = "3b:16:bf:e4:8b:00:8b:b8:59:8c:a9:d3:f0:19:45:fa"


@pytest.fixture
def mock():
    with responses.RequestsMock() as rsps:
        yield rsps


@pytest.fixture
def keys():
    return KeysService(Client())


def _body(mock):
    return json.loads(mock.calls[0].request.body)


def test_list(mock, keys):
    mock.add("GET", f"{BASE}/v2/account/keys", body='{"ssh_keys":[{"id":1},{"id":2}]}')
    result, _ = keys.list(None)
    assert result == [Key(id=1), Key(id=2)]


def test_list_multiple_pages(mock, keys):
    mock.add(
        "GET",
        f"{BASE}/v2/account/keys",
        body='{"droplets": [{"id":1},{"id":2}], "links":{"pages":{"next":"http://example.com/v2/account/keys/?page=2"}}}',
    )
    result, resp = keys.list(None)
    assert result == []
    assert resp.links.current_page() == 1


def test_retrieve_page_by_number(mock, keys):
    blob = """
    {
        "keys": [{"id":1},{"id":2}],
        "links":{
            "pages":{
                "next":"http://example.com/v2/account/keys/?page=3",
                "prev":"http://example.com/v2/account/keys/?page=1",
                "last":"http://example.com/v2/account/keys/?page=3",
                "first":"http://example.com/v2/account/keys/?page=1"
            }
        }
    }"""
    mock.add("GET", f"{BASE}/v2/account/keys", body=blob)
    _, resp = keys.list(ListOptions(page=2))
    assert resp.links.current_page() == 2
    assert resp.links.is_last_page() is False


def test_get_by_id(mock, keys):
    mock.add("GET", f"{BASE}/v2/account/keys/12345", body='{"ssh_key": {"id":12345}}')
    key, _ = keys.get_by_id(12345)
    assert key == Key(id=12345)


def test_get_by_fingerprint(mock, keys):
    mock.add("GET", f"{BASE}/v2/account/keys/aa:bb:cc", body='{"ssh_key": {"fingerprint":"aa:bb:cc"}}')
    key, _ = keys.get_by_fingerprint("aa:bb:cc")
    assert key == Key(fingerprint="aa:bb:cc")


def test_create(mock, keys):
    request = KeyCreateRequest(name="name", public_key="ssh-rsa longtextandstuff")
    mock.add("POST", f"{BASE}/v2/account/keys", body='{"ssh_key":{"id":1}}')
    key, _ = keys.create(request)
    assert _body(mock) == {"name": "name", "public_key": "ssh-rsa longtextandstuff"}
    assert mock.calls[0].request.method == "POST"
    assert key == Key(id=1)


def test_update_by_id(mock, keys):
    mock.add("PUT", f"{BASE}/v2/account/keys/12345", body='{"ssh_key":{"id":1}}')
    key, _ = keys.update_by_id(12345, KeyUpdateRequest(name="name"))
    assert _body(mock) == {"name": "name"}
    assert key.id == 1


def test_update_by_fingerprint(mock, keys):
    mock.add("PUT", f"{BASE}/v2/account/keys/{FINGERPRINT}", body='{"ssh_key":{"id":1}}')
    key, _ = keys.update_by_fingerprint(FINGERPRINT, KeyUpdateRequest(name="name"))
    assert _body(mock) == {"name": "name"}
    assert key.id == 1


def test_delete_by_id(mock, keys):
    mock.add("DELETE", f"{BASE}/v2/account/keys/12345")
    resp = keys.delete_by_id(12345)
    assert resp.status_code == 200
    assert mock.calls[0].request.method == "DELETE"


def test_delete_by_fingerprint(mock, keys):
    mock.add("DELETE", f"{BASE}/v2/account/keys/aa:bb:cc")
    resp = keys.delete_by_fingerprint("aa:bb:cc")
    assert resp.status_code == 200
    assert mock.calls[0].request.url.endswith("/v2/account/keys/aa:bb:cc")


def test_invalid_arguments(keys):
    with pytest.raises(ValueError):
        keys.get_by_id(0)
    with pytest.raises(ValueError):
        keys.get_by_fingerprint("")
    with pytest.raises(ValueError):
        keys.create(None)
    with pytest.raises(ValueError):
        keys.update_by_id(0, KeyUpdateRequest(name="n"))
    with pytest.raises(ValueError):
        keys.update_by_id(1, None)
    with pytest.raises(ValueError):
        keys.update_by_fingerprint("", KeyUpdateRequest(name="n"))
    with pytest.raises(ValueError):
        keys.delete_by_id(-5)
    with pytest.raises(ValueError):
        keys.delete_by_fingerprint("")


def test_key_from_dict_round_values():
    key = Key.from_dict(
        {"id": 123, "name": "Key", "fingerprint": "fingerprint", "public_key": "public key"}
    )
    assert key == Key(id=123, name="Key", fingerprint="fingerprint", public_key="public key")
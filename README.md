# docean

A Python client for the DigitalOcean v2 REST API. It covers firewalls,
floating IPs and their actions, images and image actions, and SSH keys, and
it keeps track of the rate limit the API reports with each response.

## Installation

```
pip install docean
```

To run the test suite, install the test extra:

```
pip install "docean[test]"
pytest
```

## Setting up a client

`docean.client.Client` sends its requests through a `requests.Session`, so
authentication is whatever headers you put on that session:

```python
import requests

from docean.client import Client

session = requests.Session()
session.headers["Authorization"] = "Bearer token"

client = Client(session, "https://api.digitalocean.com/", "my-tool/1.0")
```

All three arguments are optional. Without a session a new one is made; the
base URL defaults to `https://api.digitalocean.com/`; a user agent you pass
is put in front of the library's own one (`godo/1.16.0`).

The client builds requests with `new_request(method, path, body)`, which
resolves `path` against the base URL and encodes `body` as JSON (calling its
`to_dict()` if it has one), and sends them with `do(request)`. After each
call, `client.rate` holds the `Rate` (limit, remaining, reset time) read from
the response headers. `on_request_completed(callback)` registers a function
called with the prepared request and the raw response after every completed
request.

`do` returns a `docean.client.Response`, which wraps the `requests.Response`
and offers `status_code`, `headers`, `content`, `json()`, `rate` and, for
list calls, the parsed pagination `links`.

## Services

Each service takes a `Client`:

```python
from docean.firewalls import FirewallsService
from docean.keys import KeysService

firewalls = FirewallsService(client)
keys = KeysService(client)

key_list, response = keys.list()
firewall, response = firewalls.get("fe6b88f2-b42b-4bf7-bbd3-5ae20208f0b0")
```

| Module | Service | Methods |
| --- | --- | --- |
| `docean.firewalls` | `FirewallsService` | `get`, `create`, `update`, `delete`, `list`, `list_by_droplet`, `add_droplets`, `remove_droplets`, `add_tags`, `remove_tags`, `add_rules`, `remove_rules` |
| `docean.floating_ips` | `FloatingIPsService` | `list`, `get`, `create`, `delete` |
| `docean.floating_ips` | `FloatingIPActionsService` | `assign`, `unassign`, `get`, `list` |
| `docean.images` | `ImagesService` | `list`, `list_distribution`, `list_application`, `list_user`, `list_by_tag`, `get_by_id`, `get_by_slug`, `create`, `update`, `delete` |
| `docean.images` | `ImageActionsService` | `transfer`, `convert`, `get` |
| `docean.keys` | `KeysService` | `list`, `get_by_id`, `get_by_fingerprint`, `create`, `update_by_id`, `update_by_fingerprint`, `delete_by_id`, `delete_by_fingerprint` |

Calls that fetch data return a pair of the result and the `Response`;
calls that only act (deletes, adding or removing droplets, tags and rules)
return the `Response`.

Models and request types live next to their services: `Firewall`,
`FirewallRequest`, `FirewallRulesRequest`, `InboundRule`, `OutboundRule`,
`Sources`, `Destinations` and `PendingChange` in `docean.firewalls`;
`FloatingIP` and `FloatingIPCreateRequest` in `docean.floating_ips`;
`Image`, `ImageUpdateRequest` and `CustomImageCreateRequest` in
`docean.images`; `Key`, `KeyCreateRequest` and `KeyUpdateRequest` in
`docean.keys`.

Actions (from the floating IP and image action services) are returned as
plain dicts as the API sends them, and so are the `region` and `droplet` of
a `FloatingIP`. `ImageActionsService.transfer` takes its request as a dict,
for example `{"type": "transfer", "region": "nyc3"}`.

## Pagination

List calls accept a `docean.client.ListOptions(page=..., per_page=...)`.
The links the API returns with a list are parsed into `docean.links.Links`
and set on `response.links`:

```python
from docean.links import Links

links = Links.from_dict({
    "pages": {
        "first": "https://api.digitalocean.com/v2/droplets/?page=1",
        "prev": "https://api.digitalocean.com/v2/droplets/?page=1",
        "next": "https://api.digitalocean.com/v2/droplets/?page=3",
        "last": "https://api.digitalocean.com/v2/droplets/?page=3",
    }
})
links.current_page()   # 2
links.is_last_page()   # False
```

`docean.links.page_for_url` extracts the `page` parameter of a link and
raises `ValueError` when the URL is empty, not absolute, or has no valid
page number. `docean.client.add_options` merges a `ListOptions` (or a
mapping) into the query string of a path.

## Errors

Arguments the API would reject, such as an image or key id below 1, an
empty slug or fingerprint, or a missing request object, raise `ValueError`
before any request is made. A path or base URL that cannot be parsed raises
`docean.client.URLError`, a `ValueError` subclass.

A response outside the 2xx range raises `docean.client.ErrorResponse`,
which carries the raw `response`, the API's `message` and its `request_id`,
and renders as the method, URL, status code, request id (if any) and
message. `docean.client.check_response` performs this check on any
`requests.Response`.

## What the package does not do

The package covers only the endpoints listed above. It has no support for
Kubernetes clusters or node pools, nor for droplets, domains, load
balancers, volumes, projects, databases or the other parts of the API, and
there is no single object that bundles all services together: create each
service from a `Client` yourself. It also ships no command-line tool.
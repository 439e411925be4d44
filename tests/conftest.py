from typing import Any, Callable, Dict, List

import httpx
import pytest
from rich.console import Console

from gandi_cli import display


@pytest.fixture(autouse=True)
def plain_console(monkeypatch: pytest.MonkeyPatch) -> None:
    """Render human output without ANSI colors whatever the environment says."""

    monkeypatch.setattr(
        display,
        "console",
        Console(highlight=False, soft_wrap=True, color_system=None, no_color=True),
    )


@pytest.fixture
def mock_client() -> Callable[..., httpx.Client]:
    """Build an ``httpx.Client`` answering every request with a canned response.

    Requests are appended to ``captured`` when given.
    """

    def _factory(
        status: int = 200,
        json: Any = None,
        text: str | None = None,
        headers: Dict[str, str] | None = None,
        captured: List[httpx.Request] | None = None,
    ) -> httpx.Client:
        def _handler(request: httpx.Request) -> httpx.Response:
            if captured is not None:
                captured.append(request)
            if text is not None:
                return httpx.Response(status, text=text, headers=headers)
            return httpx.Response(status, json=json, headers=headers)

        return httpx.Client(transport=httpx.MockTransport(_handler))

    return _factory


@pytest.fixture
def domain_payload() -> List[Dict[str, Any]]:
    return [
        {
            "id": "ba1167be-ae18-11e9-8f72-00163ec4cb00",
            "orga_owner": "alice",
            "owner": "alice",
            "sharing_id": "f1e2d3c4-0000-11e9-8f72-00163ec4cb00",
            "fqdn": "example.com",
            "fqdn_unicode": "example.com",
            "autorenew": True,
            "tld": "com",
            "tags": ["prod", "web"],
            "dates": {
                "registry_created_at": "2019-02-13T10:04:18Z",
                "updated_at": "2019-02-25T16:20:49Z",
                "registry_ends_at": "2021-02-13T10:04:18Z",
            },
            "nameserver": {"current": "livedns"},
        },
        {
            "id": "c2a3e5f0-ae18-11e9-8f72-00163ec4cb00",
            "orga_owner": "alice",
            "owner": "bob",
            "sharing_id": None,
            "fqdn": "xn--caf-dma.fr",
            "fqdn_unicode": "café.fr",
            "autorenew": False,
            "tld": "fr",
            "tags": [],
            "dates": {
                "registry_created_at": "2020-06-01T08:00:00Z",
                "updated_at": "2020-06-02T08:00:00Z",
            },
            "nameserver": {"current": "abc", "hosts": ["ns1.example.net"]},
        },
    ]


def _contact(**overrides: Any) -> Dict[str, Any]:
    contact = {
        "type": 0,
        "given": "Alice",
        "family": "Doe",
        "streetaddr": "1 rue de la Paix",
        "zip": "75001",
        "city": "Paris",
        "country": "FR",
        "email": "alice@example.com",
    }
    contact.update(overrides)
    return contact


@pytest.fixture
def contacts_payload() -> Dict[str, Any]:
    return {
        "owner": _contact(),
        "admin": _contact(same_as_owner=True),
        "tech": _contact(type=1, orgname="Example Corp", email="tech@example.com", same_as_owner=False),
        "bill": _contact(same_as_owner=True),
    }


@pytest.fixture
def domain_details_payload(contacts_payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": "ba1167be-ae18-11e9-8f72-00163ec4cb00",
        "fqdn": "example.com",
        "fqdn_unicode": "example.com",
        "tld": "com",
        "can_tld_lock": False,
        "authinfo": "s3cr3t",
        "nameservers": ["ns-1.gandi.net", "ns-2.gandi.net"],
        "services": ["gandilivedns", "mailboxv2"],
        "tags": ["prod"],
        "sharing_space": {"id": "f1e2d3c4", "name": "Alice Org"},
        "autorenew": {
            "href": "https://api.gandi.net/v5/domain/domains/example.com/autorenew",
            "duration": 1,
            "enabled": True,
            "org_id": "f1e2d3c4",
        },
        "dates": {
            "registry_created_at": "2019-02-13T10:04:18Z",
            "updated_at": "2019-02-25T16:20:49Z",
        },
        "contacts": contacts_payload,
    }

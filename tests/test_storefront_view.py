# tests/test_storefront_view.py
import asyncio

import httpx
import pytest

from sdk.errors import AccountUnavailable
from sdk.models import AccountState
from sdk.render import MINERALS, render
from sdk.state import ViewPhase
from sdk.storefront import CATALOG_ERROR_MESSAGE, Storefront

CATALOG = [
    {"id": "x", "title": "Double XP", "imageUrl": "/boosts/x.png", "price": 30},
    {"id": "y", "title": "Streak Shield", "imageUrl": "/boosts/y.png", "price": 50},
]


def routes(table, seen=None):
    def handler(request: httpx.Request):
        if seen is not None:
            seen.append(request.url.path)
        respond = table.get(request.url.path)
        if respond is None:
            return httpx.Response(404)
        return respond(request)
    return handler


def ok(body):
    return lambda request: httpx.Response(200, json=body)


def test_empty_catalog_without_account_renders(make_client, notifier):
    async def scenario():
        view = Storefront(make_client(routes({"/catalog": ok([])}), session_token=""), notifier)
        await view.mount()
        return view

    screen = render(asyncio.run(scenario()))
    assert screen.phase is ViewPhase.READY
    assert screen.boosts == []
    assert screen.coins is None
    assert screen.minerals == MINERALS
    assert len(MINERALS) == 17


def test_owned_counts_default_to_zero_without_account(make_client, notifier):
    async def scenario():
        view = Storefront(make_client(routes({"/catalog": ok(CATALOG)}), session_token=""), notifier)
        await view.mount()
        return view

    screen = render(asyncio.run(scenario()))
    assert screen.phase is ViewPhase.READY
    assert [(row.id, row.owned) for row in screen.boosts] == [("x", 0), ("y", 0)]


def test_owned_counts_come_from_account(make_client, notifier):
    async def scenario():
        handler = routes({
            "/catalog": ok(CATALOG),
            "/account": ok({"coins": 12, "boosts": {"y": 3}}),
        })
        view = Storefront(make_client(handler), notifier)
        await view.mount()
        return view

    screen = render(asyncio.run(scenario()))
    assert screen.coins == 12
    assert [(row.id, row.owned) for row in screen.boosts] == [("x", 0), ("y", 3)]
    assert screen.boosts[0].image_url == "/boosts/x.png"


def test_no_session_skips_account_request(make_client, notifier):
    seen = []

    async def scenario():
        view = Storefront(make_client(routes({"/catalog": ok(CATALOG)}, seen), session_token=""), notifier)
        await view.mount()
        return view

    view = asyncio.run(scenario())
    assert "/account" not in seen
    assert view.phase is ViewPhase.READY
    assert view.error is None
    assert view.account_state is None


def test_no_session_client_call_never_hits_network(make_client):
    seen = []
    client = make_client(routes({}, seen), session_token="")

    with pytest.raises(AccountUnavailable):
        asyncio.run(client.fetch_account())
    assert seen == []


def test_catalog_failure_is_fatal(make_client, notifier):
    async def scenario():
        handler = routes({
            "/catalog": lambda request: httpx.Response(500),
            "/account": ok({"coins": 100, "boosts": {}}),
        })
        view = Storefront(make_client(handler), notifier)
        await view.mount()
        return view

    view = asyncio.run(scenario())
    assert view.phase is ViewPhase.ERROR_CATALOG
    screen = render(view)
    assert screen.phase is ViewPhase.ERROR_CATALOG
    assert screen.error == CATALOG_ERROR_MESSAGE
    assert screen.boosts == []


def test_catalog_failure_wins_over_late_account(make_client, notifier):
    async def scenario():
        gate = asyncio.Event()

        async def slow_account(request):
            await gate.wait()
            return httpx.Response(200, json={"coins": 5, "boosts": {}})

        async def handler(request):
            if request.url.path == "/catalog":
                return httpx.Response(503)
            return await slow_account(request)

        view = Storefront(make_client(handler), notifier)
        mounting = asyncio.ensure_future(view.mount())
        while view.phase is ViewPhase.LOADING:
            await asyncio.sleep(0)
        gate.set()
        await mounting
        return view

    view = asyncio.run(scenario())
    assert view.phase is ViewPhase.ERROR_CATALOG
    assert render(view).phase is ViewPhase.ERROR_CATALOG


def test_catalog_transport_error_is_fatal(make_client, notifier):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def scenario():
        view = Storefront(make_client(routes({"/catalog": refuse}), session_token=""), notifier)
        await view.mount()
        return view

    assert asyncio.run(scenario()).phase is ViewPhase.ERROR_CATALOG


def test_partially_invalid_catalog_is_rejected_whole(make_client, notifier):
    broken = CATALOG + [{"id": "z", "title": "No price", "imageUrl": "/z.png"}]

    async def scenario():
        view = Storefront(make_client(routes({"/catalog": ok(broken)}), session_token=""), notifier)
        await view.mount()
        return view

    view = asyncio.run(scenario())
    assert view.phase is ViewPhase.ERROR_CATALOG
    assert view.catalog == []


def test_account_failure_is_not_fatal(make_client, notifier, sink):
    async def scenario():
        handler = routes({
            "/catalog": ok(CATALOG),
            "/account": lambda request: httpx.Response(500),
        })
        view = Storefront(make_client(handler), notifier)
        await view.mount()
        return view

    view = asyncio.run(scenario())
    assert view.phase is ViewPhase.READY
    assert view.account_state is None
    assert [row.owned for row in render(view).boosts] == [0, 0]
    assert sink.calls == []


def test_loading_until_both_loaders_settle(make_client, notifier):
    async def scenario():
        gate = asyncio.Event()
        phases = []

        async def handler(request):
            if request.url.path == "/catalog":
                return httpx.Response(200, json=CATALOG)
            await gate.wait()
            return httpx.Response(200, json={"coins": 1, "boosts": {}})

        view = Storefront(make_client(handler), notifier)
        mounting = asyncio.ensure_future(view.mount())
        while not view.catalog:
            await asyncio.sleep(0)
        phases.append(view.phase)
        phases.append(render(view).phase)
        gate.set()
        await mounting
        phases.append(view.phase)
        return view, phases

    view, phases = asyncio.run(scenario())
    assert phases == [ViewPhase.LOADING, ViewPhase.LOADING, ViewPhase.READY]
    assert view.account_state == AccountState(coins=1, boosts={})


def test_mount_is_one_shot(make_client, notifier):
    seen = []

    async def scenario():
        view = Storefront(make_client(routes({"/catalog": ok(CATALOG)}, seen), session_token=""), notifier)
        await view.mount()
        await view.mount()

    asyncio.run(scenario())
    assert seen == ["/catalog"]

#!/usr/bin/env python
import asyncio

from sdk.booststore import AsyncStoreClient, StoreClient
from sdk.logs import setup_logging
from sdk.notifications import ConsoleSink, Notifier
from sdk.render import render
from sdk.storefront import Storefront

BASE_URL = "http://127.0.0.1:8085"
SESSION = "demo-session"


async def main():
    # -----------------------------
    # Reset everything for demo
    # -----------------------------
    print("Resetting store...")
    StoreClient(base_url=BASE_URL, session_token=SESSION).reset()

    async with AsyncStoreClient(base_url=BASE_URL, session_token=SESSION) as client:
        view = Storefront(client, Notifier(ConsoleSink()))

        # -----------------------------
        # Load catalog and account
        # -----------------------------
        print("\nMounting storefront...")
        await view.mount()
        screen = render(view)
        print(f"phase={screen.phase.value} coins={screen.coins}")
        for row in screen.boosts:
            print(f"  {row.id:<16} {row.price:>4} GTL  owned={row.owned}")

        # -----------------------------
        # Buy the cheapest boost
        # -----------------------------
        cheapest = min(view.catalog, key=lambda item: item.price)
        print(f"\nBuying {cheapest.id}...")
        print(await view.purchase(cheapest.id))

        # -----------------------------
        # Try something we cannot afford
        # -----------------------------
        priciest = max(view.catalog, key=lambda item: item.price)
        print(f"\nBuying {priciest.id}...")
        print(await view.purchase(priciest.id))

        screen = render(view)
        print(f"\nAfter purchases: coins={screen.coins}")
        for row in screen.boosts:
            print(f"  {row.id:<16} owned={row.owned}")

        view.unmount()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())

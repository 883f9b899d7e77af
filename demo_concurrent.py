import asyncio

from sdk.booststore import AsyncStoreClient, StoreClient
from sdk.logs import setup_logging
from sdk.models import PurchaseAccepted
from sdk.notifications import ConsoleSink, Notifier
from sdk.storefront import Storefront

BASE_URL = "http://127.0.0.1:8085"
SESSION = "demo-session"
CLICKS = 5


async def main():
    sync_client = StoreClient(base_url=BASE_URL, session_token=SESSION)

    # Reset store if available
    try:
        sync_client.reset()
    except Exception as e:
        print(f"reset skipped: {e}")
    sync_client.top_up(100)

    async with AsyncStoreClient(base_url=BASE_URL, session_token=SESSION) as client:
        view = Storefront(client, Notifier(ConsoleSink()))
        await view.mount()

        boost = min(view.catalog, key=lambda item: item.price)
        before = view.account_state
        print(f"\n🖥️  Start: {before.coins} coins, {before.owned(boost.id)}x {boost.id}")

        # Rapid repeated clicks on the same Buy button
        print(f"\n⚡ Buying {boost.id} {CLICKS} times at once...")
        outcomes = await asyncio.gather(*(view.purchase(boost.id) for _ in range(CLICKS)))
        accepted = sum(1 for o in outcomes if isinstance(o, PurchaseAccepted))

        after = view.account_state
        print(f"\n✅ {accepted}/{CLICKS} accepted")
        print(f"📦 Local:  {after.coins} coins, {after.owned(boost.id)}x {boost.id}")
        print(f"👛 Server: {sync_client.view_account()}")

        view.unmount()


if __name__ == "__main__":
    setup_logging()
    asyncio.run(main())

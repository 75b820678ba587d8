#!/usr/bin/env python3
"""
Walk through the Coinbase v3 endpoints with a real account.

Reads CB_OAUTH_CLIENT_ID, CB_OAUTH_CLIENT_SECRET and CB_OAUTH_REDIRECT_URL
from the environment (or .env), prints the authorization URL, waits for the
browser redirect, runs the selected walkthroughs and revokes access at the end.

    python scripts/run_examples.py accounts products
    python scripts/run_examples.py --place-order   # places and cancels a 1-cent limit order
"""

import argparse
import asyncio
import logging
from datetime import datetime, timedelta, timezone

from coinbase_v3 import CbClient, CoinbaseApiError, OAuthCbClient
from coinbase_v3.orders import create_limit_order_good_til_date
from coinbase_v3.schemas import ContractExpiryType, Granularity, OrderSide, ProductType, Status
from coinbase_v3.utils import get_env_variables

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

WALKTHROUGHS = ("accounts", "products", "orders", "fees")

SCOPES = {
    "accounts": ["wallet:accounts:read"],
    "products": ["wallet:user:read"],
    "orders": ["wallet:transactions:read"],
    "fees": ["wallet:transactions:read"],
}


def banner(title: str):
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


async def run_accounts(client: CbClient):
    banner("ACCOUNTS")
    accounts = []
    async for batch in client.list_accounts(limit=4):
        print(f"Got {len(batch)} accounts")
        accounts.extend(batch)
    print(f"Got {len(accounts)} accounts in total.")

    if accounts:
        account = await client.get_account(accounts[0].uuid)
        print(f"{account.currency}: {account.available_balance.value} available, {account.hold.value} on hold")


async def run_products(client: CbClient):
    banner("PRODUCTS")
    pricebooks = await client.get_best_bid_ask()
    print(f"Found {len(pricebooks)} best bid/asks")
    for pricebook in await client.get_best_bid_ask(["BTC-USD", "ETH-USD"]):
        print(f"  {pricebook.product_id}: {len(pricebook.bids)} bids, {len(pricebook.asks)} asks")

    book = await client.get_product_book("BTC-USD", limit=3)
    print(f"BTC-USD book: {len(book.bids)} bids and {len(book.asks)} asks")

    products = await client.list_products(limit=4, product_type=ProductType.SPOT)
    print(f"Found {len(products)} spot products")
    futures = await client.list_products(
        product_type=ProductType.FUTURE, contract_expiry_type=ContractExpiryType.EXPIRING
    )
    print(f"Found {len(futures)} expiring futures")

    product = await client.get_product("BTC-USD")
    print(f"{product.product_id}: price={product.price} 24h volume={product.volume_24h}")

    end = datetime.now(timezone.utc)
    candles = await client.get_product_candles("BTC-USD", end - timedelta(hours=1), end, Granularity.FIVE_MINUTE)
    print(f"Got {len(candles)} five-minute candles")

    trades = await client.get_market_trades("BTC-USD", limit=5)
    print(f"Last {len(trades.trades)} trades, best bid {trades.best_bid}, best ask {trades.best_ask}")


async def run_orders(client: CbClient):
    banner("ORDERS & FILLS")
    total = 0
    async for batch in client.list_orders(limit=50, order_status=[Status.FILLED, Status.CANCELLED]):
        total += len(batch)
    print(f"Found {total} filled or cancelled orders")

    async for batch in client.list_orders(product_id="BTC-USD", limit=1):
        if batch:
            order = await client.get_order(batch[0].order_id)
            print(f"Latest BTC-USD order: {order.side.value} {order.status.value} created {order.created_time}")
        break

    fills = 0
    async for batch in client.list_fills(limit=100):
        fills += len(batch)
    print(f"Found {fills} fills")


async def run_fees(client: CbClient):
    banner("FEES")
    summary = await client.get_transactions_summary(product_type=ProductType.SPOT)
    tier = summary.fee_tier
    print(f"Pricing tier {tier.pricing_tier}: maker {tier.maker_fee_rate}, taker {tier.taker_fee_rate}")
    print(f"Total volume {summary.total_volume}, total fees {summary.total_fees}")


async def run_order_and_cancel(client: CbClient):
    banner("ORDER & CANCEL")
    # 1 BTC at one cent, expiring in a day: never fills
    order = create_limit_order_good_til_date(
        "BTC-USDT", OrderSide.BUY, 1.0, 0.01, datetime.now(timezone.utc) + timedelta(days=1), post_only=False
    )
    response = await client.create_order(order)
    print(f"Create order: success={response.success} order_id={response.order_id}")

    if response.success:
        for result in await client.cancel_order([response.order_id]):
            print(f"Cancel {result.order_id}: success={result.success}")

    try:
        await client.cancel_order(["foo"])
    except CoinbaseApiError as e:
        print(f"Cancelling a nonexistent order: {e}")


RUNNERS = {
    "accounts": run_accounts,
    "products": run_products,
    "orders": run_orders,
    "fees": run_fees,
}


async def run(walkthroughs, place_order: bool):
    client_id, client_secret, redirect_url = get_env_variables()
    async with OAuthCbClient(client_id, client_secret, redirect_url) as oauth:
        for name in walkthroughs:
            for scope in SCOPES[name]:
                oauth.add_scope(scope)
        if place_order:
            oauth.add_scope("wallet:buys:create")

        await oauth.authorize_once()
        try:
            async with CbClient(oauth) as client:
                for name in walkthroughs:
                    await RUNNERS[name](client)
                if place_order:
                    await run_order_and_cancel(client)
        finally:
            await oauth.revoke_access()
            print("=============== ACCESS REVOKED =================")


def main():
    parser = argparse.ArgumentParser(description="Run the Coinbase v3 client walkthroughs")
    parser.add_argument(
        "walkthroughs", nargs="*", help=f"Walkthroughs to run: {', '.join(WALKTHROUGHS)} (default: all)"
    )
    parser.add_argument(
        "--place-order", action="store_true", help="Also place and cancel a real limit order (needs wallet:buys:create)"
    )
    args = parser.parse_args()

    unknown = [name for name in args.walkthroughs if name not in WALKTHROUGHS]
    if unknown:
        parser.error(f"unknown walkthrough(s): {', '.join(unknown)}")

    asyncio.run(run(args.walkthroughs or list(WALKTHROUGHS), args.place_order))
    return 0


if __name__ == "__main__":
    exit(main())

#!/usr/bin/env python3

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pairswap import AssetRegistry, LedgerError, Pool, PoolConfig, PoolError, Token, configure_logging
from pairswap.kernels.python.uint256 import UINT256_MAX


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Seed a pool, run one swap and one withdrawal, print the records.")
    ap.add_argument("--config", type=Path, default=None, help="YAML pool config (defaults to PAIRSWAP_* env)")
    ap.add_argument("--seed-a", type=int, default=1_000)
    ap.add_argument("--seed-b", type=int, default=2_000)
    ap.add_argument("--swap-in", type=int, default=100, help="amount of asset A sold by the trader")
    ap.add_argument("--withdraw", type=int, default=0, help="shares to withdraw afterwards (0 = half)")
    ap.add_argument("--json", action="store_true", help="print records as JSON lines")
    return ap.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = PoolConfig.from_yaml(args.config) if args.config else PoolConfig.from_env()
    configure_logging(config.log_level, json_output=config.json_logs)

    asset_a = "0x" + "11" * 32
    asset_b = "0x" + "22" * 32
    provider = "provider"
    trader = "trader"

    registry = AssetRegistry()
    tokens = [Token(asset_a, symbol="AAA"), Token(asset_b, symbol="BBB")]
    for token in tokens:
        registry.deploy(token)

    pool = Pool(registry, asset_a, asset_b, config=config)
    for token in tokens:
        for holder in (provider, trader):
            token.mint(holder, 1_000_000)
            token.approve(holder, pool.address, UINT256_MAX)

    records = []
    pool.events.subscribe(records.append)

    try:
        used_a, used_b, shares = pool.add_liquidity(provider, args.seed_a, args.seed_b)
        print(f"[pool-demo] pool_id={pool.pool_id}")
        print(f"[pool-demo] seeded: amount_a={used_a} amount_b={used_b} shares={shares}")

        out = pool.swap(trader, asset_a, asset_b, args.swap_in)
        reserve_a, reserve_b = pool.get_reserves()
        print(f"[pool-demo] swap: in={args.swap_in} out={out} reserves=({reserve_a}, {reserve_b})")

        withdraw = args.withdraw or shares // 2
        amount_a, amount_b = pool.remove_liquidity(provider, withdraw)
        print(f"[pool-demo] withdraw: shares={withdraw} amount_a={amount_a} amount_b={amount_b}")
    except (PoolError, LedgerError) as exc:
        print(f"[pool-demo] FAIL: {type(exc).__name__}: {exc}")
        return 1

    for record in records:
        if args.json:
            print(json.dumps(record.to_dict(), sort_keys=True))
        else:
            print(f"[pool-demo] {record.kind:<10} {record.digest()[:18]} {record.to_dict()}")
    print(f"[pool-demo] OK: supply={pool.total_supply()} reserves={pool.get_reserves()}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

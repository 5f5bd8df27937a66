"""
Two-asset constant-product pool.

This is the imperative shell around the pure kernels:
- Identity: the two assets are fixed at construction in canonical order.
- Reserve cache: the pool's recorded balances, resynchronized at the end of
  every swap, mint and burn.
- Execution: every public entry point is all-or-nothing. Ledger state,
  share supply, the reserve cache and emitted records are captured on entry
  and restored if the operation raises.
- Guard: mint and burn always run under the exclusive guard. With
  `PoolConfig.guard_all_mutations` (the default) swap, add_liquidity and
  remove_liquidity take it too.

Every mutating entry point takes the acting account (`sender`) explicitly.
Pulls use `transfer_from`, so senders must approve the pool address on the
underlying asset ledgers first.
"""

from __future__ import annotations

import functools
from contextlib import contextmanager, nullcontext
from typing import Callable, ContextManager, Iterator, Optional, Tuple, TypeVar

import structlog

from ..errors import InvariantViolation, TransferError, ValidationError
from ..kernels.python import uint256 as u
from ..kernels.python.cpmm_swap import swap_exact_in
from ..kernels.python.lp_math import burn_liquidity, mint_liquidity, optimal_liquidity
from ..kernels.python.lp_math import quote as _kernel_quote
from ..state.balances import Address, Amount, AssetId
from ..state.pools import PoolState, compute_pool_id, normalize_asset_id, order_assets
from ..state.registry import AssetRegistry
from ..state.tokens import Token, TokenLedger
from .config import PoolConfig
from .events import DepositRecord, EventLog, SyncRecord, TradeRecord, WithdrawalRecord
from .guard import ExclusiveGuard

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable)

SHARE_SYMBOL = "PAIR-SHARE"


def _require_address(name: str, value: object) -> None:
    if not isinstance(value, str) or not value:
        raise ValidationError(f"{name} must be a non-empty address string")


def _require_positive_amount(name: str, value: object) -> None:
    if not u.is_uint(value):
        raise ValidationError(f"{name} must be a uint256 int, got {value!r}")
    if value == 0:
        raise ValidationError(f"{name} must be positive")


def _entry_point(operation: str, *, always_guarded: bool = False) -> Callable[[F], F]:
    """Wrap a public operation in the guard (when applicable) and an atomic section."""

    def decorator(fn: F) -> F:
        @functools.wraps(fn)
        def wrapper(self: "Pool", *args, **kwargs):
            if always_guarded or self._config.guard_all_mutations:
                with self._guard.hold(operation), self._atomic(operation):
                    return fn(self, *args, **kwargs)
            with self._atomic(operation):
                return fn(self, *args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


class Pool:
    """
    Constant-product market maker over one unordered pair of assets.

    Construction resolves both assets in `registry`, orders them by numeric
    identity and deploys the pool's share token under the pool id. A second
    pool for the same pair in the same registry is rejected.
    """

    def __init__(
        self,
        registry: AssetRegistry,
        token_a: object,
        token_b: object,
        *,
        config: Optional[PoolConfig] = None,
    ) -> None:
        asset_low, asset_high = order_assets(token_a, token_b)
        registry.resolve(asset_low)
        registry.resolve(asset_high)

        pool_id = compute_pool_id(asset_low, asset_high)
        if registry.is_deployed(pool_id):
            raise ValidationError(f"pool already deployed for pair: {pool_id}")

        self._registry = registry
        self._config = config or PoolConfig()
        self._state = PoolState(pool_id=pool_id, asset0=asset_low, asset1=asset_high)
        self._shares = Token(pool_id, symbol=SHARE_SYMBOL)
        registry.deploy(self._shares)
        self._guard = ExclusiveGuard(pool_id[:10])
        self._depth = 0
        self.events = EventLog(retain=self._config.event_retention)

        logger.info("pool_deployed", pool_id=pool_id, asset0=asset_low, asset1=asset_high)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def pool_id(self) -> str:
        return self._state.pool_id

    @property
    def address(self) -> Address:
        return self._state.pool_id

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def shares(self) -> TokenLedger:
        """The pool share ledger (transfer/approve/balance_of for holders)."""
        return self._shares

    @property
    def guard(self) -> ExclusiveGuard:
        return self._guard

    def get_reserves(self) -> Tuple[Amount, Amount]:
        return self._state.reserves

    def get_token_a(self) -> AssetId:
        return self._state.asset0

    def get_token_b(self) -> AssetId:
        return self._state.asset1

    def total_supply(self) -> Amount:
        return self._shares.total_supply()

    @staticmethod
    def quote(amount_a: Amount, reserve_a: Amount, reserve_b: Amount) -> Amount:
        return _kernel_quote(amount_a=amount_a, reserve_a=reserve_a, reserve_b=reserve_b)

    def get_amount_out(self, asset_in: object, amount_in: Amount) -> Amount:
        """Read-only quote of `swap` against the current reserve cache."""
        asset = self._require_pool_asset("asset_in", asset_in)
        _require_positive_amount("amount_in", amount_in)
        reserve_in, reserve_out = self._state.oriented_reserves(asset)
        return swap_exact_in(reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount_in).amount_out

    # ------------------------------------------------------------------
    # Swap
    # ------------------------------------------------------------------

    @_entry_point("swap")
    def swap(self, sender: Address, asset_in: object, asset_out: object, amount_in: Amount) -> Amount:
        """
        Sell exactly `amount_in` of `asset_in` for `asset_out`.

        Returns the amount paid out. A trade that quotes zero output is a
        no-op and returns 0 without moving any assets.
        """
        _require_address("sender", sender)
        token_in = self._require_pool_asset("asset_in", asset_in)
        token_out = self._require_pool_asset("asset_out", asset_out)
        if token_in == token_out:
            raise ValidationError(f"asset_in and asset_out must differ: {token_in}")
        _require_positive_amount("amount_in", amount_in)

        reserve_in, reserve_out = self._state.oriented_reserves(token_in)
        res = swap_exact_in(reserve_in=reserve_in, reserve_out=reserve_out, amount_in=amount_in)
        if res.is_noop:
            logger.debug("pool_swap_noop", pool_id=self.pool_id, asset_in=token_in, amount_in=amount_in)
            return 0
        if res.k_after < res.k_before:
            raise InvariantViolation(f"Invariant violation: new_k ({res.k_after}) < old_k ({res.k_before})")

        # Outbound before inbound; the cache is then set from the arithmetic result.
        self._send(token_out, sender, res.amount_out)
        self._pull(token_in, sender, amount_in)
        if token_in == self._state.asset0:
            self._set_reserves(res.new_reserve_in, res.new_reserve_out)
        else:
            self._set_reserves(res.new_reserve_out, res.new_reserve_in)

        self.events.append(
            TradeRecord(
                sender=sender,
                asset_in=token_in,
                asset_out=token_out,
                amount_in=amount_in,
                amount_out=res.amount_out,
            )
        )
        logger.info(
            "pool_swap",
            pool_id=self.pool_id,
            sender=sender,
            asset_in=token_in,
            amount_in=amount_in,
            amount_out=res.amount_out,
        )
        return res.amount_out

    # ------------------------------------------------------------------
    # Liquidity
    # ------------------------------------------------------------------

    @_entry_point("add_liquidity")
    def add_liquidity(
        self,
        sender: Address,
        amount_a_in: Amount,
        amount_b_in: Amount,
        *,
        to: Optional[Address] = None,
    ) -> Tuple[Amount, Amount, Amount]:
        """
        Deposit at the current reserve ratio and mint shares.

        Only the committed amounts are pulled from `sender`; any excess of the
        requested amounts is never transferred. Returns
        (amount_a, amount_b, liquidity).
        """
        _require_address("sender", sender)
        recipient = sender if to is None else to
        _require_address("to", recipient)

        reserve0, reserve1 = self._state.reserves
        opt = optimal_liquidity(
            reserve0=reserve0,
            reserve1=reserve1,
            amount0_desired=amount_a_in,
            amount1_desired=amount_b_in,
            reject_zero_quote=self._config.reject_zero_quote,
        )

        self._pull(self._state.asset0, sender, opt.amount0_used)
        self._pull(self._state.asset1, sender, opt.amount1_used)
        with self._inner_guard("mint"):
            liquidity = self._mint(sender, recipient)
        return opt.amount0_used, opt.amount1_used, liquidity

    @_entry_point("remove_liquidity")
    def remove_liquidity(
        self,
        sender: Address,
        liquidity: Amount,
        *,
        to: Optional[Address] = None,
    ) -> Tuple[Amount, Amount]:
        """Return `liquidity` shares to the pool and burn them for both assets."""
        _require_address("sender", sender)
        _require_positive_amount("liquidity", liquidity)
        recipient = sender if to is None else to
        _require_address("to", recipient)

        if not self._shares.transfer(sender, self.address, liquidity):
            raise TransferError(self._shares.asset_id, sender, self.address, liquidity)
        with self._inner_guard("burn"):
            return self._burn(sender, recipient)

    @_entry_point("mint", always_guarded=True)
    def mint(self, sender: Address, to: Address) -> Amount:
        """
        Mint shares for whatever was deposited since the last resync.

        The deposit is `balance - reserve` for each asset, so assets sent to
        the pool outside `add_liquidity` are credited here.
        """
        _require_address("sender", sender)
        return self._mint(sender, to)

    @_entry_point("burn", always_guarded=True)
    def burn(self, sender: Address, to: Address) -> Tuple[Amount, Amount]:
        """Burn every share held by the pool and pay out pro rata to `to`."""
        _require_address("sender", sender)
        return self._burn(sender, to)

    def _mint(self, sender: Address, to: Address) -> Amount:
        _require_address("to", to)
        reserve0, reserve1 = self._state.reserves
        balance0, balance1 = self._balances()
        amount0 = u.sub(balance0, reserve0)
        amount1 = u.sub(balance1, reserve1)

        liquidity = mint_liquidity(
            reserve0=reserve0,
            reserve1=reserve1,
            total_supply=self._shares.total_supply(),
            amount0=amount0,
            amount1=amount1,
        )
        self._shares.mint(to, liquidity)
        self._set_reserves(balance0, balance1)

        self.events.append(
            DepositRecord(sender=sender, to=to, amount0=amount0, amount1=amount1, liquidity=liquidity)
        )
        logger.info(
            "pool_mint",
            pool_id=self.pool_id,
            sender=sender,
            to=to,
            amount0=amount0,
            amount1=amount1,
            liquidity=liquidity,
        )
        return liquidity

    def _burn(self, sender: Address, to: Address) -> Tuple[Amount, Amount]:
        _require_address("to", to)
        balance0, balance1 = self._balances()
        liquidity = self._shares.balance_of(self.address)

        res = burn_liquidity(
            liquidity=liquidity,
            balance0=balance0,
            balance1=balance1,
            total_supply=self._shares.total_supply(),
        )
        self._shares.burn(self.address, liquidity)
        self._send(self._state.asset0, to, res.amount0_out)
        self._send(self._state.asset1, to, res.amount1_out)
        self._set_reserves(*self._balances())

        self.events.append(
            WithdrawalRecord(
                sender=sender,
                to=to,
                amount0=res.amount0_out,
                amount1=res.amount1_out,
                liquidity=liquidity,
            )
        )
        logger.info(
            "pool_burn",
            pool_id=self.pool_id,
            sender=sender,
            to=to,
            amount0=res.amount0_out,
            amount1=res.amount1_out,
            liquidity=liquidity,
        )
        return res.amount0_out, res.amount1_out

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _require_pool_asset(self, name: str, asset: object) -> AssetId:
        key = normalize_asset_id(asset, name=name)
        if not self._state.has_asset(key):
            raise ValidationError(f"{name} {key} is not traded by pool {self.pool_id}")
        return key

    def _ledger(self, asset: AssetId) -> TokenLedger:
        return self._registry.resolve(asset)

    def _balances(self) -> Tuple[Amount, Amount]:
        return (
            self._ledger(self._state.asset0).balance_of(self.address),
            self._ledger(self._state.asset1).balance_of(self.address),
        )

    def _send(self, asset: AssetId, to: Address, amount: Amount) -> None:
        if not self._ledger(asset).transfer(self.address, to, amount):
            raise TransferError(asset, self.address, to, amount)

    def _pull(self, asset: AssetId, owner: Address, amount: Amount) -> None:
        if not self._ledger(asset).transfer_from(self.address, owner, self.address, amount):
            raise TransferError(asset, owner, self.address, amount)

    def _set_reserves(self, reserve0: Amount, reserve1: Amount) -> None:
        self._state.reserve0 = reserve0
        self._state.reserve1 = reserve1
        self.events.append(SyncRecord(reserve0=reserve0, reserve1=reserve1))

    def _inner_guard(self, operation: str) -> ContextManager[None]:
        # When every entry point is guarded the caller already holds the guard.
        if self._config.guard_all_mutations:
            return nullcontext()
        return self._guard.hold(operation)

    @contextmanager
    def _atomic(self, operation: str) -> Iterator[None]:
        ledgers = self._registry.snapshot()
        reserves = self._state.reserves
        mark = self.events.mark()
        self._depth += 1
        try:
            yield
        except Exception as exc:
            self._registry.restore(ledgers)
            self._state.reserve0, self._state.reserve1 = reserves
            self.events.truncate(mark)
            logger.info(
                "pool_operation_reverted",
                pool_id=self.pool_id,
                operation=operation,
                error=type(exc).__name__,
                detail=str(exc),
            )
            raise
        finally:
            self._depth -= 1
        if self._depth == 0:
            self.events.publish()

    def __repr__(self) -> str:
        return f"Pool({self._state!r}, supply={self._shares.total_supply()}, guard={self._guard!r})"

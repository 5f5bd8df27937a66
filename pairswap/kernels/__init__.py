"""
Kernel layer.

Pure integer kernels used by the pool: fixed-width arithmetic, the
constant-product swap quote, and liquidity share math. The stateful pool in
`pairswap/core/pool.py` is an imperative shell around these functions.
"""

"""
Python kernels: integer-only, floor rounding, pure functions with typed
results, bounded to unsigned 256-bit values.
"""

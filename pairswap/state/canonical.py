"""
Canonical byte encodings for hashing.

Pool ids and audit-record digests are computed over these encodings, so two
processes that agree on the inputs agree on the hash.
"""

from __future__ import annotations

import hashlib
import json
import re
from typing import Any


ENCODING_VERSION = 1

_HEX_RE = re.compile(r"[0-9a-fA-F]+")


def _check_encodable(value: Any, path: str = "$") -> None:
    # JSON floats and lone surrogates have no single byte form.
    if isinstance(value, float):
        raise TypeError(f"{path}: floats have no canonical encoding")
    if isinstance(value, str):
        if any(0xD800 <= ord(ch) <= 0xDFFF for ch in value):
            raise TypeError(f"{path}: surrogate code point in string")
    elif isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: object keys must be str, got {type(key).__name__}")
            _check_encodable(key, f"{path}.<key>")
            _check_encodable(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _check_encodable(item, f"{path}[{i}]")


def canonical_json_bytes(value: Any) -> bytes:
    """
    Encode `value` as compact, key-sorted UTF-8 JSON.

    Only ints, bools, None, str, lists/tuples and str-keyed dicts are
    accepted; floats raise TypeError.
    """
    _check_encodable(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = ENCODING_VERSION) -> bytes:
    """`pairswap:<label>:v<version>` followed by a NUL byte."""
    if not isinstance(label, str) or not label:
        raise TypeError("domain label must be a non-empty str")
    if not label.isascii() or "\x00" in label:
        raise ValueError(f"domain label must be printable ASCII without NUL: {label!r}")
    if isinstance(version, bool) or not isinstance(version, int) or version < 1:
        raise ValueError(f"domain version must be a positive int: {version!r}")
    return f"pairswap:{label}:v{version}".encode("ascii") + b"\x00"


def canonical_hex_allow_0x(hex_str: str, *, nbytes: int, name: str) -> str:
    """
    Return `hex_str` as lowercase 0x-hex left-padded to exactly `nbytes`.

    The prefix is optional on input. Inputs naming the same number give
    the same output.
    """
    if not isinstance(hex_str, str):
        raise TypeError(f"{name} must be a str")
    digits = hex_str.strip()
    if digits[:2].lower() == "0x":
        digits = digits[2:]
    if not _HEX_RE.fullmatch(digits):
        raise ValueError(f"{name} must be valid hex: {hex_str!r}")
    value = int(digits, 16)
    if value.bit_length() > 8 * nbytes:
        raise ValueError(f"{name} must fit in {nbytes} bytes")
    return f"0x{value:0{2 * nbytes}x}"

"""Parse ``type:value`` call arguments into Soroban SCVals.

Examples: ``u32:80``, ``i128:-5``, ``sym:increase``, ``str:hello``,
``addr:GABC...``, ``bool:true``, ``bytes:deadbeef``, ``void``.
"""

from __future__ import annotations

from typing import Callable, Sequence

from stellar_sdk import scval, xdr


def _to_bool(raw: str) -> xdr.SCVal:
    lowered = raw.strip().lower()
    if lowered in ("true", "1", "yes"):
        return scval.to_bool(True)
    if lowered in ("false", "0", "no"):
        return scval.to_bool(False)
    raise ValueError(f"not a boolean: {raw!r}")


_CONVERTERS: dict[str, Callable[[str], xdr.SCVal]] = {
    "u32": lambda v: scval.to_uint32(int(v, 0)),
    "i32": lambda v: scval.to_int32(int(v, 0)),
    "u64": lambda v: scval.to_uint64(int(v, 0)),
    "i64": lambda v: scval.to_int64(int(v, 0)),
    "u128": lambda v: scval.to_uint128(int(v, 0)),
    "i128": lambda v: scval.to_int128(int(v, 0)),
    "sym": scval.to_symbol,
    "str": scval.to_string,
    "addr": scval.to_address,
    "bytes": lambda v: scval.to_bytes(bytes.fromhex(v.removeprefix("0x"))),
    "bool": _to_bool,
}


def parse_arg(raw: str) -> xdr.SCVal:
    """Convert one ``type:value`` string to an SCVal."""
    if raw.strip() == "void":
        return scval.to_void()
    kind, sep, value = raw.partition(":")
    if not sep:
        raise ValueError(f"argument {raw!r} is not of the form type:value")
    converter = _CONVERTERS.get(kind.strip())
    if converter is None:
        known = ", ".join(sorted([*_CONVERTERS, "void"]))
        raise ValueError(f"unknown argument type {kind!r} (expected one of: {known})")
    return converter(value)


def parse_args(raws: Sequence[str]) -> tuple[xdr.SCVal, ...]:
    return tuple(parse_arg(s) for s in raws)

"""
Pure-Python Keccak sponge used by the SHA-3 digests.

This module holds the Keccak-f[1600] permutation, the byte-aligned pad10*1
rule and the absorb/squeeze driver that ties them together. It works on
raw bytes only; text handling lives in sha3_digest.py.

The state is a flat list of 25 unsigned 64-bit lanes in "lane order":
index = x + 5*y for coordinates (x, y) with x,y in 0..4.
"""
import logging
from typing import List, Optional, Tuple

logger = logging.getLogger(__name__)

__all__ = [
    "KECCAK_SUFFIX",
    "SHA3_SUFFIX",
    "STATE_BITS",
    "absorb",
    "format_digest",
    "keccak",
    "keccak_f",
    "pad",
]


# 64-bit mask (all ones)
_MASK: int = 0xFFFFFFFFFFFFFFFF

STATE_BITS: int = 1600

# Domain separators: original Keccak submission and NIST FIPS 202
KECCAK_SUFFIX: int = 0x01
SHA3_SUFFIX: int = 0x06


def _rol(x: int, n: int) -> int:
    return ((x << n) | (x >> (64 - n))) & _MASK


# Round constants for Keccak-f[1600], one per round
_RC: List[int] = [0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000, 0x000000000000808B,
                  0x0000000080000001, 0x8000000080008081, 0x8000000000008009, 0x000000000000008A, 0x0000000000000088,
                  0x0000000080008009, 0x000000008000000A, 0x000000008000808B, 0x800000000000008B, 0x8000000000008089,
                  0x8000000000008003, 0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
                  0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008]


def _rho_pi_walk() -> List[Tuple[int, int]]:
    # Lane (x, y) moves to (y, 2x + 3y); starting at (1, 0) the walk visits
    # all 24 lanes except (0, 0). Step t rotates by (t+1)(t+2)/2 mod 64.
    steps = []
    x, y = 1, 0
    for t in range(24):
        x, y = y, (2 * x + 3 * y) % 5
        steps.append((x + 5 * y, ((t + 1) * (t + 2) // 2) % 64))
    return steps


# (destination index, rotation) for each step of the walk
_RHO_PI: List[Tuple[int, int]] = _rho_pi_walk()


def keccak_f(s: List[int]) -> List[int]:
    """Apply the Keccak-f[1600] permutation to the state in place.

    Each of the 24 rounds runs, in order:
    - Theta: xor every lane with the parities of its two neighbouring columns.
    - Rho+Pi: walk the lanes from (1, 0), rotating each one and moving it to
      its new position. Lane (0, 0) stays put.
    - Chi: row-wise non-linear step, computed from a copy of the row.
    - Iota: xor the round constant into lane (0, 0).

    The list is returned as well so calls can be chained.
    """
    for rc in _RC:
        # Theta
        c = [s[x] ^ s[x + 5] ^ s[x + 10] ^ s[x + 15] ^ s[x + 20] for x in range(5)]
        d = [c[(x - 1) % 5] ^ _rol(c[(x + 1) % 5], 1) for x in range(5)]
        for i in range(25):
            s[i] ^= d[i % 5]
        # Rho and Pi
        cur = s[1]
        for dest, rot in _RHO_PI:
            cur, s[dest] = s[dest], _rol(cur, rot)
        # Chi
        for y in range(5):
            t = s[5 * y:5 * y + 5]
            for x in range(5):
                s[x + 5 * y] = (t[x] ^ ((~t[(x + 1) % 5]) & t[(x + 2) % 5])) & _MASK
        # Iota
        s[0] ^= rc
    return s


def pad(length: int, rate_bytes: int, suffix: int = SHA3_SUFFIX) -> bytes:
    """Return the pad10*1 bytes for a message of ``length`` bytes.

    ``suffix`` is the domain separator byte (0x06 for SHA-3, 0x01 for
    Keccak). When only one byte of room is left the separator and the
    closing 0x80 share that byte.
    """
    if suffix not in (SHA3_SUFFIX, KECCAK_SUFFIX):
        raise ValueError(f"unknown domain separator 0x{suffix:02x}")
    q = rate_bytes - length % rate_bytes
    if q == 1:
        return bytes([suffix | 0x80])
    return bytes([suffix]) + bytes(q - 2) + b"\x80"


def absorb(s: List[int], padded: bytes, rate_bytes: int) -> int:
    """XOR each rate-sized block of ``padded`` into the state and permute.

    Lane k of a block is read little-endian and lands on (k mod 5, k div 5),
    which is flat index k. Returns the number of blocks absorbed.
    """
    if len(padded) % rate_bytes:
        raise ValueError("padded message is not a multiple of the rate")
    blocks = 0
    for off in range(0, len(padded), rate_bytes):
        blk = padded[off:off + rate_bytes]
        for k in range(rate_bytes // 8):
            s[k] ^= int.from_bytes(blk[8 * k:8 * k + 8], "little")
        keccak_f(s)
        blocks += 1
    return blocks


def format_digest(s: List[int], output_bits: int) -> str:
    """Render the first ``output_bits`` of the state as lowercase hex.

    Lanes are read y-major (x inner), each as 8 little-endian bytes.
    """
    out = b"".join(lane.to_bytes(8, "little") for lane in s)
    return out.hex()[:output_bits // 4]


def keccak(rate: int, capacity: int, data: bytes, suffix: int = SHA3_SUFFIX,
           output_bits: Optional[int] = None) -> str:
    """One-shot sponge: pad ``data``, absorb it and squeeze a hex digest.

    ``rate`` and ``capacity`` are in bits and must add up to 1600. The output
    length defaults to capacity / 2 bits and may not exceed the rate, so a
    single squeeze always suffices.
    """
    if rate + capacity != STATE_BITS:
        raise ValueError(f"rate + capacity must be {STATE_BITS}, got {rate + capacity}")
    if rate <= 0 or rate % 64:
        raise ValueError(f"rate must be a positive multiple of 64 bits, got {rate}")
    if output_bits is None:
        output_bits = capacity // 2
    if output_bits <= 0 or output_bits % 8 or output_bits > rate:
        raise ValueError(f"cannot squeeze {output_bits} bits from a {rate}-bit rate")

    rate_bytes = rate // 8
    padded = bytes(data) + pad(len(data), rate_bytes, suffix)
    s = [0] * 25
    blocks = absorb(s, padded, rate_bytes)
    logger.debug("keccak r=%d c=%d: absorbed %d block(s)", rate, capacity, blocks)
    return format_digest(s, output_bits)

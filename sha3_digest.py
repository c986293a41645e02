"""
SHA-3 / Keccak hex digests of text or hex-encoded input.

Four entry points fix the (rate, capacity) pair of each standard variant:

    >>> sha3_224("")
    '6b4e03423667dbb73b6e15454f0eb1abd4597f9a1b078e3f5b5a6bc7'
    >>> sha3_256("", padding="keccak")
    'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'

Options:
- padding: "sha-3" (NIST domain separator, default) or "keccak" (original
  Keccak submission, as used by Ethereum).
- format: how the INPUT is read. "string" (default) encodes text as UTF-8;
  "hex" / "hex-bytes" decode a hexadecimal string, spaces allowed. The
  output is always a lowercase hex string whatever the input format.

Options may be passed as a mapping, as keyword arguments or as an Options
instance. Each call builds its own Options value; nothing carries over from
one call to the next.
"""
import logging
from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Tuple, Union

from keccak import KECCAK_SUFFIX, SHA3_SUFFIX, keccak

logger = logging.getLogger(__name__)

__all__ = [
    "InvalidConfiguration",
    "MalformedHexInput",
    "Options",
    "Sha3Error",
    "VARIANTS",
    "digest",
    "sha3_224",
    "sha3_256",
    "sha3_384",
    "sha3_512",
]

Message = Union[str, bytes, bytearray, memoryview]

# output bits -> (rate, capacity), both in bits
VARIANTS: Dict[int, Tuple[int, int]] = {
    224: (1152, 448),
    256: (1088, 512),
    384: (832, 768),
    512: (576, 1024),
}

_SUFFIXES: Dict[str, int] = {
    "sha-3": SHA3_SUFFIX,
    "keccak": KECCAK_SUFFIX,
}

_FORMATS = ("string", "hex", "hex-bytes")

_HEXDIGITS = frozenset("0123456789abcdefABCDEF")


class Sha3Error(ValueError):
    """Base class for rejected digest input."""


class MalformedHexInput(Sha3Error):
    """Hex-format input of odd length or with non-hex characters."""


class InvalidConfiguration(Sha3Error):
    """Unknown option name or option value."""


@dataclass(frozen=True)
class Options:
    padding: str = "sha-3"
    format: str = "string"

    def __post_init__(self) -> None:
        if not isinstance(self.padding, str) or self.padding not in _SUFFIXES:
            raise InvalidConfiguration(
                f"padding must be one of {sorted(_SUFFIXES)}, got {self.padding!r}")
        if not isinstance(self.format, str) or self.format not in _FORMATS:
            raise InvalidConfiguration(
                f"format must be one of {list(_FORMATS)}, got {self.format!r}")

    @classmethod
    def build(cls, options: Union["Options", Mapping[str, str], None] = None,
              **overrides: str) -> "Options":
        """Return a fresh Options from the defaults, ``options`` and ``overrides``.

        Keyword overrides win over the mapping. Unknown option names raise
        InvalidConfiguration.
        """
        if isinstance(options, Options):
            base, given = options, dict(overrides)
        elif options is None or isinstance(options, Mapping):
            base, given = cls(), {**dict(options or {}), **overrides}
        else:
            raise InvalidConfiguration(
                f"options must be a mapping or Options, not {type(options).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(given) - known)
        if unknown:
            raise InvalidConfiguration(f"unknown option(s): {', '.join(unknown)}")
        return replace(base, **given)

    @property
    def suffix(self) -> int:
        return _SUFFIXES[self.padding]


OptionsLike = Union[Options, Mapping[str, str], None]


def _from_hex(text: str) -> bytes:
    s = text.replace(" ", "")
    if len(s) % 2:
        raise MalformedHexInput(f"hex input has odd length {len(s)}")
    bad = set(s) - _HEXDIGITS
    if bad:
        raise MalformedHexInput(f"hex input contains non-hex characters: {''.join(sorted(bad))!r}")
    return bytes.fromhex(s)


def _to_bytes(message: Message, fmt: str) -> bytes:
    if isinstance(message, (bytes, bytearray, memoryview)):
        if fmt == "string":
            return bytes(message)
        try:
            message = bytes(message).decode("ascii")
        except UnicodeDecodeError as e:
            raise MalformedHexInput("hex input contains non-ASCII bytes") from e
    elif not isinstance(message, str):
        raise TypeError(f"message must be str or bytes-like, not {type(message).__name__}")
    if fmt == "string":
        return message.encode("utf-8")
    return _from_hex(message)


def digest(bits: int, message: Message, options: OptionsLike = None, **opts: str) -> str:
    """Hash ``message`` with the ``bits``-sized variant and return hex.

    Options are validated and the input decoded before any hashing starts.
    """
    if bits not in VARIANTS:
        raise InvalidConfiguration(f"unsupported digest size {bits}, expected one of {sorted(VARIANTS)}")
    cfg = Options.build(options, **opts)
    data = _to_bytes(message, cfg.format)
    rate, capacity = VARIANTS[bits]
    logger.debug("%s-%d over %d byte(s)", cfg.padding, bits, len(data))
    return keccak(rate, capacity, data, cfg.suffix)


def sha3_224(message: Message, options: OptionsLike = None, **opts: str) -> str:
    """224-bit digest, 56 hex characters."""
    return digest(224, message, options, **opts)


def sha3_256(message: Message, options: OptionsLike = None, **opts: str) -> str:
    """256-bit digest, 64 hex characters."""
    return digest(256, message, options, **opts)


def sha3_384(message: Message, options: OptionsLike = None, **opts: str) -> str:
    """384-bit digest, 96 hex characters."""
    return digest(384, message, options, **opts)


def sha3_512(message: Message, options: OptionsLike = None, **opts: str) -> str:
    """512-bit digest, 128 hex characters."""
    return digest(512, message, options, **opts)

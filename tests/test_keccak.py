"""
Tests for the Keccak core in keccak.py: permutation, padding, absorb and
digest formatting. End-to-end results are checked against hashlib.
"""
import hashlib

import pytest

from keccak import (KECCAK_SUFFIX, SHA3_SUFFIX, absorb, format_digest, keccak,
                    keccak_f, pad)


def test_keccak_f_zero_state_known_answer():
    s = keccak_f([0] * 25)
    assert s[0] == 0xF1258F7940E1DDE7
    assert s[1] == 0x84D5CCF933C0478A


def test_keccak_f_mutates_in_place_and_stays_64_bit():
    s = [0xFFFFFFFFFFFFFFFF] * 25
    out = keccak_f(s)
    assert out is s
    assert all(0 <= lane < 1 << 64 for lane in s)


def test_keccak_f_is_deterministic():
    a = list(range(25))
    b = list(range(25))
    assert keccak_f(a) == keccak_f(b)


@pytest.mark.parametrize("suffix", [SHA3_SUFFIX, KECCAK_SUFFIX])
def test_pad_single_byte_branch(suffix):
    assert pad(135, 136, suffix) == bytes([suffix | 0x80])


def test_pad_sha3_bytes():
    p = pad(3, 136, SHA3_SUFFIX)
    assert len(p) == 133
    assert p[0] == 0x06
    assert p[-1] == 0x80
    assert p[1:-1] == bytes(131)


def test_pad_keccak_two_bytes():
    assert pad(70, 72, KECCAK_SUFFIX) == b"\x01\x80"


@pytest.mark.parametrize("length", [0, 1, 71, 72, 73, 143, 144, 145, 1000])
def test_pad_aligns_to_rate(length):
    for rate_bytes in (72, 104, 136, 144):
        p = pad(length, rate_bytes)
        assert 1 <= len(p) <= rate_bytes
        assert (length + len(p)) % rate_bytes == 0


def test_pad_full_block_when_already_aligned():
    assert len(pad(136, 136)) == 136


def test_pad_rejects_unknown_suffix():
    with pytest.raises(ValueError):
        pad(0, 136, 0x1F)


def test_absorb_counts_blocks():
    s = [0] * 25
    assert absorb(s, bytes(272), 136) == 2


def test_absorb_rejects_unaligned_input():
    with pytest.raises(ValueError):
        absorb([0] * 25, bytes(135), 136)


def test_absorb_places_lanes_little_endian():
    # lane 0 of the block lands on state index 0
    block = (1).to_bytes(8, "little") + bytes(64)
    s = [0] * 25
    absorb(s, block, 72)
    t = [0] * 25
    t[0] = 1
    assert s == keccak_f(t)


def test_format_digest_lane_order_and_truncation():
    s = [0] * 25
    s[0] = 0x0123456789ABCDEF
    s[1] = 0x1122334455667788
    out = format_digest(s, 128)
    assert out == "efcdab8967452301" "8877665544332211"


def test_format_digest_full_state_length():
    assert len(format_digest([0] * 25, 1600)) == 400


@pytest.mark.parametrize(
    "rate,capacity,ref",
    [
        (1152, 448, hashlib.sha3_224),
        (1088, 512, hashlib.sha3_256),
        (832, 768, hashlib.sha3_384),
        (576, 1024, hashlib.sha3_512),
    ],
)
@pytest.mark.parametrize("msg", [b"", b"abc", b"The quick brown fox jumps over the lazy dog"])
def test_keccak_matches_hashlib(rate, capacity, ref, msg):
    assert keccak(rate, capacity, msg) == ref(msg).hexdigest()


def test_keccak_output_bits_override():
    full = keccak(1088, 512, b"abc")
    assert keccak(1088, 512, b"abc", output_bits=128) == full[:32]


@pytest.mark.parametrize(
    "rate,capacity,output_bits",
    [
        (1088, 500, None),
        (1000, 600, None),
        (1088, 512, 1152),
        (1088, 512, 0),
    ],
)
def test_keccak_rejects_bad_parameters(rate, capacity, output_bits):
    with pytest.raises(ValueError):
        keccak(rate, capacity, b"", output_bits=output_bits)

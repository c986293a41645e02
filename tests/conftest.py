# Make keccak.py and sha3_digest.py importable when running from the repository root
import os
import sys

import pytest

ROOT = os.path.dirname(os.path.abspath(os.path.join(__file__, os.pardir)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)


# output bits -> rate in bytes, for boundary-length messages
RATE_BYTES = {224: 144, 256: 136, 384: 104, 512: 72}


@pytest.fixture(params=sorted(RATE_BYTES))
def bits(request) -> int:
    return request.param


@pytest.fixture
def rate_bytes(bits: int) -> int:
    return RATE_BYTES[bits]

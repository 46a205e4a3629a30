"""Parameterized lifetime/hash scenarios.

Each parameter reads "text|lifetime_ms|hashed"; missing fields mean an
immortal plaintext value.
"""

import time

import pytest

from securestring.config import SecretConfig
from securestring.secret import SecretValue

MARGIN_SECONDS = 0.5


def parse_parameter(parameter: str):
    parts = parameter.split("|")
    text = parts[0]
    lifetime_ms = int(parts[1]) if len(parts) > 1 else -1
    hashed = len(parts) > 2 and parts[2] == "true"
    return text, lifetime_ms, hashed


@pytest.mark.parametrize(
    "parameter",
    ["x|550", "y|250", "z|750|true", "a", "y"],
)
def test_secret_lifecycle(parameter):
    text, lifetime_ms, hashed = parse_parameter(parameter)
    secret = SecretValue(text, lifetime_ms=lifetime_ms, hashed=hashed, config=SecretConfig(sweep_interval_ms=50))
    secret.debug = True

    our_string = secret.render()
    assert secret.compare(our_string)

    if lifetime_ms > 0:
        time.sleep(lifetime_ms / 2 / 1000.0)
        assert secret.compare(our_string), secret.status()

        time.sleep(lifetime_ms / 2 / 1000.0 + MARGIN_SECONDS)
        assert not secret.compare(our_string), secret.status()
        assert secret.render() == ""
    else:
        assert secret.is_expired() is False
        secret.destroy()

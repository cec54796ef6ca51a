from decimal import Decimal

import pytest

from chainscope.tools.rpc.units import (
    format_sol,
    lamports_to_sol,
    parse_quantity,
    plain_decimal,
    token_amount,
    wei_to_ether,
    wei_to_gwei,
)


def test_wei_to_ether_one_ether():
    assert wei_to_ether(1000000000000000000) == "1.000000"


def test_wei_to_ether_accepts_hex_and_decimal_strings():
    assert wei_to_ether("0xde0b6b3a7640000") == "1.000000"
    assert wei_to_ether("2500000000000000000") == "2.500000"


def test_wei_to_ether_keeps_precision_beyond_float_range():
    # 123456789.123456789123456789 ETH; a float would lose the low digits
    raw = 123456789123456789123456789
    assert wei_to_ether(raw) == "123456789.123457"
    assert wei_to_ether(10**40) == "10000000000000000000000.000000"


def test_wei_to_ether_rounds_half_up():
    assert wei_to_ether(500000000000) == "0.000001"
    assert wei_to_ether(499999999999) == "0.000000"


def test_lamports_to_sol():
    assert lamports_to_sol(1500000000) == 1.5
    assert lamports_to_sol(0) == 0
    assert format_sol(lamports_to_sol(1500000000)) == "1.5000"


def test_plain_decimal_has_no_exponent():
    assert plain_decimal(lamports_to_sol(10_000_000_000)) == "10"
    assert plain_decimal(lamports_to_sol(1500000000)) == "1.5"


def test_wei_to_gwei():
    assert wei_to_gwei("0x4a817c800") == "20.00"
    assert wei_to_gwei(1234567890) == "1.23"


def test_token_amount_scales_by_decimals():
    assert token_amount("1234500", 6) == Decimal("1.2345")


@pytest.mark.parametrize("bad", [None, 1.5, "0xzz", "abc", True])
def test_parse_quantity_rejects_garbage(bad):
    with pytest.raises(ValueError):
        parse_quantity(bad)

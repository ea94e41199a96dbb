import pytest

from northernlights.position_sizer import PositionSizer


def test_calculates_position_size_correctly():
    sizer = PositionSizer(10000.0, 1.0)
    expected_size = 100.0 / (50.0 - 48.0)
    assert sizer.calculate_position_size(50.0, 48.0) == pytest.approx(expected_size)

    assert sizer.calculate_position_size(50.0, 50.0) == 0.0


def test_attributes_can_be_changed():
    sizer = PositionSizer(10000.0, 1.0)
    sizer.account_balance = 20000.0
    assert sizer.account_balance == pytest.approx(20000.0)

    sizer.risk_per_trade_percent = 2.5
    assert sizer.risk_per_trade_percent == pytest.approx(2.5)


def test_stop_above_entry_gives_same_size_as_below():
    sizer = PositionSizer(10000.0, 1.0)
    assert sizer.calculate_position_size(50.0, 52.0) == pytest.approx(
        sizer.calculate_position_size(50.0, 48.0)
    )


def test_size_scales_with_balance():
    small = PositionSizer(10000.0, 1.0).calculate_position_size(50.0, 48.0)
    large = PositionSizer(20000.0, 1.0).calculate_position_size(50.0, 48.0)
    assert large == pytest.approx(2 * small)


@pytest.mark.parametrize("entry, stop", [(0.0, 48.0), (50.0, 0.0), (-1.0, 48.0), (50.0, -3.0)])
def test_non_positive_prices_raise(entry, stop):
    with pytest.raises(ValueError):
        PositionSizer(10000.0, 1.0).calculate_position_size(entry, stop)
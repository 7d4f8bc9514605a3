import pytest

from inventory.levels import (
    IN_STOCK,
    LOW_STOCK,
    OUT_OF_STOCK,
    OVERSTOCKED,
    classify_stock,
    is_low_stock,
    is_out_of_stock,
)


@pytest.mark.parametrize(
    "quantity, threshold, max_stock, expected",
    [
        (0, 5, None, OUT_OF_STOCK),
        (-2, 5, None, OUT_OF_STOCK),
        (5, 5, None, LOW_STOCK),
        (3, 5, 50, LOW_STOCK),
        (6, 5, None, IN_STOCK),
        (50, 5, 50, IN_STOCK),
        (51, 5, 50, OVERSTOCKED),
        (0, 0, None, OUT_OF_STOCK),
    ],
)
def test_classify_stock(quantity, threshold, max_stock, expected):
    assert classify_stock(quantity, threshold, max_stock) == expected


def test_threshold_itself_is_low_stock():
    assert is_low_stock(10, 10)
    assert not is_low_stock(11, 10)


def test_out_of_stock_is_always_low_stock():
    for threshold in (0, 1, 5):
        assert is_out_of_stock(0)
        assert is_low_stock(0, threshold)

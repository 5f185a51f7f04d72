import pytest

from milighthub.units import (
    COLOR_TEMP_MAX_MIREDS,
    COLOR_TEMP_MIN_MIREDS,
    mireds_to_white_val,
    rescale,
    white_val_to_mireds,
)


def test_rescale_endpoints():
    assert rescale(0, 100) == 0
    assert rescale(255, 100) == 100
    assert rescale(50, 200, 50) == 200


def test_rescale_rounds_half_away_from_zero():
    assert rescale(1, 1, 2.0) == 1


def test_mireds_endpoints():
    assert mireds_to_white_val(COLOR_TEMP_MIN_MIREDS) == 0
    assert mireds_to_white_val(COLOR_TEMP_MAX_MIREDS) == 255
    assert mireds_to_white_val(COLOR_TEMP_MAX_MIREDS, 100) == 100


def test_mireds_are_clamped():
    assert mireds_to_white_val(1000) == mireds_to_white_val(COLOR_TEMP_MAX_MIREDS)
    assert mireds_to_white_val(0) == mireds_to_white_val(COLOR_TEMP_MIN_MIREDS)


def test_white_val_endpoints():
    assert white_val_to_mireds(0) == COLOR_TEMP_MIN_MIREDS
    assert white_val_to_mireds(255) == COLOR_TEMP_MAX_MIREDS
    assert white_val_to_mireds(100, 100) == COLOR_TEMP_MAX_MIREDS


@pytest.mark.parametrize("mireds", range(COLOR_TEMP_MIN_MIREDS, COLOR_TEMP_MAX_MIREDS + 1))
def test_mireds_round_trip(mireds):
    assert white_val_to_mireds(mireds_to_white_val(mireds)) == mireds


def test_white_val_is_monotonic():
    values = [mireds_to_white_val(m) for m in range(100, 400)]
    assert values == sorted(values)
import pytest

from milighthub.status import MiLightStatus, parse_status


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, MiLightStatus.ON),
        (False, MiLightStatus.OFF),
        (0, MiLightStatus.ON),
        (1, MiLightStatus.OFF),
        ("on", MiLightStatus.ON),
        ("ON", MiLightStatus.ON),
        ("True", MiLightStatus.ON),
        ("off", MiLightStatus.OFF),
        ("anything", MiLightStatus.OFF),
        (None, MiLightStatus.OFF),
    ],
)
def test_parse_status(value, expected):
    assert parse_status(value) is expected


def test_invalid_status_number():
    with pytest.raises(ValueError):
        parse_status(7)
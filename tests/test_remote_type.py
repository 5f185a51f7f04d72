import pytest

from milighthub.remote_type import (
    RemoteType,
    remote_type_from_string,
    remote_type_to_string,
)

KNOWN = [t for t in RemoteType if t is not RemoteType.UNKNOWN]


@pytest.mark.parametrize("remote_type", KNOWN)
def test_round_trip(remote_type):
    assert remote_type_from_string(remote_type_to_string(remote_type)) is remote_type


@pytest.mark.parametrize(
    "alias, expected",
    [
        ("fut096", RemoteType.RGBW),
        ("FUT007", RemoteType.CCT),
        ("fut092", RemoteType.RGB_CCT),
        ("fut098", RemoteType.RGB),
        ("V2_CCT", RemoteType.FUT091),
        ("RGBW", RemoteType.RGBW),
    ],
)
def test_aliases(alias, expected):
    assert remote_type_from_string(alias) is expected


def test_unknown_name():
    assert remote_type_from_string("nonsense") is RemoteType.UNKNOWN


def test_unknown_to_string():
    assert remote_type_to_string(RemoteType.UNKNOWN) == "unknown"


def test_names():
    assert remote_type_to_string(RemoteType.RGB_CCT) == "rgb_cct"
    assert RemoteType.UNKNOWN == 255
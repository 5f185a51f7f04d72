from milighthub.bulb_id import BulbId
from milighthub.remote_type import RemoteType


def test_defaults():
    bulb = BulbId()
    assert (bulb.device_id, bulb.group_id, bulb.device_type) == (
        0,
        0,
        RemoteType.UNKNOWN,
    )


def test_equality_and_hash():
    a = BulbId(0x1234, 2, RemoteType.CCT)
    b = BulbId(0x1234, 2, RemoteType.CCT)
    c = BulbId(0x1234, 2, RemoteType.RGBW)
    assert a == b
    assert a != c
    assert len({a, b, c}) == 2


def test_compact_id_parts():
    bulb = BulbId(0x1234, 3, RemoteType.RGB_CCT)
    compact = bulb.compact_id()
    assert compact & 0xFF == bulb.group_id
    assert (compact >> 8) & 0xFF == int(bulb.device_type)
    assert compact <= 0xFFFFFFFF


def test_compact_id_distinguishes_groups():
    ids = {BulbId(7, g, RemoteType.RGBW).compact_id() for g in range(9)}
    assert len(ids) == 9


def test_hex_device_id():
    bulb = BulbId(0xABCD, 1, RemoteType.CCT)
    assert bulb.hex_device_id() == "0xABCD"
    assert int(bulb.hex_device_id(), 16) == bulb.device_id


def test_to_dict():
    bulb = BulbId(0xABCD, 3, RemoteType.CCT)
    assert bulb.to_dict() == {"device_id": 0xABCD, "group_id": 3, "device_type": "cct"}


def test_to_list():
    bulb = BulbId(0xABCD, 3, RemoteType.RGB_CCT)
    assert bulb.to_list() == [0xABCD, "rgb_cct", 3]
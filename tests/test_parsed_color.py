from milighthub.parsed_color import ParsedColor


def test_red():
    color = ParsedColor.from_rgb(255, 0, 0)
    assert color.success
    assert (color.hue, color.saturation) == (0, 100)
    assert (color.r, color.g, color.b) == (255, 0, 0)


def test_primary_hues():
    assert ParsedColor.from_rgb(0, 255, 0).hue == 120
    assert ParsedColor.from_rgb(0, 0, 255).hue == 240


def test_grey_has_no_saturation():
    for level in (0, 128, 255):
        color = ParsedColor.from_rgb(level, level, level)
        assert color.saturation == 0
        assert color.hue == 0


def test_hue_and_saturation_ranges():
    for r, g, b in [(10, 200, 30), (250, 5, 120), (1, 2, 3), (255, 254, 0)]:
        color = ParsedColor.from_rgb(r, g, b)
        assert 0 <= color.hue <= 360
        assert 0 <= color.saturation <= 100


def test_from_json_object():
    assert ParsedColor.from_json({"r": 1, "g": 2, "b": 3}) == ParsedColor.from_rgb(1, 2, 3)


def test_from_json_object_missing_keys():
    assert ParsedColor.from_json({"g": 9}) == ParsedColor.from_rgb(0, 9, 0)


def test_from_json_hex_string():
    assert ParsedColor.from_json("#FF8000") == ParsedColor.from_rgb(255, 0x80, 0)


def test_from_json_comma_string():
    assert ParsedColor.from_json("10,20,30") == ParsedColor.from_rgb(10, 20, 30)
    assert ParsedColor.from_json("5") == ParsedColor.from_rgb(5, 0, 0)


def test_from_json_unsupported():
    color = ParsedColor.from_json(42)
    assert color.success is False
import json

from lichcrawl.levelgen import LevelGenConfig, generate_level_with_retries
from lichcrawl.levelgen.export import OBJECT_CHARS, level_to_dict, materials_legend, render_lines

CONFIG = LevelGenConfig(width=40, height=32)


def _level():
    return generate_level_with_retries(1, 2024, CONFIG)


def test_render_lines_marks_start_and_objects():
    result = _level()
    lines = render_lines(result)
    assert len(lines) == 32 and all(len(row) == 40 for row in lines)
    sx, sz = result.start
    assert lines[sz][sx] == "@"
    for (x, z), obj in result.objects:
        assert lines[z][x] == OBJECT_CHARS[obj.kind]


def test_render_without_objects_shows_only_tiles():
    result = _level()
    lines = render_lines(result, show_objects=False)
    assert set("".join(lines)) <= {" ", "#", "."}
    sx, sz = result.start
    assert lines[sz][sx] == "."


def test_level_to_dict_is_json_serialisable():
    result = _level()
    data = json.loads(json.dumps(level_to_dict(result)))
    assert data["level"] == 1
    assert data["style"] == "castle"
    assert data["seed"] == result.seed
    assert data["start"] == list(result.start)
    assert len(data["objects"]) == len(result.objects)
    assert data["objects"][0]["kind"] == "portal"
    assert data["objects"][0]["style"] == "caves"
    assert "materials" not in data


def test_materials_legend_codes_cover_grid():
    result = _level()
    legend = materials_legend(result)
    assert len(legend["rows"]) == 32
    codes = {str(c) for row in legend["rows"] for c in row}
    assert codes == set(legend["tiles"])
    sx, sz = result.start
    start_tile = legend["tiles"][str(legend["rows"][sz][sx])]
    assert start_tile["kind"] == "open"
    assert "floor" in start_tile

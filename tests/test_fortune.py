import zipfile

import pytest
from PIL import Image

from zbplug.fortune import (
    DEFAULT_KIND,
    TABLE,
    cache_name,
    draw,
    kind_for,
    kind_index,
    offset,
    pick_background,
    rows_num,
    text_positions,
)


@pytest.mark.parametrize("div", [1, 2, 9])
def test_rows_num_is_ceiling(div):
    for total in range(0, 40):
        rows = rows_num(total, div)
        assert rows * div >= total
        assert (rows - 1) * div < total or total == 0


@pytest.mark.parametrize("total", [1, 2, 3, 9])
def test_offset_steps_by_distance(total):
    for now in range(1, total):
        assert offset(total, now + 1, 3.0) - offset(total, now, 3.0) == pytest.approx(3.0)
        assert offset(total, now, 4.0) == pytest.approx(2 * offset(total, now, 2.0))


def test_positions_keep_text_order():
    text = "天地玄黄宇宙洪荒日月盈昃辰宿"
    positions = text_positions(text, 30.0, 20.0)
    assert "".join(c for c, _, _ in positions) == text


def test_single_column_shares_x():
    positions = text_positions("一二三四五六七八九", 30.0, 20.0)
    assert len({x for _, x, _ in positions}) == 1
    ys = [y for _, _, y in positions]
    assert all(b - a == pytest.approx(20.0) for a, b in zip(ys, ys[1:]))


def test_two_columns_run_right_to_left():
    positions = text_positions("一二三四五六七八九十百千", 30.0, 20.0)
    xs = sorted({x for _, x, _ in positions}, reverse=True)
    assert len(xs) == 2
    assert xs[0] - xs[1] == pytest.approx(30.0)
    assert positions[0][1] == xs[0]
    assert positions[-1][1] == xs[1]


def test_two_columns_second_is_bottom_aligned():
    full = text_positions("一二三四五六七八九", 30.0, 20.0)
    two = text_positions("一二三四五六七八九十百千", 30.0, 20.0)
    assert two[-1][2] == pytest.approx(full[-1][2])


def test_empty_text_has_no_positions():
    assert text_positions("", 30.0, 20.0) == []


def test_cache_name_properties():
    name = cache_name("a.zip", 1, "大吉", "content")
    assert len(name) == 32
    assert all(c in "0123456789abcdef" for c in name)
    assert name == cache_name("a.zip", 1, "大吉", "content")
    assert name != cache_name("a.zip", 2, "大吉", "content")


def test_kind_round_trip():
    for name in TABLE:
        assert kind_for(kind_index(name)) == name
    assert kind_index("车万") == 0


def test_kind_for_masks_and_defaults():
    assert kind_for(0x100 + 1) == TABLE[1]
    assert kind_for(len(TABLE)) == DEFAULT_KIND


def test_kind_index_unknown():
    with pytest.raises(KeyError):
        kind_index("不存在")


def test_pick_background(tmp_path):
    path = tmp_path / "bg.zip"
    with zipfile.ZipFile(path, "w") as archive:
        for i, size in enumerate([(4, 6), (7, 3)]):
            png = tmp_path / f"{i}.png"
            Image.new("RGB", size, (10, 20, 30)).save(png)
            archive.write(png, f"{i}.png")
    assert pick_background(path, 1).size == (7, 3)
    assert pick_background(path, 0).size == (4, 6)


def test_draw_missing_font_raises(tmp_path):
    background = Image.new("RGB", (10, 20))
    with pytest.raises(OSError):
        draw(background, "大吉", "一二三", tmp_path / "missing.ttf")
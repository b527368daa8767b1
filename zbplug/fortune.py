"""Daily fortune slips drawn on a background picture."""

from __future__ import annotations

import hashlib
import io
import zipfile
from os import PathLike

from PIL import Image, ImageDraw, ImageFont

IMAGES = "data/Fortune/"
OMIKUJI_JSON = IMAGES + "text.json"
FONT = "data/Font/sakura.ttf"
CACHE = IMAGES + "cache/"

TABLE = (
    "车万", "DC4", "爱因斯坦", "星空列车", "樱云之恋", "富婆妹", "李清歌", "公主连结", "原神",
    "明日方舟", "碧蓝航线", "碧蓝幻想", "战双", "阴阳师", "赛马娘", "东方归言录", "奇异恩典",
    "夏日口袋", "ASoul",
)
DEFAULT_KIND = TABLE[0]
_INDEX = {name: i for i, name in enumerate(TABLE)}

_PER_COLUMN = 9


def offset(total: int, now: int, distance: float) -> float:
    """Offset of the ``now``-th of ``total`` evenly spaced slots around the centre."""
    if total % 2 == 0:
        return (now - total // 2 - 1) * distance
    return (now - total // 2 - 1.5) * distance


def rows_num(total: int, div: int) -> int:
    """Number of groups of ``div`` needed to hold ``total`` items."""
    return -(-total // div)


def text_positions(text: str, char_width: float, char_height: float) -> list[tuple[str, float, float]]:
    """Lay text out in vertical columns; the sizes are the full step between characters."""
    chars = list(text)
    count = len(chars)
    columns = rows_num(count, _PER_COLUMN)
    positions = []
    if columns == 2:
        div = rows_num(count, 2)
        for i, char in enumerate(chars):
            column = rows_num(i + 1, div)
            filled = min(count - (column - 1) * div, div)
            row = i % div + 1
            if column == 2:
                row += _PER_COLUMN - filled
            x = -offset(columns, column, char_width) + 115
            y = offset(_PER_COLUMN, row, char_height) + 320.0
            positions.append((char, x, y))
        return positions
    for i, char in enumerate(chars):
        column = rows_num(i + 1, _PER_COLUMN)
        filled = min(count - (column - 1) * _PER_COLUMN, _PER_COLUMN)
        row = i % _PER_COLUMN + 1
        x = -offset(columns, column, char_width) + 115
        y = offset(filled, row, char_height) + 320.0
        positions.append((char, x, y))
    return positions


def cache_name(zip_path: str, index: int, title: str, content: str) -> str:
    """Hex digest naming the cached picture for a background and slip."""
    return hashlib.md5(f"{zip_path}{index}{title}{content}".encode()).hexdigest()


def kind_index(name: str) -> int:
    """Stored value for a background kind; raises KeyError for unknown kinds."""
    try:
        return _INDEX[name]
    except KeyError:
        raise KeyError(f"没有这个底图: {name}") from None


def kind_for(value: int) -> str:
    """Background kind for a stored value, falling back to the default."""
    v = value & 0xFF
    return TABLE[v] if v < len(TABLE) else DEFAULT_KIND


def pick_background(zip_path: str | PathLike[str], index: int) -> Image.Image:
    """Decode the ``index``-th entry of a zip of background pictures."""
    with zipfile.ZipFile(zip_path) as archive:
        entry = archive.infolist()[index]
        with archive.open(entry) as handle:
            image = Image.open(io.BytesIO(handle.read()))
            image.load()
    return image


def draw(background: Image.Image, title: str, text: str, font_path: str | PathLike[str] = FONT) -> Image.Image:
    """Draw the slip title and text onto a copy of the background."""
    width, height = background.size
    canvas = Image.new("RGBA", (height, width))
    canvas.paste(background.convert("RGBA"), (0, 0))
    pen = ImageDraw.Draw(canvas)

    title_font = ImageFont.truetype(str(font_path), 45)
    title_width = title_font.getlength(title)
    pen.text((140 - title_width / 2, 112), title, fill=(255, 255, 255, 255), font=title_font, anchor="ls")

    body_size = 23
    body_font = ImageFont.truetype(str(font_path), body_size)
    step_x = body_font.getlength("测") + 10
    step_y = body_size * 72 / 96 + 10
    for char, x, y in text_positions(text, step_x, step_y):
        pen.text((x, y), char, fill=(0, 0, 0, 255), font=body_font, anchor="ls")
    return canvas
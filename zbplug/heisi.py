"""Packed picture references and random picks from them."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

TEMPLATE_2021 = "http://hs.heisiwu.com/wp-content/uploads/{y:4d}/{m:02d}/{y:4d}{m:02d}16{n:06d}-611a3{d:>8s}.jpg"
TEMPLATE_GENERAL = "http://hs.heisiwu.com/wp-content/uploads/{y:4d}/{m:02d}/{d:015x}"

ITEM_SIZE = 10

EXTENSIONS = {0: ".jpg", 1: ".png", 2: ".webp"}

COMMAND_FILES = {
    "来点黑丝": "heisi.bin",
    "来点白丝": "baisi.bin",
    "来点jk": "jk.bin",
    "来点巨乳": "jur.bin",
    "来点足控": "zuk.bin",
    "来点网红": "mcn.bin",
}


@dataclass(frozen=True)
class Item:
    """A 10-byte packed picture reference."""

    raw: bytes

    def __post_init__(self) -> None:
        if len(self.raw) != ITEM_SIZE:
            raise ValueError(f"item must be {ITEM_SIZE} bytes, got {len(self.raw)}")

    def url(self) -> str:
        """Expand the packed reference into its URL."""
        raw = self.raw
        year = ((raw[0] >> 4) & 0x0F) + 2021
        month = raw[0] & 0x0F
        if year == 2021:
            num = int.from_bytes(raw[1:5], "big")
            return TEMPLATE_2021.format(y=year, m=month, n=num, d=raw[5:9].hex())
        packed = int.from_bytes(raw[1:9], "big")
        scaled = raw[9] & 0x80 > 0
        num = raw[9] & 0x7F
        url = TEMPLATE_GENERAL.format(y=year, m=month, d=packed & 0x0FFFFFFF_FFFFFFFF)
        if num > 0:
            url += f"-{num}"
        if scaled:
            url += "-scaled"
        ext = EXTENSIONS.get(packed >> 60)
        if ext is None:
            raise ValueError("invalid ext")
        return url + ext

    def __str__(self) -> str:
        return self.url()


def decode_items(data: bytes) -> list[Item]:
    """Split a data file into its packed items."""
    if len(data) % ITEM_SIZE != 0:
        raise ValueError(f"invalid data: length {len(data)} is not a multiple of {ITEM_SIZE}")
    return [Item(bytes(data[i:i + ITEM_SIZE])) for i in range(0, len(data), ITEM_SIZE)]


@dataclass
class Gallery:
    """Picture lists keyed by the command that asks for them."""

    lists: dict[str, list[Item]] = field(default_factory=dict)

    def load(self, command: str, data: bytes) -> None:
        """Decode a data file and store it under a command."""
        if command not in COMMAND_FILES:
            raise KeyError(command)
        self.lists[command] = decode_items(data)

    def pick(self, command: str, rng: random.Random | None = None) -> Item:
        """Return a random item for a command."""
        items = self.lists[command]
        if not items:
            raise IndexError(f"no pictures loaded for {command}")
        return (rng or random).choice(items)
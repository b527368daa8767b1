"""Ten-pull gacha simulation drawn from a zip of card pictures."""

from __future__ import annotations

import io
import random
import re
import zipfile
from dataclasses import dataclass, field
from os import PathLike

from PIL import Image

from .flags import PoolMode

_PREFIX_LEN = 8
_NAME = re.compile(r"_(.*)\.png")

CANVAS_SIZE = (1920, 1080)
BACKGROUND = (50, 50, 50, 255)
FIRST_SLOT_X = 230
SLOT_STEP = 146
REPLY_ICON_AT = (1270, 945)


@dataclass
class CardPool:
    """Index of the pictures inside a gacha zip."""

    path: str
    tree: dict[str, list[str]] = field(default_factory=dict)
    members: dict[str, str] = field(default_factory=dict)
    star3: str | None = None
    star4: str | None = None
    star5: str | None = None

    @classmethod
    def from_zip(cls, path: str | PathLike[str]) -> CardPool:
        """Index a zip whose entries sit under an 8-character top folder."""
        pool = cls(path=str(path))
        with zipfile.ZipFile(path) as archive:
            for info in archive.infolist():
                if info.is_dir():
                    pool.tree[info.filename] = []
                    continue
                name = info.filename[_PREFIX_LEN:]
                pool.members[name] = info.filename
                folder, slash, base = name.rpartition("/")
                if not slash:
                    pool.tree[name] = [name]
                    continue
                if not folder:
                    continue
                pool.tree.setdefault(folder, []).append(name)
                if folder == "gacha":
                    if base == "ThreeStar.png":
                        pool.star3 = name
                    elif base == "FourStar.png":
                        pool.star4 = name
                    elif base == "FiveStar.png":
                        pool.star5 = name
        return pool

    def first(self, key: str) -> str:
        """The first entry filed under a key."""
        return self.tree[key][0]

    def icon_for(self, name: str) -> str:
        """Element icon for a card, named by the part before the first underscore."""
        base = name[name.rfind("/") + 1:]
        element = base.split("_", 1)[0]
        return self.first(element + ".png")


def character_name(path: str) -> str:
    """Display name of a card picture, the part between ``_`` and ``.png``."""
    match = _NAME.search(path)
    if match is None:
        raise ValueError(f"no name in {path!r}")
    return match.group(1)


def reply_text(names: list[str], kind: int, prefix: str) -> str:
    """Announcement of five-star pulls; kind 1 is characters, kind 2 weapons."""
    if kind == 1:
        head = "★五星角色★\n"
    elif kind == 2 and prefix:
        head = "\n★五星武器★\n"
    else:
        head = "★五星武器★\n"
    return head + "".join(character_name(name) + " * " for name in names)


@dataclass
class Draw:
    """Cards won in one pull, by rarity, and the pull counter after it."""

    five_chars: list[str] = field(default_factory=list)
    four_chars: list[str] = field(default_factory=list)
    five_arms: list[str] = field(default_factory=list)
    four_arms: list[str] = field(default_factory=list)
    three_arms: list[str] = field(default_factory=list)
    total: int = 0

    @property
    def text(self) -> str:
        """Announcement of the five-star cards won."""
        text = ""
        if self.five_chars:
            text += reply_text(self.five_chars, 1, text)
        if self.five_arms:
            text += reply_text(self.five_arms, 2, text)
        return text

    @property
    def special(self) -> bool:
        """Whether any five-star card was won."""
        return bool(self.five_chars or self.five_arms)

    def ordered(self) -> list[tuple[int, str]]:
        """(stars, card) in display order."""
        groups = (
            (5, self.five_chars),
            (4, self.four_chars),
            (5, self.five_arms),
            (4, self.four_arms),
            (3, self.three_arms),
        )
        return [(stars, card) for stars, cards in groups for card in cards]

    def __len__(self) -> int:
        return len(self.ordered())


def draw_cards(
    pool: CardPool,
    count: int,
    mode: PoolMode,
    total: int,
    rng: random.Random | None = None,
) -> Draw:
    """Pull ``count`` cards; every ninth pull starts with a five-star card."""
    rng = rng or random.Random()
    result = Draw(total=total)

    def five() -> None:
        if rng.randrange(2) == 0:
            result.five_chars.append(rng.choice(pool.tree["five"]))
        else:
            result.five_arms.append(rng.choice(pool.tree["five2"]))

    def four() -> None:
        if rng.randrange(2) == 0:
            result.four_chars.append(rng.choice(pool.tree["four"]))
        else:
            result.four_arms.append(rng.choice(pool.tree["four2"]))

    if total % 9 == 0:
        five()
        count -= 1

    if mode.five_star():
        for _ in range(count):
            five()
        return result

    for _ in range(count):
        roll = rng.randrange(1000)
        if roll <= 800:
            result.three_arms.append(rng.choice(pool.tree["Three"]))
        elif roll <= 885:
            result.four_chars.append(rng.choice(pool.tree["four"]))
        elif roll <= 970:
            result.four_arms.append(rng.choice(pool.tree["four2"]))
        elif roll <= 985:
            result.five_chars.append(rng.choice(pool.tree["five"]))
        else:
            result.five_arms.append(rng.choice(pool.tree["five2"]))
    if not result.four_chars and not result.four_arms and result.three_arms:
        result.three_arms.pop()
        four()
    result.total = total + 1
    return result


def _load(archive: zipfile.ZipFile, pool: CardPool, name: str) -> Image.Image:
    member = pool.members.get(name, name)
    with archive.open(member) as handle:
        image = Image.open(io.BytesIO(handle.read()))
        image.load()
    return image.convert("RGBA")


def render(pool: CardPool, draw: Draw) -> Image.Image:
    """Draw the pull result onto a 1920x1080 picture."""
    canvas = Image.new("RGBA", CANVAS_SIZE, BACKGROUND)
    backgrounds = {5: pool.first("five_bg.jpg"), 4: pool.first("four_bg.jpg"), 3: pool.first("three_bg.jpg")}
    stars = {5: pool.star5, 4: pool.star4, 3: pool.star3}
    with zipfile.ZipFile(pool.path) as archive:
        canvas.alpha_composite(_load(archive, pool, pool.first("bg0.jpg")), (0, 0))
        for slot, (rank, card) in enumerate(draw.ordered()):
            at = (FIRST_SLOT_X + SLOT_STEP * slot, 0)
            star = stars[rank]
            if star is None:
                raise KeyError(f"no {rank}-star icon in the pool")
            for layer in (backgrounds[rank], card, star, pool.icon_for(card)):
                canvas.alpha_composite(_load(archive, pool, layer), at)
        canvas.alpha_composite(_load(archive, pool, pool.first("Reply.png")), REPLY_ICON_AT)
    return canvas
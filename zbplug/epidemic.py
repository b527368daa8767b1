"""City epidemic figures looked up in a nationwide area tree."""

from __future__ import annotations

import json
import urllib.request
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

TX_URL = (
    "https://api.inews.qq.com/newsqa/v1/query/inner/publish/modules/list"
    "?modules=statisGradeCityDetail,diseaseh5Shelf"
)


def _int(value: Any) -> int:
    if value is None:
        return 0
    return int(value)


@dataclass
class Area:
    """Epidemic figures for one area and the areas below it."""

    name: str = ""
    today_confirm: int = 0
    today_wzz_add: Any = None
    now_confirm: int = 0
    confirm: int = 0
    dead: int = 0
    heal: int = 0
    grade: str = ""
    wzz: int = 0
    children: list[Area] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Area:
        """Build an area tree from its decoded JSON form."""
        today = data.get("today") or {}
        total = data.get("total") or {}
        return cls(
            name=data.get("name") or "",
            today_confirm=_int(today.get("confirm")),
            today_wzz_add=today.get("wzz_add"),
            now_confirm=_int(total.get("nowConfirm")),
            confirm=_int(total.get("confirm")),
            dead=_int(total.get("dead")),
            heal=_int(total.get("heal")),
            grade=total.get("grade") or "",
            wzz=_int(total.get("wzz")),
            children=[cls.from_dict(child) for child in data.get("children") or [] if child is not None],
        )


def find_city(area: Area | None, name: str) -> Area | None:
    """Search an area tree for the area with the given name."""
    if area is None:
        return None
    if area.name == name:
        return area
    for child in area.children:
        if child.name == name:
            return child
        found = find_city(child, name)
        if found is not None:
            return found
    return None


def parse_report(data: bytes | str) -> tuple[Area, str]:
    """Decode a report into its top area and its last update time."""
    decoded = json.loads(data)
    shelf = (decoded.get("data") or {}).get("diseaseh5Shelf") or {}
    tree = shelf.get("areaTree") or []
    if not tree or tree[0] is None:
        raise ValueError("report holds no area data")
    return Area.from_dict(tree[0]), shelf.get("lastUpdateTime") or ""


def _fetch(url: str) -> bytes:
    with urllib.request.urlopen(url, timeout=30) as response:
        return response.read()


def query_epidemic(city: str, fetch: Callable[[str], bytes] | None = None) -> tuple[Area | None, str]:
    """Fetch the current report and return the city's area (or None) and the update time."""
    root, updated = parse_report((fetch or _fetch)(TX_URL))
    return find_city(root, city), updated


def _show(value: Any) -> str:
    if value is None:
        return "<nil>"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def format_report(area: Area, updated: str) -> str:
    """Render the figures of one area as a chat message."""
    return (
        f"【{area.name}】疫情数据\n"
        f"新增人数：{area.today_confirm}\n"
        f"现有确诊：{area.now_confirm}\n"
        f"累计确诊：{area.confirm}\n"
        f"治愈人数：{area.heal}\n"
        f"死亡人数：{area.dead}\n"
        f"无症状人数：{area.wzz}\n"
        f"新增无症状：{_show(area.today_wzz_add)}\n"
        f"更新时间：\n『{updated}』"
    )
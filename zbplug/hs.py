"""Hearthstone card search and deck pictures."""

from __future__ import annotations

import json
import urllib.request
from collections.abc import Callable
from typing import Any

HOME = "https://hs.fbigame.com"
REFERER = "https://hs.fbigame.com"
USER_AGENT = (
    "Mozilla/5.0 (Linux; Android 6.0; Nexus 5 Build/MRA58N) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/86.0.4240.198 Mobile Safari/537.36"
)
HS = "https://hs.fbigame.com/ajax.php?"
PARA = (
    "mod=get_cards_list&"
    "mode=-1&"
    "extend=-1&"
    "mutil_extend=&"
    "hero=-1&"
    "rarity=-1&"
    "cost=-1&"
    "mutil_cost=&"
    "techlevel=-1&"
    "type=-1&"
    "collectible=-1&"
    "isbacon=-1&"
    "page=1&"
    "search_type=1&"
    "deckmode=normal"
)
CARD_IMAGE = "https://res.fbigame.com/hs/v13/"

_HASH_START = 'var hash = "'


def extract_hash(page: str) -> str:
    """Pull the page hash out of the home page source."""
    _, found, rest = page.partition(_HASH_START)
    if not found:
        raise ValueError("page holds no hash")
    return rest.split('"', 1)[0]


def search_url(hash_value: str, query: str) -> str:
    """Card search URL."""
    return HS + PARA + "&hash=" + hash_value + "&search=" + query


def deck_image_url(hash_value: str, code: str) -> str:
    """Deck picture URL for a deck code."""
    return HS + PARA + "mod=general_deck_image&deck_code=" + code + "&deck_text=&hash=" + hash_value + "&search=" + code


def card_image_url(card_id: str, auth_key: str) -> str:
    """Picture URL of one card."""
    return CARD_IMAGE + card_id + ".png?auth_key=" + auth_key


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def parse_cards(payload: bytes | str, limit: int = 5) -> list[tuple[str, str]]:
    """Return (card id, auth key) of the first cards of a search result."""
    if isinstance(payload, bytes):
        payload = payload.decode()
    if not payload.strip():
        return []
    data = json.loads(payload)
    cards = data.get("list") if isinstance(data, dict) else None
    if not isinstance(cards, list):
        return []
    return [
        (_text(card.get("CardID")), _text(card.get("auth_key")))
        for card in cards[:limit]
        if isinstance(card, dict)
    ]


def _fetch(url: str) -> bytes:
    request = urllib.request.Request(url, headers={"Referer": REFERER, "User-Agent": USER_AGENT})
    with urllib.request.urlopen(request, timeout=30) as response:
        return response.read()


class HearthstoneClient:
    """Talks to the card database through a fetch function."""

    def __init__(self, fetch: Callable[[str], bytes | str] | None = None) -> None:
        self._fetch = fetch or _fetch

    def _get(self, url: str) -> str:
        data = self._fetch(url)
        return data.decode() if isinstance(data, bytes) else data

    def _hash(self) -> str:
        return extract_hash(self._get(HOME))

    def search(self, query: str) -> list[tuple[str, str]]:
        """Search cards and return (card id, auth key) of up to five results."""
        return parse_cards(self._get(search_url(self._hash(), query)))

    def deck_image(self, code: str) -> str:
        """Return the deck picture as a ``base64://`` image reference."""
        data = json.loads(self._get(deck_image_url(self._hash(), code)))
        return "base64://" + _text(data.get("img") if isinstance(data, dict) else None)
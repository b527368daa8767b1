import json

import pytest

from zbplug.hs import (
    CARD_IMAGE,
    HOME,
    HS,
    PARA,
    HearthstoneClient,
    card_image_url,
    deck_image_url,
    extract_hash,
    parse_cards,
    search_url,
)

PAGE = '<script>var token_x = 1; var hash = "abc123"; other</script>'
CARDS = [{"CardID": f"C{i}", "auth_key": f"k{i}"} for i in range(7)]


def test_extract_hash():
    assert extract_hash(PAGE) == "abc123"


def test_extract_hash_missing():
    with pytest.raises(ValueError):
        extract_hash("<html></html>")


def test_search_url():
    url = search_url("abc123", "火球")
    assert url.startswith(HS + PARA)
    assert url.endswith("&hash=abc123&search=火球")


def test_deck_image_url():
    url = deck_image_url("h", "AAECODE")
    assert url.startswith(HS + PARA + "mod=general_deck_image&deck_code=AAECODE")
    assert url.endswith("&hash=h&search=AAECODE")


def test_card_image_url():
    assert card_image_url("C1", "k1") == CARD_IMAGE + "C1.png?auth_key=k1"


def test_parse_cards_limits():
    cards = parse_cards(json.dumps({"list": CARDS}))
    assert len(cards) == 5
    assert cards[0] == ("C0", "k0")
    assert parse_cards(json.dumps({"list": CARDS}), limit=2) == [("C0", "k0"), ("C1", "k1")]


def test_parse_cards_empty():
    assert parse_cards("") == []
    assert parse_cards(b'{"list": []}') == []


def _client(responses, seen):
    def fetch(url):
        seen.append(url)
        if url == HOME:
            return PAGE.encode()
        return responses(url)

    return HearthstoneClient(fetch)


def test_client_search():
    seen = []
    client = _client(lambda url: json.dumps({"list": CARDS[:3]}).encode(), seen)
    assert client.search("q") == [("C0", "k0"), ("C1", "k1"), ("C2", "k2")]
    assert seen == [HOME, search_url("abc123", "q")]


def test_client_deck_image():
    seen = []
    client = _client(lambda url: json.dumps({"img": "ZGF0YQ=="}), seen)
    assert client.deck_image("AAE") == "base64://ZGF0YQ=="
    assert seen[-1] == deck_image_url("abc123", "AAE")
import random

import pytest

from zbplug.heisi import COMMAND_FILES, Gallery, Item, decode_items


def test_item_2021_url():
    item = Item(bytes([0x05, 0, 0, 0, 7, 0xDE, 0xAD, 0xBE, 0xEF, 0]))
    assert item.url() == (
        "http://hs.heisiwu.com/wp-content/uploads/2021/05/20210516000007-611a3deadbeef.jpg"
    )


def test_item_general_url():
    item = Item(bytes([0x12, 0x10, 0, 0, 0, 0, 0, 0x0A, 0xBC, 0x83]))
    assert item.url() == (
        "http://hs.heisiwu.com/wp-content/uploads/2022/02/000000000000abc-3-scaled.png"
    )


def test_item_general_plain_jpg():
    item = Item(bytes([0x12, 0x00, 0, 0, 0, 0, 0, 0x0A, 0xBC, 0x00]))
    url = item.url()
    assert url.endswith(".jpg")
    assert "-scaled" not in url
    assert str(item) == url


def test_item_webp_extension():
    item = Item(bytes([0x23, 0x20, 0, 0, 0, 0, 0, 0, 1, 0]))
    assert item.url().endswith(".webp")


def test_item_invalid_extension():
    item = Item(bytes([0x12, 0x30, 0, 0, 0, 0, 0, 0, 1, 0]))
    with pytest.raises(ValueError):
        item.url()


def test_item_wrong_size():
    with pytest.raises(ValueError):
        Item(b"\x00" * 9)


def test_decode_items_splits():
    data = bytes(range(20))
    items = decode_items(data)
    assert len(items) == 2
    assert b"".join(i.raw for i in items) == data


def test_decode_items_bad_length():
    with pytest.raises(ValueError):
        decode_items(b"\x00" * 15)


def test_gallery_pick_from_loaded():
    gallery = Gallery()
    data = bytes(range(30))
    gallery.load("来点黑丝", data)
    picked = gallery.pick("来点黑丝", random.Random(1))
    assert picked in decode_items(data)


def test_gallery_unknown_and_empty():
    gallery = Gallery()
    with pytest.raises(KeyError):
        gallery.load("nope", b"")
    with pytest.raises(KeyError):
        gallery.pick("来点jk")
    gallery.load("来点jk", b"")
    with pytest.raises(IndexError):
        gallery.pick("来点jk")


def test_every_command_file_loads_into_gallery():
    assert COMMAND_FILES["来点网红"] == "mcn.bin"
    gallery = Gallery()
    data = bytes(range(10))
    for command in COMMAND_FILES:
        gallery.load(command, data)
        assert gallery.pick(command, random.Random(0)).raw == data
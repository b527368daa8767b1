"""Local song library for the guessing game: config, playlists, picks and clips."""

from __future__ import annotations

import json
import os
import random
import subprocess
import urllib.request
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any

MUSIC_TYPES = "mp3;MP3;wav;WAV;amr;AMR;3gp;3GP;3gpp;3GPP;acc;ACC"
CUT_TIMES = ("00:00:05", "00:00:30", "00:01:00")
OVOOA_API = "https://ovooa.com/API/163_Music_Rand/api.php?id="
DEFAULT_PLAYLIST_NAME = "FM"
DEFAULT_PLAYLIST_ID = 3136952023


@dataclass
class PlaylistRef:
    """A local playlist bound to an online playlist id."""

    name: str
    id: int = 0


@dataclass
class DefaultList:
    """The playlist a group plays by default."""

    group_id: int
    name: str


@dataclass
class ListInfo:
    """A local playlist folder."""

    name: str
    number: int
    id: int = 0


@dataclass
class MusicInfo:
    """What a song's file name says about it."""

    title: str
    singer: str
    alias: str = ""

    @property
    def answer(self) -> str:
        """The answer text revealed at the end of a round."""
        text = "歌名:" + self.title + "\n歌手:" + self.singer
        if self.alias:
            text += "\n其他信息:\n" + self.alias.replace("&", "\n")
        return text


def _default_music_path() -> str:
    return os.getcwd() + "/data/guessmusic/music/"


def _default_playlists() -> list[PlaylistRef]:
    return [PlaylistRef(DEFAULT_PLAYLIST_NAME, DEFAULT_PLAYLIST_ID)]


@dataclass
class Config:
    """User settings of the guessing game."""

    music_path: str = field(default_factory=_default_music_path)
    local: bool = True
    api: bool = True
    cookie: str = ""
    playlist: list[PlaylistRef] = field(default_factory=_default_playlists)
    defaultlist: list[DefaultList] = field(default_factory=list)

    @classmethod
    def load(cls, path: str | PathLike[str]) -> Config:
        """Read the config file; when it is missing, write the default one and return it."""
        target = Path(path)
        if not target.exists():
            config = cls()
            config.save(target)
            return config
        data: dict[str, Any] = json.loads(target.read_text(encoding="utf-8")) or {}
        return cls(
            music_path=data.get("musicPath") or "",
            local=bool(data.get("local")),
            api=bool(data.get("api")),
            cookie=data.get("cookie") or "",
            playlist=[
                PlaylistRef(name=item.get("name") or "", id=int(item.get("id") or 0))
                for item in data.get("playlist") or []
            ],
            defaultlist=[
                DefaultList(group_id=int(item.get("gid") or 0), name=item.get("name") or "")
                for item in data.get("defaultlist") or []
            ],
        )

    def save(self, path: str | PathLike[str]) -> None:
        """Write the config as JSON."""
        data = {
            "musicPath": self.music_path,
            "local": self.local,
            "api": self.api,
            "cookie": self.cookie,
            "playlist": [{"name": p.name, "id": p.id} for p in self.playlist],
            "defaultlist": [{"gid": d.group_id, "name": d.name} for d in self.defaultlist],
        }
        Path(path).write_text(json.dumps(data, ensure_ascii=False, separators=(",", ":")) + "\n", encoding="utf-8")


def list_playlists(config: Config, music_path: str | PathLike[str]) -> list[ListInfo]:
    """List the playlist folders under the library root, sorted by name."""
    bound = {ref.name: ref.id for ref in config.playlist if ref.id != 0}
    root = Path(music_path)
    root.mkdir(parents=True, exist_ok=True)
    entries = sorted(root.iterdir(), key=lambda p: p.name)
    if not entries:
        raise LookupError("所设置的歌库不存在任何歌单！")
    lists = []
    for entry in entries:
        if not entry.is_dir():
            continue
        try:
            number = sum(1 for _ in entry.iterdir())
        except OSError:
            continue
        lists.append(ListInfo(name=entry.name, number=number, id=bound.get(entry.name, 0)))
    return lists


def local_music(names: Sequence[Path], rng: random.Random | None = None) -> str:
    """Pick a random file name among directory entries; folders are skipped, "" if none."""
    files = [entry for entry in names if not entry.is_dir()]
    if not files:
        return ""
    return (rng or random).choice(files).name


def music_lottery(
    config: Config,
    music_path: str | PathLike[str],
    list_name: str,
    rng: random.Random | None = None,
    downloader: Callable[[int, str], str] | None = None,
) -> tuple[str, str]:
    """Pick a song from a playlist; return (folder path ending in '/', file name).

    When the playlist is bound to an online id and the API is on, two times in
    three a song is fetched through ``downloader(playlist_id, folder)`` instead.
    """
    rng = rng or random.Random()
    try:
        lists = list_playlists(config, music_path)
    except LookupError as exc:
        raise LookupError(f"获取列表错误,{exc}") from exc
    ids = {info.name: info.id for info in lists}
    if list_name not in ids:
        raise LookupError("指定的歌单不存在与列表当中")
    playlist_id = ids[list_name]
    folder = str(music_path) + list_name + "/"
    Path(folder).mkdir(parents=True, exist_ok=True)
    entries = sorted(Path(folder).iterdir(), key=lambda p: p.name)
    online = playlist_id != 0 and config.api and downloader is not None
    if not entries:
        if not online:
            raise LookupError("本地歌单数据为0")
        try:
            detail = downloader(playlist_id, folder)
        except Exception as exc:
            detail = str(exc)
        raise LookupError(f"本地歌单数据为0,API下载歌曲失败\n{detail}")
    if not online or rng.randrange(3) == 1:
        return folder, local_music(entries, rng)
    try:
        return folder, downloader(playlist_id, folder)
    except Exception:
        return folder, local_music(entries, rng)


def _fetch(url: str) -> bytes:
    with urllib.request.urlopen(url, timeout=30) as response:
        return response.read()


def draw_by_ovooa(playlist_id: int, fetch: Callable[[str], bytes | str] | None = None) -> int:
    """Ask the random-song API for a song id out of an online playlist."""
    data = json.loads((fetch or _fetch)(OVOOA_API + str(playlist_id)))
    if data.get("code") != 1:
        raise LookupError(data.get("text") or "API returned no song")
    return int((data.get("data") or {}).get("id") or 0)


def is_music_type(ext: str) -> bool:
    """Whether an extension is among the accepted music types."""
    return ext in MUSIC_TYPES


def parse_music_name(name: str) -> MusicInfo:
    """Parse a ``title - singer[ - source].ext`` file name."""
    ext = name.split(".")[-1]
    if not is_music_type(ext):
        raise ValueError(f"抽取到了歌曲：\n{name}\n该歌曲不是音乐后缀，请联系bot主人修改")
    parts = name.replace("." + ext, "").split(" - ")
    if len(parts) == 1:
        raise ValueError(f"抽取到了歌曲：\n{name}\n该歌曲命名不符合命名规则，请联系bot主人修改")
    return MusicInfo(title=parts[0], singer=parts[1], alias=parts[2] if len(parts) > 2 else "")


def cut_music(music_name: str, music_dir: str, output_dir: str, bot_path: str) -> list[str]:
    """Cut three 10-second clips out of a song with ffmpeg; return their paths."""
    try:
        Path(output_dir).mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise RuntimeError(f"[生成歌曲目录错误]ERROR: {exc}") from exc
    clips = [f"{bot_path}/{output_dir}{i}.wav" for i in range(len(CUT_TIMES))]
    args = ["ffmpeg", "-y", "-i", music_dir + music_name]
    for start, clip in zip(CUT_TIMES, clips):
        args += ["-ss", start, "-t", "10", clip]
    args.append("-hide_banner")
    try:
        result = subprocess.run(args, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE, check=False)
    except OSError as exc:
        raise RuntimeError(f"[生成歌曲错误]ERROR: {exc}") from exc
    if result.returncode != 0:
        stderr = result.stderr or b""
        raise RuntimeError("[生成歌曲错误]ERROR: " + stderr.decode("utf-8", errors="replace"))
    return clips
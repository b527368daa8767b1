"""Rounds of the song guessing game: answers, hints, clips and playlist choice."""

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from .musiclib import Config, ListInfo, MusicInfo

CLIP_COUNT = 3
MAX_WRONG_AFTER_CLIPS = 6

WRONG_LIST_NAME = "歌单名称错误，可以发送“歌单列表”获取歌单名称"


class Outcome(enum.Enum):
    """How a round stands after an answer."""

    CONTINUE = "continue"
    DENIED = "denied"
    CORRECT = "correct"
    CANCELLED = "cancelled"
    FAILED = "failed"

    @property
    def finished(self) -> bool:
        return self in (Outcome.CORRECT, Outcome.CANCELLED, Outcome.FAILED)


@dataclass(frozen=True)
class Reply:
    """What the bot says back, and which clip (if any) it plays next."""

    text: str
    outcome: Outcome = Outcome.CONTINUE
    clip: int | None = None

    @property
    def play_song(self) -> bool:
        """Whether the whole song is played after this reply."""
        return self.outcome.finished


class GuessGame:
    """One round of guessing a song from short clips."""

    def __init__(self, info: MusicInfo, starter: int) -> None:
        self.info = info
        self.starter = starter
        self.clip_count = 0
        self.answer_count = 0
        self.finished = False

    def _end(self, text: str, outcome: Outcome) -> Reply:
        self.finished = True
        return Reply(text=text, outcome=outcome)

    def _correct(self, what: str) -> Reply:
        return self._end(
            f"太棒了，你猜对{what}了！答案是\n{self.info.answer}\n\n下面欣赏猜歌的歌曲",
            Outcome.CORRECT,
        )

    @staticmethod
    def _matches(field: str, answer: str) -> bool:
        return answer in field or field.casefold() == answer.casefold()

    def answer(self, user_id: int, text: str) -> Reply:
        """Handle a ``-answer`` message from a player."""
        if self.finished:
            raise RuntimeError("the round is already over")
        answer = text.replace("-", "", 1)
        if answer == "取消":
            if user_id == self.starter:
                return self._end(
                    f"游戏已取消，猜歌答案是\n{self.info.answer}\n\n\n下面欣赏猜歌的歌曲",
                    Outcome.CANCELLED,
                )
            return Reply(text="你无权限取消", outcome=Outcome.DENIED)
        if answer == "提示":
            self.clip_count += 1
            if self.clip_count >= CLIP_COUNT:
                return Reply(text="已经没有提示了哦")
            return Reply(text="再听这段音频，要仔细听哦", clip=self.clip_count)
        if self._matches(self.info.title, answer):
            return self._correct("歌曲名")
        if self._matches(self.info.singer, answer):
            return self._correct("歌手名")
        if self._matches(self.info.alias, answer):
            return self._correct("出处")
        self.clip_count += 1
        if self.clip_count >= CLIP_COUNT:
            if self.answer_count < MAX_WRONG_AFTER_CLIPS:
                self.answer_count += 1
                return Reply(text="答案不对哦，加油啊~")
            return self._end(
                f"次数到了，没能猜出来。答案是\n{self.info.answer}\n\n下面欣赏猜歌的歌曲",
                Outcome.FAILED,
            )
        self.answer_count += 1
        return Reply(text="答案不对，再听这段音频，要仔细听哦", clip=self.clip_count)

    def timeout_clip(self) -> Reply | None:
        """Next clip when nobody answered in time; None once all clips were played."""
        if self.finished:
            return None
        self.clip_count += 1
        if self.clip_count >= CLIP_COUNT:
            return None
        return Reply(text="好像有些难度呢，再听这段音频，要仔细听哦", clip=self.clip_count)


def choose_playlist(
    config: Config,
    lists: Sequence[ListInfo],
    group_id: int,
    requested: str = "",
) -> str:
    """Playlist to play: the requested one, else the group default, else the first."""
    name = requested
    if not name:
        name = next((d.name for d in config.defaultlist if d.group_id == group_id), "")
    if not name:
        if not lists:
            raise LookupError("所设置的歌库不存在任何歌单！")
        return lists[0].name
    if not any(info.name == name for info in lists):
        raise LookupError(WRONG_LIST_NAME)
    return name
"""Friend requests and group invites: notices, flags and auto-accept rules."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime

from .flags import RequestPolicy

_BASE = 0x4E00
_CHUNK = 0x3FFF
_FLAG_MASK = (1 << 56) - 1
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_DECISION = re.compile(r"(同意|拒绝)(申请|邀请)[\t\n\f\r ]*([一-踀]{4})[\t\n\f\r ]*(.*)")
_TOGGLE = re.compile(r"(开启|关闭)自动同意(申请|邀请|主人)")

INVITE = "invite"
FRIEND = "friend"


@dataclass(frozen=True)
class Decision:
    """A superuser's answer to a pending request."""

    approve: bool
    target: str
    flag: str
    reason: str = ""

    @property
    def reply(self) -> str:
        """Confirmation sent back after the answer was applied."""
        return "已" + ("同意" if self.approve else "拒绝") + self.target


def _encode_flag(flag: str) -> str:
    if not re.fullmatch(r"[+-]?[0-9]+", flag):
        raise ValueError(f"invalid flag: {flag!r}")
    value = int(flag, 10)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise ValueError(f"flag out of range: {flag!r}")
    packed = (value % (1 << 64)) & _FLAG_MASK
    return "".join(chr(_BASE + ((packed >> shift) & _CHUNK)) for shift in (42, 28, 14, 0))


def _decode_flag(text: str) -> str:
    value = 0
    for char in text:
        value = (value << 14) | ((ord(char) - _BASE) & _CHUNK)
    return str(value & _FLAG_MASK)


def format_time(timestamp: int) -> str:
    """Local time of a Unix timestamp as ``YYYY-MM-DD hh:mm:ss``."""
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def format_invite(
    now: str,
    username: str,
    user_id: int,
    group_name: str,
    group_id: int,
    flag: str,
    auto: bool,
) -> list[str]:
    """Forward-message nodes telling the superuser about a group invite."""
    encoded = _encode_flag(flag)
    body = (
        f"在{now}收到来自"
        f"\n用户:[{username}]({user_id})的群聊邀请"
        f"\n群聊:[{group_name}]({group_id})"
    )
    if auto:
        return ["已自动同意" + body + "\nflag:" + encoded]
    return [body + "\n请在下方复制flag并在前面加上:\n同意/拒绝邀请，来决定同意还是拒绝", encoded]


def format_friend(
    now: str,
    username: str,
    user_id: int,
    comment: str,
    flag: str,
    auto: bool,
) -> list[str]:
    """Forward-message nodes telling the superuser about a friend request."""
    encoded = _encode_flag(flag)
    body = (
        f"在{now}收到来自"
        f"\n用户:[{username}]({user_id})"
        f"\n的好友请求:{comment}"
    )
    if auto:
        return ["已自动同意" + body + "\nflag:" + encoded]
    return [body + "\n请在下方复制flag并在前面加上:\n同意/拒绝申请，来决定同意还是拒绝", encoded]


def should_auto_accept(policy: RequestPolicy, kind: str, from_superuser: bool) -> bool:
    """Whether a request of the given kind (``invite`` or ``friend``) is accepted at once."""
    if kind == INVITE:
        switched_on = policy.invite_on()
    elif kind == FRIEND:
        switched_on = policy.apply_on()
    else:
        raise ValueError(f"unknown request kind: {kind!r}")
    return switched_on or (not policy.master_off() and from_superuser)


def parse_decision(text: str) -> Decision | None:
    """Parse ``同意/拒绝`` + ``申请/邀请`` + flag [+ reason]; None if it does not match."""
    match = _DECISION.fullmatch(text)
    if match is None:
        return None
    command, target, encoded, reason = match.groups()
    return Decision(approve=command == "同意", target=target, flag=_decode_flag(encoded), reason=reason)


def parse_toggle(text: str) -> tuple[str, str] | None:
    """Parse ``开启/关闭自动同意申请/邀请/主人`` into (option, target); None if it does not match."""
    match = _TOGGLE.fullmatch(text)
    if match is None:
        return None
    return match.group(1), match.group(2)


def apply_toggle(policy: RequestPolicy, option: str, target: str) -> RequestPolicy:
    """Return the policy with one switch set as the command asks."""
    if target == "申请":
        return policy.with_apply(option == "开启")
    if target == "邀请":
        return policy.with_invite(option == "开启")
    if target == "主人":
        return policy.with_master(option == "关闭")
    raise ValueError(f"unknown toggle target: {target!r}")
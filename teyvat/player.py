"""A player: the game modules of one character and its client connection."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Callable

from teyvat.bag import BAG_MOD, ModBag
from teyvat.connection import ConnectionClosed
from teyvat.drops import GameData
from teyvat.icons import ICON_MOD, ModIcon
from teyvat.inventory import ModCard, ModCook, ModHome, ModRelic, ModUniqueTask, ModWeapon
from teyvat.profile import MOD_PLAY, ModPlayer
from teyvat.roles import ModRole
from teyvat.wish import ModWish, format_wish_summary

logger = logging.getLogger(__name__)

SYNC_UID_MSG_ID = 1
UNSET = "未设置"

_JSON_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _encode_json(value: Any) -> bytes:
    """Compact JSON with HTML-sensitive characters escaped."""
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escape in _JSON_ESCAPES.items():
        text = text.replace(char, escape)
    return text.encode("utf-8")


def _describe_item(config: Any) -> str:
    if config is None:
        return "<nil>"
    return f"&{{{config.item_id} {config.sort_type} {config.item_name}}}"


class Player:
    """One character with all its modules.

    The conn, when given, provides send_msg(msg_id, data) and raises
    ConnectionClosed once the client is gone.
    """

    def __init__(
        self,
        data: GameData,
        conn: Any = None,
        ban_words: Any = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.data = data
        self.conn = conn
        tables = data.items
        self.mod_card = ModCard(tables)
        self.mod_unique_task = ModUniqueTask()
        self.mod_role = ModRole(tables, owner=self)
        self.mod_weapon = ModWeapon(tables)
        self.mod_relic = ModRelic(tables)
        self.mod_cook = ModCook(tables)
        self.mod_home = ModHome(tables)
        self.mod_wish = ModWish(data)
        extra = {} if clock is None else {"clock": clock}
        self._mods: dict[str, Any] = {
            MOD_PLAY: ModPlayer(tables, data.world, owner=self, ban_words=ban_words, **extra),
            ICON_MOD: ModIcon(tables),
            BAG_MOD: ModBag(tables, owner=self),
        }

    @property
    def mods(self) -> dict[str, Any]:
        """The named modules, by name."""
        return dict(self._mods)

    @property
    def profile(self) -> ModPlayer:
        return self._mods[MOD_PLAY]

    @property
    def user_id(self) -> int:
        return self.profile.user_id

    @property
    def user_name(self) -> str:
        return self.profile.name

    def get_mod(self, name: str) -> Any:
        """The named module; raises KeyError for an unknown name."""
        return self._mods[name]

    def _send(self, msg_id: int, data: bytes) -> None:
        try:
            self.conn.send_msg(msg_id, data)
        except ConnectionClosed:
            print("Player SendMsg error !")

    def send_string_msg(self, msg_id: int, msg: str) -> None:
        """Send a text to the client as a JSON string."""
        self._send(msg_id, _encode_json(msg))

    def sync_uid(self) -> None:
        """Tell the client its user id."""
        logger.info("SyncUid")
        self._send(SYNC_UID_MSG_ID, _encode_json({"UID": self.user_id}))

    def add_bag_item(self, item_id: int, num: int) -> None:
        self.get_mod(BAG_MOD).add_item(item_id, num)

    def recv_set_name(self, name: str) -> None:
        self.profile.set_name(name)

    def recv_set_sign(self, sign: str) -> None:
        self.profile.set_sign(sign)

    def recv_set_icon(self, icon_id: int) -> None:
        self.profile.set_icon(icon_id)

    def recv_set_card(self, card_id: int) -> None:
        self.profile.set_card(card_id)

    def reduce_world_level(self) -> None:
        self.profile.reduce_world_level()

    def return_world_level(self) -> None:
        self.profile.return_world_level()

    def set_birth(self, birth: int) -> None:
        self.profile.set_birth(birth)

    def set_show_card(self, show_card: list[int]) -> None:
        self.profile.set_show_card(show_card)

    def set_show_team(self, show_role: list[int]) -> None:
        self.profile.set_show_team(show_role)

    def set_hide_show_team(self, is_hide: int) -> None:
        self.profile.set_hide_show_team(is_hide)

    def base_info(self) -> str:
        """The profile page: name, levels, sign, icon, card and birthday."""
        profile = self.profile
        items = self.data.items
        lines = [
            f"名字: {profile.name}",
            f"等级: {profile.player_level}",
            f"大世界等级: {profile.world_level_now}",
            f"签名: {profile.sign if profile.sign else UNSET}",
        ]
        if profile.icon == 0:
            lines.append(f"头像: {UNSET}")
        else:
            lines.append(f"头像: {_describe_item(items.item(profile.icon))} {profile.icon}")
        if profile.card == 0:
            lines.append(f"名片: {UNSET}")
        else:
            lines.append(f"名片: {_describe_item(items.item(profile.card))} {profile.card}")
        if profile.birth == 0:
            lines.append(f"生日: {UNSET}")
        else:
            lines.append(f"生日: {profile.birth // 100} 月 {profile.birth % 100} 日")
        return "".join(line + "\n" for line in lines)

    def wish_helper(self) -> str:
        """Statistics of all real wishes on the event banner."""
        pool = self.mod_wish.up_wish_pool
        return format_wish_summary(
            pool.stat_total_wishes,
            pool.stat_five_total,
            pool.stat_four_role,
            pool.stat_four_weapon,
            pool.five_star_times,
            pool.four_star_times,
        )
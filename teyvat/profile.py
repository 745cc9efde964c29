"""The player's profile: name, level, world level, birthday and showcase."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable

from teyvat.banwords import BanWordManager, get_ban_word_manager
from teyvat.config_items import ItemTables
from teyvat.config_world import WorldTables
from teyvat.constants import (
    LOGIC_FALSE,
    LOGIC_TRUE,
    REDUCE_WORLD_LEVEL_COOL_TIME,
    REDUCE_WORLD_LEVEL_MAX,
    REDUCE_WORLD_LEVEL_START,
    SHOW_SIZE,
)
from teyvat.icons import ICON_MOD

MOD_PLAY = "player"
DEFAULT_NAME = "旅行者"

_DAYS_IN_MONTH = {
    1: 31, 2: 29, 3: 31, 4: 30, 5: 31, 6: 30,
    7: 31, 8: 31, 9: 30, 10: 31, 11: 30, 12: 31,
}


@dataclass
class ShowRole:
    role_id: int
    role_level: int
    owner_id: int = 0


def _split_birth(birth: int) -> tuple[int, int]:
    month = abs(birth) // 100
    if birth < 0:
        month = -month
    return month, birth - month * 100


@dataclass
class ModPlayer:
    """Profile data of a player.

    The owner provides get_mod(name) returning the icon module, and the
    mod_card, mod_role and mod_unique_task attributes.
    """

    tables: ItemTables
    world: WorldTables
    owner: Any = None
    ban_words: BanWordManager | None = None
    clock: Callable[[], datetime] = field(default=datetime.now, repr=False)

    user_id: int = 0
    icon: int = 0
    card: int = 0
    name: str = DEFAULT_NAME
    sign: str = ""
    player_level: int = 1
    player_exp: int = 0
    world_level: int = 1
    world_level_now: int = 1
    world_level_cool: int = 0
    birth: int = 0
    show_card: list[int] = field(default_factory=list)
    show_team: list[ShowRole] = field(default_factory=list)
    hide_show_team: int = 0
    prohibit: int = 0
    is_gm: int = 0

    def _now(self) -> int:
        return int(self.clock().timestamp())

    def _ban_manager(self) -> BanWordManager:
        return self.ban_words if self.ban_words is not None else get_ban_word_manager()

    def set_icon(self, icon_id: int) -> None:
        if not self.owner.get_mod(ICON_MOD).has_icon(icon_id):
            print("没有头像:", icon_id)
            return
        self.icon = icon_id
        print("变更头像为:", self.tables.item_name(icon_id), self.icon)

    def set_card(self, card_id: int) -> None:
        if not self.owner.mod_card.has_card(card_id):
            return
        self.card = card_id
        print("当前名片", self.card)

    def set_name(self, name: str) -> None:
        if self._ban_manager().is_ban_word(name):
            return
        self.name = name
        print("设置成功,名字变更为:", self.name)

    def set_sign(self, sign: str) -> None:
        if self._ban_manager().is_ban_word(sign):
            return
        self.sign = sign
        print("设置成功,签名变更为:", self.sign)

    def add_exp(self, exp: int) -> None:
        """Add experience and level up while the level table allows it."""
        self.player_exp += exp
        while True:
            config = self.world.level(self.player_level)
            if config is None or config.player_exp == 0:
                break
            if config.chapter_id > 0 and not self.owner.mod_unique_task.is_task_finish(
                config.chapter_id
            ):
                break
            if self.player_exp < config.player_exp:
                break
            self.player_level += 1
            self.player_exp -= config.player_exp
        print("当前等级:", self.player_level, "---当前经验：", self.player_exp)

    def reduce_world_level(self) -> None:
        if self.world_level < REDUCE_WORLD_LEVEL_START:
            print("操作失败:, ---当前世界等级：", self.world_level)
            return
        if self.world_level - self.world_level_now >= REDUCE_WORLD_LEVEL_MAX:
            print("操作失败:, ---当前世界等级：", self.world_level, "---真实世界等级：", self.world_level_now)
            return
        now = self._now()
        if now < self.world_level_cool:
            print("操作失败:, ---冷却中")
            return
        self.world_level_now -= 1
        self.world_level_cool = now + REDUCE_WORLD_LEVEL_COOL_TIME
        print("操作成功:, ---当前世界等级：", self.world_level, "---真实世界等级：", self.world_level_now)

    def return_world_level(self) -> None:
        if self.world_level_now == self.world_level:
            print("操作失败:, ---当前世界等级：", self.world_level, "---真实世界等级：", self.world_level_now)
            return
        now = self._now()
        if now < self.world_level_cool:
            print("操作失败:, ---冷却中")
            return
        self.world_level_now += 1
        self.world_level_cool = now + REDUCE_WORLD_LEVEL_COOL_TIME
        print("操作成功:, ---当前世界等级：", self.world_level, "---真实世界等级：", self.world_level_now)

    def set_birth(self, birth: int) -> None:
        """Set the birthday, given as month * 100 + day; it can be set only once."""
        if self.birth > 0:
            print("已设置过生日!")
            return
        month, day = _split_birth(birth)
        max_day = _DAYS_IN_MONTH.get(month)
        if max_day is None:
            print("没有", month, "月！")
            return
        if day <= 0 or day > max_day:
            print(month, "月没有", day, "日！")
            return
        self.birth = birth
        print("设置成功，生日为:", month, "月", day, "日")
        if self.is_birthday():
            print("今天是你的生日，生日快乐！")
        else:
            print("期待你生日的到来!")

    def is_birthday(self) -> bool:
        today = self.clock()
        return today.month == self.birth // 100 and today.day == self.birth % 100

    def set_show_card(self, show_card: list[int]) -> None:
        """Show owned cards, without repeats, in the given order."""
        if len(show_card) > SHOW_SIZE:
            return
        chosen: list[int] = []
        for card_id in show_card:
            if card_id in chosen or not self.owner.mod_card.has_card(card_id):
                continue
            chosen.append(card_id)
        self.show_card = chosen + self.show_card[len(chosen):]
        print(self.show_card)

    def set_show_team(self, show_role: list[int]) -> None:
        """Show owned characters, without repeats, in the given order."""
        if len(show_role) > SHOW_SIZE:
            print("消息结构错误")
            return
        seen: set[int] = set()
        team: list[ShowRole] = []
        for role_id in show_role:
            if role_id in seen or not self.owner.mod_role.has_role(role_id):
                continue
            team.append(ShowRole(role_id=role_id, role_level=self.owner.mod_role.role_level(role_id)))
            seen.add(role_id)
        self.show_team = team
        print(self.show_card)

    def set_hide_show_team(self, is_hide: int) -> None:
        if is_hide not in (LOGIC_FALSE, LOGIC_TRUE):
            return
        self.hide_show_team = is_hide

    def set_prohibit(self, prohibit: int) -> None:
        self.prohibit = prohibit

    def set_is_gm(self, is_gm: int) -> None:
        self.is_gm = is_gm

    def is_can_enter(self) -> bool:
        """True unless the player is banned until a time still to come."""
        return self.prohibit < self._now()
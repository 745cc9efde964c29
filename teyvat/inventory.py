"""Cards, cooking skills, home furniture, unique tasks, relics and weapons."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from teyvat.config_items import ItemTables
from teyvat.constants import MAX_RELIC_SIZE, MAX_WEAPON_SIZE

_ALWAYS_FINISHED_TASKS = frozenset({10001, 10002})


class TaskState(IntEnum):
    INIT = 0
    DOING = 1
    FINISH = 2


@dataclass
class ModCard:
    """The name cards a player owns."""

    tables: ItemTables
    cards: set[int] = field(default_factory=set)

    def has_card(self, card_id: int) -> bool:
        return card_id in self.cards

    def add_item(self, item_id: int, friendliness: int) -> None:
        """Grant a card if it is valid, new and the friendliness suffices."""
        if item_id in self.cards:
            print("已存在名片：", item_id)
            return
        config = self.tables.card(item_id)
        if config is None:
            print("非法名片：", item_id)
            return
        if friendliness < config.friendliness:
            print("好感度不足：", item_id)
            return
        self.cards.add(item_id)
        print("获得名片：", self.tables.item_name(item_id))

    def check_get_card(self, role_id: int, friendliness: int) -> None:
        """Grant the card tied to a role, if there is one."""
        config = self.tables.card_by_role(role_id)
        if config is None:
            return
        self.add_item(config.card_id, friendliness)


@dataclass
class ModCook:
    """The cooking skills a player has learnt."""

    tables: ItemTables
    cooks: set[int] = field(default_factory=set)

    def add_item(self, item_id: int) -> None:
        name = self.tables.item_name(item_id)
        if item_id in self.cooks:
            print("已习得：", name)
            return
        if self.tables.cook(item_id) is None:
            print("没有这个烹饪技能：", name)
            return
        self.cooks.add(item_id)
        print("学会烹饪：", name)


@dataclass
class HomeItem:
    item_id: int
    item_num: int = 0
    key_id: int = 0


@dataclass
class ModHome:
    """Furniture held for the player's home."""

    tables: ItemTables
    home_item_info: dict[int, HomeItem] = field(default_factory=dict)
    used_home_item_info: dict[int, HomeItem] = field(default_factory=dict)

    def add_item(self, item_id: int, num: int) -> None:
        item = self.home_item_info.get(item_id)
        if item is None:
            item = self.home_item_info[item_id] = HomeItem(item_id=item_id, item_num=num)
        else:
            item.item_num += num
        config = self.tables.item(item_id)
        if config is not None:
            print("获得家具", config.item_name, "----数量：", num, "----当前数量：", item.item_num)


@dataclass
class TaskInfo:
    task_id: int
    state: int = TaskState.INIT


@dataclass
class ModUniqueTask:
    """Progress of the player's unique tasks."""

    my_task_info: dict[int, TaskInfo] = field(default_factory=dict)

    def is_task_finish(self, task_id: int) -> bool:
        if task_id in _ALWAYS_FINISHED_TASKS:
            return True
        task = self.my_task_info.get(task_id)
        return task is not None and task.state == TaskState.FINISH


@dataclass
class Relic:
    relic_id: int
    key_id: int


@dataclass
class ModRelic:
    """Relics, each stored under its own ever-increasing key."""

    tables: ItemTables
    relic_info: dict[int, Relic] = field(default_factory=dict)
    max_key: int = 0

    def add_item(self, item_id: int, num: int) -> None:
        config = self.tables.relic(item_id)
        if config is None:
            print("非法圣遗物")
            return
        if len(self.relic_info) + num > MAX_RELIC_SIZE:
            print("圣遗物背包已满！！！")
            return
        for _ in range(num):
            self.max_key += 1
            relic = Relic(relic_id=item_id, key_id=self.max_key)
            self.relic_info[relic.key_id] = relic
            print(
                "获得圣遗物：", self.tables.item_name(item_id),
                "------圣遗物星级：", config.star, "-----圣遗物编号：", relic.key_id,
            )

    def remove_item(self, key_id: int) -> None:
        relic = self.relic_info.get(key_id)
        if relic is None:
            print("当前编号圣遗物不存在")
            return
        print("移除圣遗物id为：", key_id, "移除圣遗物名称为", self.tables.item_name(relic.relic_id))
        del self.relic_info[key_id]


@dataclass
class Weapon:
    weapon_id: int
    key_id: int


@dataclass
class ModWeapon:
    """Weapons, each stored under its own ever-increasing key."""

    tables: ItemTables
    weapon_info: dict[int, Weapon] = field(default_factory=dict)
    max_key: int = 0

    def add_item(self, item_id: int, num: int) -> None:
        config = self.tables.weapon(item_id)
        if config is None:
            print("非法武器")
            return
        if len(self.weapon_info) + num > MAX_WEAPON_SIZE:
            print("武器背包已满！！！")
            return
        for _ in range(num):
            self.max_key += 1
            weapon = Weapon(weapon_id=item_id, key_id=self.max_key)
            self.weapon_info[weapon.key_id] = weapon
            print(
                "获得武器：", self.tables.item_name(item_id),
                "------武器星级：", config.star, "-----武器编号：", weapon.key_id,
            )

    def remove_item(self, key_id: int) -> None:
        weapon = self.weapon_info.get(key_id)
        if weapon is None:
            print("当前编号不存在")
            return
        print("移除武器id为：", key_id, "武器名称为", self.tables.item_name(weapon.weapon_id))
        del self.weapon_info[key_id]
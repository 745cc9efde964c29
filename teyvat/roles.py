"""The characters a player owns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from teyvat.config_items import ItemTables
from teyvat.constants import ADD_ROLE_TIME_NORMAL_MAX, ADD_ROLE_TIME_NORMAL_MIN
from teyvat.icons import ICON_MOD

CARD_FRIENDLINESS = 10


@dataclass
class RoleInfo:
    role_id: int
    get_times: int = 1
    level: int = 1


@dataclass
class ModRole:
    """Characters and how many times each was obtained.

    The owner provides add_bag_item(item_id, num), get_mod(name) returning
    the icon module, and a mod_card attribute.
    """

    tables: ItemTables
    owner: Any = None
    role_info: dict[int, RoleInfo] = field(default_factory=dict)

    def has_role(self, role_id: int) -> bool:
        return role_id in self.role_info

    def role_level(self, role_id: int) -> int:
        try:
            return self.role_info[role_id].level
        except KeyError:
            raise KeyError(f"role {role_id} is not owned") from None

    def add_item(self, role_id: int, num: int) -> None:
        """Grant a character num times; repeats turn into materials."""
        config = self.tables.role(role_id)
        if config is None:
            print("配置不存在roleId:", role_id)
            return
        for _ in range(num):
            info = self.role_info.get(role_id)
            if info is None:
                self.role_info[role_id] = RoleInfo(role_id=role_id)
                continue
            info.get_times += 1
            if ADD_ROLE_TIME_NORMAL_MIN <= info.get_times <= ADD_ROLE_TIME_NORMAL_MAX:
                self.owner.add_bag_item(config.stuff, config.stuff_num)
                self.owner.add_bag_item(config.stuff_item, config.stuff_item_num)
            else:
                self.owner.add_bag_item(config.max_stuff_item, config.max_stuff_item_num)
        item_config = self.tables.item(role_id)
        info = self.role_info.get(role_id)
        if item_config is not None and info is not None:
            print("获得角色", item_config.item_name, "------总计", info.get_times, "次")
        self.owner.get_mod(ICON_MOD).check_get_icon(role_id)
        self.owner.mod_card.check_get_card(role_id, CARD_FRIENDLINESS)
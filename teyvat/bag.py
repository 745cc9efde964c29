"""The player's bag: ordinary items, and routing of special items to their modules."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from teyvat.config_items import ItemTables
from teyvat.constants import ItemType
from teyvat.icons import ICON_MOD

BAG_MOD = "bag"
CARD_FRIENDLINESS_FROM_BAG = 12


class BagError(Exception):
    """An item cannot be removed from the bag."""


@dataclass
class ItemInfo:
    item_id: int
    item_num: int = 0


@dataclass
class ModBag:
    """Counted items, plus dispatch of roles, icons, equipment and so on.

    The owner provides mod_role, mod_card, mod_weapon, mod_relic, mod_cook,
    mod_home and get_mod(name) returning the icon module.
    """

    tables: ItemTables
    owner: Any = None
    bag_info: dict[int, ItemInfo] = field(default_factory=dict)

    def add_item(self, item_id: int, num: int) -> None:
        """Grant an item, handing it to the module that keeps its kind."""
        config = self.tables.item(item_id)
        if config is None:
            print(item_id, "物品不存在")
            return
        sort_type = config.sort_type
        if sort_type == ItemType.ROLE:
            self.owner.mod_role.add_item(item_id, num)
        elif sort_type == ItemType.ICON:
            self.owner.get_mod(ICON_MOD).add_item(item_id)
        elif sort_type == ItemType.CARD:
            self.owner.mod_card.add_item(item_id, CARD_FRIENDLINESS_FROM_BAG)
        elif sort_type == ItemType.WEAPON:
            self.owner.mod_weapon.add_item(item_id, num)
        elif sort_type == ItemType.RELIC:
            self.owner.mod_relic.add_item(item_id, num)
        elif sort_type == ItemType.COOK:
            self.owner.mod_cook.add_item(item_id)
        elif sort_type == ItemType.COOKBOOK:
            if num > 1:
                print("注意：只能有一份食谱！")
            self.add_item_to_bag(item_id, 1)
        elif sort_type == ItemType.FURN:
            self.owner.mod_home.add_item(item_id, num)
        else:
            self.add_item_to_bag(item_id, num)

    def add_item_to_bag(self, item_id: int, num: int) -> None:
        info = self.bag_info.get(item_id)
        if info is None:
            info = self.bag_info[item_id] = ItemInfo(item_id=item_id, item_num=num)
        else:
            info.item_num += num
        config = self.tables.item(item_id)
        if config is not None:
            print("获得物品", config.item_name, "----数量：", num, "----当前数量：", info.item_num)

    def remove_item(self, item_id: int, num: int) -> None:
        """Take items out of the bag; raises BagError when that is not possible."""
        if item_id == 0:
            return
        config = self.tables.item(item_id)
        if config is None:
            print(item_id, "物品不存在")
            raise BagError("物品不存在")
        sort_type = config.sort_type
        if sort_type == ItemType.ROLE:
            raise BagError("无法删除角色")
        if sort_type == ItemType.ICON:
            raise BagError("无法删除头像")
        if sort_type == ItemType.CARD:
            raise BagError("无法删除卡片")
        if sort_type == ItemType.COOK:
            raise BagError("无法删除烹饪技能")
        self.remove_item_from_bag(item_id, num)

    def remove_item_gm(self, item_id: int, num: int) -> None:
        """Deduct items unconditionally; the count may go negative."""
        info = self.bag_info.get(item_id)
        if info is None:
            info = self.bag_info[item_id] = ItemInfo(item_id=item_id, item_num=-num)
        else:
            info.item_num -= num
        config = self.tables.item(item_id)
        if config is not None:
            print("扣除物品", config.item_name, "----数量：", num, "----当前数量：", info.item_num)

    def remove_item_from_bag(self, item_id: int, num: int) -> None:
        """Deduct items; raises BagError if there are not enough."""
        name = self.tables.item_name(item_id)
        if not self.has_enough_item(item_id, num):
            info = self.bag_info.get(item_id)
            now_num = info.item_num if info is not None else 0
            raise BagError(
                f"{name}数量不足----当前数量：{now_num},请通过背包系统物品Id:{item_id}增加物品"
            )
        info = self.bag_info.get(item_id)
        if info is None:
            info = self.bag_info[item_id] = ItemInfo(item_id=item_id, item_num=-num)
        else:
            info.item_num -= num
        print("扣除物品", name, "----数量：", num, "----当前数量：", info.item_num)

    def has_enough_item(self, item_id: int, num: int) -> bool:
        if item_id == 0:
            return True
        info = self.bag_info.get(item_id)
        return info is not None and info.item_num >= num

    def use_item(self, item_id: int, num: int) -> None:
        """Use items; only cookbooks can be used."""
        config = self.tables.item(item_id)
        if config is None:
            print(item_id, "物品不存在")
            return
        if not self.has_enough_item(item_id, num):
            info = self.bag_info.get(item_id)
            now_num = info.item_num if info is not None else 0
            print(config.item_name, "数量不足", "----当前数量：", now_num)
            return
        if config.sort_type == ItemType.COOKBOOK:
            self.use_cookbook(item_id, num)
        else:
            print("此物品无法使用")

    def use_cookbook(self, item_id: int, num: int) -> None:
        """Consume cookbooks and grant their reward."""
        cookbook = self.tables.cookbook(item_id)
        if cookbook is None:
            print("食谱不存在")
            return
        try:
            self.remove_item(item_id, num)
        except BagError as exc:
            print(exc)
            return
        self.add_item(cookbook.reward, num)

    def to_json(self) -> str:
        """Serialise the bag contents."""
        info = {
            str(item_id): {"ItemId": item.item_id, "ItemNum": item.item_num}
            for item_id, item in sorted(self.bag_info.items())
        }
        return json.dumps({"BagInfo": info}, separators=(",", ":"))

    def load_json(self, text: str) -> None:
        """Merge bag contents stored as JSON; raises ValueError on malformed data."""
        raw = json.loads(text)
        if not isinstance(raw, dict):
            raise ValueError("bag data must be a JSON object")
        info = raw.get("BagInfo") or {}
        if not isinstance(info, dict):
            raise ValueError("BagInfo must be a JSON object")
        for key, value in info.items():
            if not isinstance(value, dict):
                raise ValueError(f"bad bag entry for {key!r}")
            self.bag_info[int(key)] = ItemInfo(
                item_id=int(value.get("ItemId", 0)),
                item_num=int(value.get("ItemNum", 0)),
            )
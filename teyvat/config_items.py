"""Item, role, equipment and collectible configuration tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from teyvat.csvutil import CSV_METADATA_KEY, load_map

DEFAULT_CSV_DIR = Path("csv")


def _col(name: str, default: Any = 0) -> Any:
    return field(default=default, metadata={CSV_METADATA_KEY: name})


@dataclass
class ItemConfig:
    item_id: int = _col("ItemId")
    sort_type: int = _col("SortType")
    item_name: str = _col("ItemName", "")


@dataclass
class RoleConfig:
    role_id: int = _col("RoleId")
    star: int = _col("Star")
    stuff: int = _col("Stuff")
    stuff_num: int = _col("StuffNum")
    stuff_item: int = _col("StuffItem")
    stuff_item_num: int = _col("StuffItemNum")
    max_stuff_item: int = _col("MaxStuffItem")
    max_stuff_item_num: int = _col("MaxStuffItemNum")


@dataclass
class WeaponConfig:
    weapon_id: int = _col("WeaponId")
    weapon_type: int = _col("Type")
    star: int = _col("Star")


@dataclass
class CardConfig:
    card_id: int = _col("CardId")
    friendliness: int = _col("Friendliness")
    check: int = _col("Check")


@dataclass
class IconConfig:
    icon_id: int = _col("IconId")
    check: int = _col("Check")


@dataclass
class CookConfig:
    cook_id: int = _col("CookId")


@dataclass
class CookBookConfig:
    cookbook_id: int = _col("CookBookId")
    reward: int = _col("Reward")


@dataclass
class HomeItemConfig:
    home_item_id: int = _col("HomeItemId")
    item_type: int = _col("Type")


@dataclass
class RelicConfig:
    relics_id: int = _col("RelicsId")
    relic_type: int = _col("Type")
    pos: int = _col("Pos")
    star: int = _col("Star")


@dataclass
class ItemTables:
    """All item-related tables, with lookups by id and by role."""

    items: dict[int, ItemConfig] = field(default_factory=dict)
    roles: dict[int, RoleConfig] = field(default_factory=dict)
    weapons: dict[int, WeaponConfig] = field(default_factory=dict)
    cards: dict[int, CardConfig] = field(default_factory=dict)
    icons: dict[int, IconConfig] = field(default_factory=dict)
    cooks: dict[int, CookConfig] = field(default_factory=dict)
    cookbooks: dict[int, CookBookConfig] = field(default_factory=dict)
    home_items: dict[int, HomeItemConfig] = field(default_factory=dict)
    relics: dict[int, RelicConfig] = field(default_factory=dict)
    _cards_by_role: dict[int, CardConfig] = field(init=False, repr=False, default_factory=dict)
    _icons_by_role: dict[int, IconConfig] = field(init=False, repr=False, default_factory=dict)

    def __post_init__(self) -> None:
        self._cards_by_role = {card.check: card for card in self.cards.values()}
        self._icons_by_role = {icon.check: icon for icon in self.icons.values()}

    @classmethod
    def load(cls, directory: str | Path = DEFAULT_CSV_DIR) -> "ItemTables":
        """Load every table from the CSV files in the directory."""
        base = Path(directory)
        return cls(
            items=load_map(base / "Item.csv", ItemConfig),
            roles=load_map(base / "Role.csv", RoleConfig),
            weapons=load_map(base / "Weapon.csv", WeaponConfig),
            cards=load_map(base / "Card.csv", CardConfig),
            icons=load_map(base / "Icon.csv", IconConfig),
            cooks=load_map(base / "Cook.csv", CookConfig),
            cookbooks=load_map(base / "CookBook.csv", CookBookConfig),
            home_items=load_map(base / "Home.csv", HomeItemConfig),
            relics=load_map(base / "Relics.csv", RelicConfig),
        )

    def item(self, item_id: int) -> ItemConfig | None:
        return self.items.get(item_id)

    def item_name(self, item_id: int) -> str:
        """The item's name, or an empty string for an unknown item."""
        config = self.item(item_id)
        return config.item_name if config is not None else ""

    def role(self, role_id: int) -> RoleConfig | None:
        return self.roles.get(role_id)

    def weapon(self, weapon_id: int) -> WeaponConfig | None:
        return self.weapons.get(weapon_id)

    def card(self, card_id: int) -> CardConfig | None:
        return self.cards.get(card_id)

    def card_by_role(self, role_id: int) -> CardConfig | None:
        return self._cards_by_role.get(role_id)

    def icon(self, icon_id: int) -> IconConfig | None:
        return self.icons.get(icon_id)

    def icon_by_role(self, role_id: int) -> IconConfig | None:
        return self._icons_by_role.get(role_id)

    def cook(self, cook_id: int) -> CookConfig | None:
        return self.cooks.get(cook_id)

    def cookbook(self, cookbook_id: int) -> CookBookConfig | None:
        return self.cookbooks.get(cookbook_id)

    def home_item(self, home_item_id: int) -> HomeItemConfig | None:
        return self.home_items.get(home_item_id)

    def relic(self, relic_id: int) -> RelicConfig | None:
        return self.relics.get(relic_id)
"""Weighted drop groups for wishes and item drops."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from teyvat.config_items import ItemTables
from teyvat.config_world import DropItemConfig, WishConfig, WorldTables
from teyvat.constants import (
    DROP_GROUP_ITEMS,
    DROP_ONE_ITEM,
    DROP_WEIGHT_ALL,
    DROP_WEIGHTED_ITEMS,
    LOGIC_TRUE,
)

logger = logging.getLogger(__name__)


@dataclass
class DropGroup:
    """Wish entries sharing a drop id, with the sum of their weights."""

    drop_id: int
    weight_all: int = 0
    drop_configs: list[WishConfig] = field(default_factory=list)


@dataclass
class DropItemGroup:
    """Item drop entries sharing a drop id; only weighted entries count in weight_all."""

    drop_id: int
    weight_all: int = 0
    drop_configs: list[DropItemConfig] = field(default_factory=list)


def build_drop_groups(wishes: Iterable[WishConfig]) -> dict[int, DropGroup]:
    """Group wish entries by drop id, keeping their order."""
    groups: dict[int, DropGroup] = {}
    for config in wishes:
        group = groups.setdefault(config.drop_id, DropGroup(drop_id=config.drop_id))
        group.weight_all += config.weight
        group.drop_configs.append(config)
    return groups


def build_drop_item_groups(items: Iterable[DropItemConfig]) -> dict[int, DropItemGroup]:
    """Group item drop entries by drop id, keeping their order."""
    groups: dict[int, DropItemGroup] = {}
    for config in items:
        group = groups.setdefault(config.drop_id, DropItemGroup(drop_id=config.drop_id))
        if config.drop_type == DROP_WEIGHTED_ITEMS:
            group.weight_all += config.weight
        group.drop_configs.append(config)
    return groups


def random_drop(
    groups: dict[int, DropGroup], group: DropGroup, rng: random.Random
) -> WishConfig | None:
    """Roll through the group, following non-final results into their groups.

    Returns the final entry reached, or None when a result names no group.
    """
    while True:
        if group.weight_all <= 0:
            raise ValueError(f"drop group {group.drop_id} has no weight")
        roll = rng.randrange(group.weight_all)
        total = 0
        for config in group.drop_configs:
            total += config.weight
            if roll < total:
                break
        else:
            return None
        if config.is_end == LOGIC_TRUE:
            return config
        next_group = groups.get(config.result)
        if next_group is None:
            print(" 当前resultID:", config.result, "不存在")
            return None
        group = next_group


def item_drop(
    groups: dict[int, DropItemGroup], drop_id: int, rng: random.Random
) -> list[DropItemConfig]:
    """Return the item entries dropped by a drop id; drop id 0 drops nothing."""
    dropped: list[DropItemConfig] = []
    if drop_id == 0:
        return dropped
    try:
        group = groups[drop_id]
    except KeyError:
        raise KeyError(f"drop id {drop_id} does not exist") from None
    rand_now = 0
    rand_weight = rng.randrange(group.weight_all) if group.weight_all > 0 else 0
    for config in group.drop_configs:
        if config.drop_type == DROP_ONE_ITEM:
            if rng.randrange(DROP_WEIGHT_ALL) < config.weight:
                dropped.append(config)
        if config.drop_type == DROP_GROUP_ITEMS:
            if rng.randrange(DROP_WEIGHT_ALL) < config.weight:
                dropped.extend(item_drop(groups, config.item_id, rng))
        if config.drop_type == DROP_WEIGHTED_ITEMS:
            if rand_now > rand_weight:
                continue
            rand_now += config.weight
            if rand_now > rand_weight:
                dropped.append(config)
    return dropped


@dataclass
class GameData:
    """All configuration tables together with the drop groups built from them."""

    items: ItemTables = field(default_factory=ItemTables)
    world: WorldTables = field(default_factory=WorldTables)
    rng: random.Random = field(default_factory=random.Random)
    drop_groups: dict[int, DropGroup] = field(init=False)
    drop_item_groups: dict[int, DropItemGroup] = field(init=False)

    def __post_init__(self) -> None:
        self.drop_groups = build_drop_groups(self.world.wishes)
        logger.info("wish drop groups built")
        self.drop_item_groups = build_drop_item_groups(self.world.drop_items)
        logger.info("item drop groups built")

    @classmethod
    def load(cls, directory: str | Path = Path("csv")) -> "GameData":
        """Load every table from the CSV files in the directory."""
        data = cls(items=ItemTables.load(directory), world=WorldTables.load(directory))
        logger.info("csv configuration loaded")
        return data

    def random_drop(self, group: DropGroup) -> WishConfig | None:
        return random_drop(self.drop_groups, group, self.rng)

    def item_drop(self, drop_id: int) -> list[DropItemConfig]:
        return item_drop(self.drop_item_groups, drop_id, self.rng)
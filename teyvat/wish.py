"""Wishes on the event banner, with the soft and hard pity rules."""

from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Any

from teyvat.bag import BAG_MOD
from teyvat.config_world import WishConfig
from teyvat.constants import (
    FIVE_STAR_LIMIT,
    FIVE_STAR_LIMIT_INCREMENT,
    FOUR_STAR_LIMIT,
    FOUR_STAR_LIMIT_INCREMENT,
    TOTAL_WISH_WEIGHT,
    ItemType,
)
from teyvat.drops import DropGroup, GameData

UP_POOL_DROP_ID = 1000
FIVE_STAR_RESULT = 10001
THREE_STAR_RESULT = 10003


@dataclass
class WishPool:
    """Pity counters and statistics of one banner.

    The *_test counters belong to simulated wishes and never mix with the
    counters of real wishes.
    """

    pool_id: int = 0
    five_star_times_test: int = 0
    four_star_times_test: int = 0
    five_star_times: int = 0
    four_star_times: int = 0
    stat_five_total: int = 0
    stat_four_role: int = 0
    stat_four_weapon: int = 0
    stat_total_wishes: int = 0


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


def _percent(part: int, total: int) -> str:
    """part/total as a percentage in single precision, formatted to 4 places."""
    numerator = _f32(100 * _f32(part))
    denominator = _f32(total)
    if denominator == 0:
        if numerator == 0:
            return "NaN"
        return "+Inf" if numerator > 0 else "-Inf"
    return f"{_f32(numerator / denominator):.4f}"


def format_wish_summary(
    times: int,
    five_star: int,
    four_role: int,
    four_weapon: int,
    five_pity: int,
    four_pity: int,
) -> str:
    """The summary shown after real wishes and by the wish statistics page."""
    return (
        f"本次您一共进行了{times}次祈愿，共获得五星角色{five_star}位，"
        f"占总数的{_percent(five_star, times)}%,四星角色{four_role}位，"
        f"四星武器{four_weapon}把，四星物品占总数的{_percent(four_role + four_weapon, times)}%\n"
        f"当前您的五星保底为{five_pity}抽，四星保底为{four_pity}抽\n"
    )


def _pity_group(base: DropGroup, five_times: int, four_times: int) -> DropGroup:
    """A copy of the banner roll with weights moved towards five and four stars.

    Five-star weight is taken from three-star first, then from four-star;
    the four-star entry always comes last and gets what remains.
    """
    add_five = max((five_times - FIVE_STAR_LIMIT) * FIVE_STAR_LIMIT_INCREMENT, 0)
    add_four = (four_times - FOUR_STAR_LIMIT) * FOUR_STAR_LIMIT_INCREMENT
    add_four = min(max(add_four, 0), TOTAL_WISH_WEIGHT)
    remain = 0
    five_three_weight = 0
    configs: list[WishConfig] = []
    four_star = WishConfig()
    for entry in base.drop_configs:
        adjusted = WishConfig(
            drop_id=entry.drop_id, weight=0, result=entry.result, is_end=entry.is_end
        )
        if entry.result == FIVE_STAR_RESULT:
            adjusted.weight = entry.weight + add_five
            configs.append(adjusted)
            five_three_weight += adjusted.weight
        elif entry.result == THREE_STAR_RESULT:
            if entry.weight >= add_five:
                adjusted.weight = entry.weight - add_five
            else:
                remain = add_five - entry.weight
            adjusted.weight = adjusted.weight - add_four if adjusted.weight > add_four else 0
            configs.append(adjusted)
            five_three_weight += adjusted.weight
        else:
            four_star = adjusted
    four_star.weight = TOTAL_WISH_WEIGHT - five_three_weight - remain
    configs.append(four_star)
    return DropGroup(drop_id=base.drop_id, weight_all=base.weight_all, drop_configs=configs)


@dataclass
class ModWish:
    """The player's banners: simulated and real wishes on the event banner."""

    data: GameData
    up_wish_pool: WishPool = field(default_factory=WishPool)
    normal_wish_pool: WishPool = field(default_factory=WishPool)

    def _draw(
        self, base: DropGroup, five_times: int, four_times: int
    ) -> tuple[WishConfig | None, int, int]:
        five_times += 1
        four_times += 1
        group = base
        if five_times > FIVE_STAR_LIMIT or four_times > FOUR_STAR_LIMIT:
            group = _pity_group(base, five_times, four_times)
        config = self.data.random_drop(group)
        if config is not None:
            tables = self.data.items
            role = tables.role(config.result)
            if role is not None and role.star == 5:
                five_times = 0
            else:
                weapon = tables.weapon(config.result)
                if weapon is None or weapon.star == 4:
                    four_times = 0
        return config, five_times, four_times

    def _tally(self, result: dict[int, int]) -> tuple[int, int, int, int]:
        """Counts of five-star, four-star roles, four-star weapons and three-star."""
        tables = self.data.items
        five = four_role = four_weapon = three = 0
        for item_id, count in result.items():
            item = tables.item(item_id)
            if item is None:
                raise KeyError(f"item {item_id} does not exist")
            if item.sort_type == ItemType.ROLE:
                role = tables.role(item_id)
                if role is None:
                    raise KeyError(f"role {item_id} does not exist")
                if role.star == 4:
                    four_role += count
                else:
                    five += count
            else:
                weapon = tables.weapon(item_id)
                if weapon is None:
                    raise KeyError(f"weapon {item_id} does not exist")
                if weapon.star == 3:
                    three += count
                else:
                    four_weapon += count
        return five, four_role, four_weapon, three

    def do_pool_test(self, times: int) -> str:
        """Simulate wishes without granting anything; return the report."""
        base = self.data.drop_groups.get(UP_POOL_DROP_ID)
        if times > 0 and base is None:
            return ""
        pool = self.up_wish_pool
        result: dict[int, int] = {}
        for _ in range(times):
            config, pool.five_star_times_test, pool.four_star_times_test = self._draw(
                base, pool.five_star_times_test, pool.four_star_times_test
            )
            if config is not None:
                result[config.result] = result.get(config.result, 0) + 1
        five, four_role, four_weapon, _ = self._tally(result)
        report = "".join(
            f"抽中{self.data.items.item_name(item_id)}次数：{count}\n"
            for item_id, count in result.items()
        )
        report += (
            f"本次您一共进行了{times}次祈愿，共获得五星角色{five}位，"
            f"占总数的{_percent(five, times)}%,四星角色{four_role}位，"
            f"四星武器{four_weapon}把，四星综合概率为{_percent(four_role + four_weapon, times)}%\n"
        )
        print(report, end="")
        return report

    def do_pool(self, times: int, player: Any) -> None:
        """Make real wishes, granting each result through the player's bag."""
        base = self.data.drop_groups.get(UP_POOL_DROP_ID)
        pool = self.up_wish_pool
        bag = player.get_mod(BAG_MOD)
        result: dict[int, int] = {}
        for _ in range(times):
            if base is None:
                print("数据错误，请检查配置表")
                return
            config, pool.five_star_times, pool.four_star_times = self._draw(
                base, pool.five_star_times, pool.four_star_times
            )
            if config is not None:
                bag.add_item(config.result, 1)
                result[config.result] = result.get(config.result, 0) + 1
        five, four_role, four_weapon, _ = self._tally(result)
        pool.stat_total_wishes += times
        pool.stat_five_total += five
        pool.stat_four_role += four_role
        pool.stat_four_weapon += four_weapon
        print(
            format_wish_summary(
                times, five, four_role, four_weapon, pool.five_star_times, pool.four_star_times
            ),
            end="",
        )
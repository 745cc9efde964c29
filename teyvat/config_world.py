"""Wish, drop, map, level and task configuration tables."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from teyvat.csvutil import CSV_METADATA_KEY, load_list, load_map

DEFAULT_CSV_DIR = Path("csv")


def _col(name: str, default: Any = 0) -> Any:
    return field(default=default, metadata={CSV_METADATA_KEY: name})


@dataclass
class WishConfig:
    """One entry of a wish drop table; the drop id names the roll it belongs to."""

    drop_id: int = _col("DropId")
    weight: int = _col("Weight")
    result: int = _col("Result")
    is_end: int = _col("IsEnd")


@dataclass
class DropItemConfig:
    drop_id: int = _col("DropId")
    drop_type: int = _col("DropType")
    weight: int = _col("Weight")
    item_id: int = _col("ItemId")
    item_num_min: int = _col("ItemNumMin")
    item_num_max: int = _col("ItemNumMax")
    world_add: int = _col("WorldAdd")


@dataclass
class MapConfig:
    map_id: int = _col("MapId")
    map_name: str = _col("MapName", "")
    map_type: int = _col("MapType")


@dataclass
class MapEventConfig:
    event_id: int = _col("EventId")
    event_type: int = _col("EventType")
    name: str = _col("Name", "")
    refresh_type: int = _col("RefreshType")
    event_drop: int = _col("EventDrop")
    event_gain: int = _col("EventGain")
    event_drop_times: int = _col("EventDropTimes")
    event_gain_time: int = _col("EventGainTime")
    map_id: int = _col("MapId")
    cost_item: int = _col("CostItem")
    cost_num: int = _col("CostNum")


@dataclass
class PlayerLevelConfig:
    player_level: int = _col("PlayerLevel")
    player_exp: int = _col("PlayerExp")
    world_level: int = _col("WorldLevel")
    chapter_id: int = _col("ChapterId")


@dataclass
class UniqueTaskConfig:
    task_id: int = _col("TaskId")
    sort_type: int = _col("SortType")
    open_level: int = _col("OpenLevel")
    task_type: int = _col("TaskType")
    condition: int = _col("Condition")


@dataclass
class WorldTables:
    """Tables describing wishes, drops, maps, levels and unique tasks."""

    wishes: list[WishConfig] = field(default_factory=list)
    drop_items: list[DropItemConfig] = field(default_factory=list)
    maps: dict[int, MapConfig] = field(default_factory=dict)
    map_events: dict[int, MapEventConfig] = field(default_factory=dict)
    levels: list[PlayerLevelConfig] = field(default_factory=list)
    unique_tasks: dict[int, UniqueTaskConfig] = field(default_factory=dict)

    @classmethod
    def load(cls, directory: str | Path = DEFAULT_CSV_DIR) -> "WorldTables":
        """Load every table from the CSV files in the directory."""
        base = Path(directory)
        return cls(
            wishes=load_list(base / "WishDrop.csv", WishConfig),
            drop_items=load_list(base / "DropItem.csv", DropItemConfig),
            maps=load_map(base / "Map.csv", MapConfig),
            map_events=load_map(base / "MapEvent.csv", MapEventConfig),
            levels=load_list(base / "PlayerLevel.csv", PlayerLevelConfig),
            unique_tasks=load_map(base / "UniqueTask.csv", UniqueTaskConfig),
        )

    def map_name(self, map_id: int) -> str:
        """The map's name, or an empty string for an unknown map."""
        config = self.maps.get(map_id)
        return config.map_name if config is not None else ""

    def event_name(self, event_id: int) -> str:
        """The event's name, or an empty string for an unknown event."""
        config = self.map_events.get(event_id)
        return config.name if config is not None else ""

    def event(self, event_id: int) -> MapEventConfig | None:
        return self.map_events.get(event_id)

    def level(self, level: int) -> PlayerLevelConfig | None:
        """The configuration of a player level, counted from 1."""
        if level <= 0 or level > len(self.levels):
            return None
        return self.levels[level - 1]
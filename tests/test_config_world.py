from pathlib import Path

import pytest

from teyvat.config_world import (
    DropItemConfig,
    MapConfig,
    MapEventConfig,
    PlayerLevelConfig,
    WishConfig,
    WorldTables,
)
from teyvat.csvutil import CsvLoadError

TABLES = {
    "WishDrop.csv": "DropId,Weight,Result,IsEnd\n1000,9000,10003,0\n1000,1000,10001,0\n",
    "DropItem.csv": "DropId,DropType,Weight,ItemId,ItemNumMin,ItemNumMax,WorldAdd\n"
    "50,1,10000,1000005,1,3,0\n",
    "Map.csv": "MapId,MapName,MapType\n1,Mondstadt,1\n1001,Ruins,2\n",
    "MapEvent.csv": "EventId,EventType,Name,RefreshType,EventDrop,EventGain,"
    "EventDropTimes,EventGainTime,MapId,CostItem,CostNum\n"
    "10101,1,Chest,0,50,0,1,0,1,0,0\n",
    "PlayerLevel.csv": "PlayerLevel,PlayerExp,WorldLevel,ChapterId\n1,375,0,0\n2,500,0,10001\n",
    "UniqueTask.csv": "TaskId,SortType,OpenLevel,TaskType,Condition\n10001,1,1,1,0\n",
}


@pytest.fixture
def csv_dir(tmp_path: Path) -> Path:
    for name, text in TABLES.items():
        (tmp_path / name).write_text(text, encoding="utf-8")
    return tmp_path


def test_load_reads_lists_in_order(csv_dir):
    tables = WorldTables.load(csv_dir)
    assert tables.wishes == [
        WishConfig(drop_id=1000, weight=9000, result=10003, is_end=0),
        WishConfig(drop_id=1000, weight=1000, result=10001, is_end=0),
    ]
    assert tables.drop_items == [
        DropItemConfig(
            drop_id=50, drop_type=1, weight=10000, item_id=1000005,
            item_num_min=1, item_num_max=3, world_add=0,
        )
    ]


def test_load_keys_maps_by_first_column(csv_dir):
    tables = WorldTables.load(csv_dir)
    assert tables.maps[1001] == MapConfig(map_id=1001, map_name="Ruins", map_type=2)
    assert set(tables.unique_tasks) == {10001}
    event = tables.event(10101)
    assert isinstance(event, MapEventConfig)
    assert event.name == "Chest"
    assert event.event_drop == 50


def test_names_and_unknown_ids(csv_dir):
    tables = WorldTables.load(csv_dir)
    assert tables.map_name(1) == "Mondstadt"
    assert tables.map_name(999) == ""
    assert tables.event_name(10101) == "Chest"
    assert tables.event_name(1) == ""
    assert tables.event(1) is None


def test_level_bounds():
    levels = [PlayerLevelConfig(player_level=1, player_exp=375), PlayerLevelConfig(player_level=2)]
    tables = WorldTables(levels=levels)
    assert tables.level(1) is levels[0]
    assert tables.level(2) is levels[1]
    assert tables.level(0) is None
    assert tables.level(3) is None
    assert tables.level(-1) is None


def test_missing_table_raises(csv_dir):
    (csv_dir / "Map.csv").unlink()
    with pytest.raises(CsvLoadError):
        WorldTables.load(csv_dir)


def test_header_only_table_raises(csv_dir):
    (csv_dir / "UniqueTask.csv").write_text("TaskId,SortType\n", encoding="utf-8")
    with pytest.raises(CsvLoadError):
        WorldTables.load(csv_dir)
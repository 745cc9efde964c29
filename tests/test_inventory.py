import pytest

from teyvat.config_items import (
    CardConfig,
    CookConfig,
    ItemConfig,
    ItemTables,
    RelicConfig,
    WeaponConfig,
)
from teyvat.constants import MAX_RELIC_SIZE, MAX_WEAPON_SIZE
from teyvat.inventory import (
    ModCard,
    ModCook,
    ModHome,
    ModRelic,
    ModUniqueTask,
    ModWeapon,
    TaskInfo,
    TaskState,
)


@pytest.fixture
def tables():
    return ItemTables(
        items={
            4001: ItemConfig(item_id=4001, sort_type=4, item_name="Card A"),
            9001: ItemConfig(item_id=9001, sort_type=9, item_name="Soup"),
            11001: ItemConfig(item_id=11001, sort_type=11, item_name="Chair"),
            7001: ItemConfig(item_id=7001, sort_type=7, item_name="Feather"),
            6001: ItemConfig(item_id=6001, sort_type=6, item_name="Sword"),
        },
        cards={4001: CardConfig(card_id=4001, friendliness=5, check=2001)},
        cooks={9001: CookConfig(cook_id=9001)},
        relics={7001: RelicConfig(relics_id=7001, star=5)},
        weapons={6001: WeaponConfig(weapon_id=6001, star=4)},
    )


def test_card_added_once(tables, capsys):
    mod = ModCard(tables)
    mod.add_item(4001, 10)
    assert mod.has_card(4001)
    mod.add_item(4001, 10)
    assert mod.cards == {4001}
    assert "已存在名片" in capsys.readouterr().out


def test_card_rejects_unknown_and_low_friendliness(tables):
    mod = ModCard(tables)
    mod.add_item(4999, 10)
    mod.add_item(4001, 4)
    assert mod.cards == set()


def test_card_by_role(tables):
    mod = ModCard(tables)
    mod.check_get_card(1, 10)
    assert not mod.has_card(4001)
    mod.check_get_card(2001, 10)
    assert mod.has_card(4001)


def test_cook_learns_known_skill_only(tables, capsys):
    mod = ModCook(tables)
    mod.add_item(9002)
    mod.add_item(9001)
    mod.add_item(9001)
    assert mod.cooks == {9001}
    out = capsys.readouterr().out
    assert "学会烹饪： Soup" in out
    assert "已习得： Soup" in out


def test_home_item_accumulates(tables):
    mod = ModHome(tables)
    mod.add_item(11001, 2)
    mod.add_item(11001, 3)
    assert mod.home_item_info[11001].item_num == 2 + 3
    assert mod.used_home_item_info == {}


def test_unique_task_finish():
    mod = ModUniqueTask()
    assert mod.is_task_finish(10001)
    assert mod.is_task_finish(10002)
    assert not mod.is_task_finish(10003)
    mod.my_task_info[10003] = TaskInfo(task_id=10003, state=TaskState.DOING)
    assert not mod.is_task_finish(10003)
    mod.my_task_info[10003].state = TaskState.FINISH
    assert mod.is_task_finish(10003)


def test_relic_keys_increase_and_remove(tables):
    mod = ModRelic(tables)
    mod.add_item(7001, 3)
    assert sorted(mod.relic_info) == [1, 2, 3]
    mod.remove_item(2)
    mod.add_item(7001, 1)
    assert sorted(mod.relic_info) == [1, 3, 4]
    assert all(r.relic_id == 7001 for r in mod.relic_info.values())


def test_relic_rejects_unknown_and_overflow(tables, capsys):
    mod = ModRelic(tables)
    mod.add_item(7999, 1)
    mod.add_item(7001, MAX_RELIC_SIZE + 1)
    assert mod.relic_info == {}
    assert mod.max_key == 0
    mod.remove_item(1)
    assert "当前编号圣遗物不存在" in capsys.readouterr().out


def test_weapon_keys_and_overflow(tables):
    mod = ModWeapon(tables)
    mod.add_item(6001, MAX_WEAPON_SIZE + 1)
    assert mod.weapon_info == {}
    mod.add_item(6001, 2)
    assert [w.key_id for w in mod.weapon_info.values()] == [1, 2]
    mod.remove_item(1)
    assert list(mod.weapon_info) == [2]
    mod.add_item(6999, 1)
    assert list(mod.weapon_info) == [2]
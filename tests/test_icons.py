import pytest

from teyvat.config_items import IconConfig, ItemConfig, ItemTables
from teyvat.icons import ModIcon


@pytest.fixture
def tables():
    return ItemTables(
        items={101: ItemConfig(item_id=101, sort_type=3, item_name="Face")},
        icons={
            101: IconConfig(icon_id=101, check=2001),
            102: IconConfig(icon_id=102, check=0),
        },
    )


def test_add_item_once(tables, capsys):
    mod = ModIcon(tables)
    mod.add_item(101)
    mod.add_item(101)
    assert mod.icons == {101}
    out = capsys.readouterr().out
    assert "获得头像： Face" in out
    assert "已存在头像： 101" in out


def test_unknown_icon_rejected(tables):
    mod = ModIcon(tables)
    mod.add_item(999)
    assert not mod.has_icon(999)


def test_icon_by_role(tables):
    mod = ModIcon(tables)
    mod.check_get_icon(1)
    assert mod.icons == set()
    mod.check_get_icon(2001)
    assert mod.has_icon(101)


def test_json_format(tables):
    mod = ModIcon(tables, icons={101})
    assert mod.to_json() == '{"IconInfo":{"101":{"IconId":101}}}'


def test_json_round_trip(tables):
    mod = ModIcon(tables, icons={101, 102})
    restored = ModIcon(tables)
    restored.load_json(mod.to_json())
    assert restored.icons == {101, 102}


def test_load_null_info_keeps_nothing(tables):
    mod = ModIcon(tables)
    mod.load_json('{"IconInfo":null}')
    assert mod.icons == set()


def test_load_malformed_raises(tables):
    mod = ModIcon(tables)
    with pytest.raises(ValueError):
        mod.load_json("not json")
    with pytest.raises(ValueError):
        mod.load_json("[1, 2]")
from datetime import datetime, timedelta

import pytest

from teyvat.banwords import BanWordManager
from teyvat.capture import capture_output
from teyvat.config_items import CardConfig, IconConfig, ItemConfig, ItemTables
from teyvat.config_world import PlayerLevelConfig, WorldTables
from teyvat.constants import ItemType
from teyvat.icons import ICON_MOD, ModIcon
from teyvat.inventory import ModCard, ModUniqueTask, TaskInfo, TaskState
from teyvat.profile import DEFAULT_NAME, ModPlayer, ShowRole
from teyvat.roles import ModRole, RoleInfo


class Clock:
    def __init__(self, when):
        self.when = when

    def __call__(self):
        return self.when


class Owner:
    def __init__(self, tables):
        self.icon = ModIcon(tables)
        self.mod_card = ModCard(tables)
        self.mod_role = ModRole(tables, owner=self)
        self.mod_unique_task = ModUniqueTask()

    def get_mod(self, name):
        return {ICON_MOD: self.icon}[name]


@pytest.fixture
def clock():
    return Clock(datetime(2022, 5, 6, 12, 0, 0))


@pytest.fixture
def profile(clock):
    tables = ItemTables(
        items={3001: ItemConfig(3001, ItemType.ICON, "icon"), 4001: ItemConfig(4001, ItemType.CARD, "card")},
        cards={4001: CardConfig(4001, 0, 1001), 4002: CardConfig(4002, 0, 1002)},
        icons={3001: IconConfig(3001, 1001)},
    )
    world = WorldTables(
        levels=[
            PlayerLevelConfig(1, 100, 1, 0),
            PlayerLevelConfig(2, 200, 1, 5),
            PlayerLevelConfig(3, 0, 1, 0),
        ]
    )
    return ModPlayer(tables, world, owner=Owner(tables), ban_words=BanWordManager(), clock=clock)


def test_defaults(profile):
    assert profile.name == DEFAULT_NAME
    assert (profile.player_level, profile.world_level, profile.world_level_now) == (1, 1, 1)


def test_set_name_and_sign(profile):
    profile.set_name("Aether")
    profile.set_sign("hello")
    assert profile.name == "Aether"
    assert profile.sign == "hello"


def test_banned_name_is_rejected(profile):
    out = capture_output(lambda: profile.set_name("我用外挂"))
    assert "发现违禁词" in out
    assert profile.name == DEFAULT_NAME
    profile.set_sign("原神")
    assert profile.sign == ""


def test_set_icon_requires_ownership(profile):
    profile.set_icon(3001)
    assert profile.icon == 0
    profile.owner.icon.add_item(3001)
    profile.set_icon(3001)
    assert profile.icon == 3001


def test_set_card_requires_ownership(profile):
    profile.set_card(4001)
    assert profile.card == 0
    profile.owner.mod_card.add_item(4001, 0)
    profile.set_card(4001)
    assert profile.card == 4001


def test_add_exp_levels_up_until_chapter_blocks(profile):
    profile.add_exp(150)
    assert (profile.player_level, profile.player_exp) == (2, 50)
    profile.owner.mod_unique_task.my_task_info[5] = TaskInfo(5, TaskState.FINISH)
    profile.add_exp(150)
    assert (profile.player_level, profile.player_exp) == (3, 0)


def test_reduce_world_level_needs_start_level(profile):
    profile.reduce_world_level()
    assert profile.world_level_now == 1


def test_reduce_and_return_world_level_with_cooldown(profile, clock):
    profile.world_level = profile.world_level_now = 5
    profile.reduce_world_level()
    assert profile.world_level_now == 4
    assert profile.world_level_cool == int(clock.when.timestamp()) + 10
    profile.reduce_world_level()
    assert profile.world_level_now == 4
    profile.return_world_level()
    assert profile.world_level_now == 4
    clock.when += timedelta(seconds=11)
    profile.return_world_level()
    assert profile.world_level_now == 5
    profile.return_world_level()
    assert profile.world_level_now == 5


@pytest.mark.parametrize("birth", [1301, 230, 431, 100, 0])
def test_invalid_birthdays_are_rejected(profile, birth):
    profile.set_birth(birth)
    assert profile.birth == 0


def test_birthday_set_once(profile):
    profile.set_birth(1231)
    profile.set_birth(101)
    assert profile.birth == 1231
    assert not profile.is_birthday()


def test_birthday_today(profile):
    out = capture_output(lambda: profile.set_birth(506))
    assert profile.is_birthday()
    assert "生日快乐" in out


def test_show_team_dedupes_and_skips_unowned(profile):
    profile.owner.mod_role.role_info[1001] = RoleInfo(1001, level=3)
    profile.set_show_team([1001, 1002, 1001])
    assert profile.show_team == [ShowRole(role_id=1001, role_level=3)]


def test_show_team_too_long_is_rejected(profile):
    profile.owner.mod_role.role_info[1001] = RoleInfo(1001)
    out = capture_output(lambda: profile.set_show_team([1001] * 10))
    assert "消息结构错误" in out
    assert profile.show_team == []


def test_show_card_keeps_owned_in_order(profile):
    profile.owner.mod_card.add_item(4001, 0)
    profile.owner.mod_card.add_item(4002, 0)
    profile.set_show_card([4002, 9999, 4001, 4002])
    assert profile.show_card == [4002, 4001]


def test_hide_show_team_accepts_only_flags(profile):
    profile.set_hide_show_team(1)
    profile.set_hide_show_team(7)
    assert profile.hide_show_team == 1


def test_prohibit_blocks_entry(profile, clock):
    assert profile.is_can_enter()
    profile.set_prohibit(int(clock.when.timestamp()) + 60)
    assert not profile.is_can_enter()
    profile.set_is_gm(1)
    assert profile.is_gm == 1
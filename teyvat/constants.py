"""Game constants and the menu texts sent to clients."""

from enum import IntEnum

LOGIC_FALSE = 0
LOGIC_TRUE = 1

# Player profile
REDUCE_WORLD_LEVEL_START = 5
REDUCE_WORLD_LEVEL_MAX = 1
REDUCE_WORLD_LEVEL_COOL_TIME = 10
SHOW_SIZE = 9
ADD_ROLE_TIME_NORMAL_MIN = 2
ADD_ROLE_TIME_NORMAL_MAX = 7
MAX_WEAPON_SIZE = 2000
MAX_RELIC_SIZE = 1500
NORMAL_BAG_ID = 1
WEAPON_BAG_ID = 3
RELIC_BAG_ID = 2

# Wishes
FIVE_STAR_LIMIT = 73
FIVE_STAR_LIMIT_INCREMENT = 600
FOUR_STAR_LIMIT = 8
FOUR_STAR_LIMIT_INCREMENT = 5500
TOTAL_WISH_WEIGHT = 10000

# Map events
EVENT_START = 0
EVENT_FINISH = 9
EVENT_END = 10

MAP_REFRESH_CANT = 0
MAP_REFRESH_TWO_DAY = 1
MAP_REFRESH_THREE_DAY = 2
MAP_REFRESH_WEEK = 3
MAP_REFRESH_SELF = 4
MAP_REFRESH_HALF_DAY = 5

REFRESH_SYSTEM = 1
REFRESH_PLAYER = 2

EVENT_TYPE_NORMAL = 1
EVENT_TYPE_REWARD = 2

# Item drops
DROP_WEIGHT_ALL = 10000
DROP_ONE_ITEM = 1
DROP_GROUP_ITEMS = 2
DROP_WEIGHTED_ITEMS = 3


class ItemType(IntEnum):
    """Sort types of the item table."""

    NORMAL = 1
    ROLE = 2
    ICON = 3
    CARD = 4
    WEAPON = 6
    RELIC = 7
    COOKBOOK = 8
    COOK = 9
    FOOD = 10
    FURN = 11


MAIN_LOGIC_STR = (
    ",欢迎来到提瓦特大陆,请选择功能：1.基础信息 2.背包 3.up池抽卡模拟 "
    "4.up池抽卡（消耗相遇之缘） 5.地图 6.私人聊天 7.世界聊天(V1.1) 999.退出客户端"
)
BASIC_LOGIC_STR = "当前处于基础信息界面,请选择操作：0返回1查询信息2设置名字3设置签名4头像5名片6设置生日"
BAG_LOGIC_STR = "当前处于背包界面,请选择操作：0返回1增加物品2扣除物品3使用物品"
WISH_LOGIC_STR = "您现在在抽卡界面 按0返回 按1祈愿1次 按2祈愿10次 按3查询抽卡信息"
WORLD_CHAT_STR = "您可以和在线的玩家进行交流了！退出世界聊天请输入 exit; 请在下方输入聊天内容：  "
P2P_CHAT_STR = "您可以给离线或者在线的玩家发送信息了！请输入玩家UID"
WISH_HINT = "提示：如果祈愿之缘数量不足，请通过背包功能增加祈愿之缘，物品id为1000005"
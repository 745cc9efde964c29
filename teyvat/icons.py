"""The avatar icons a player owns."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from teyvat.config_items import ItemTables

ICON_MOD = "icon"


@dataclass
class ModIcon:
    """Owned icons, storable as JSON."""

    tables: ItemTables
    icons: set[int] = field(default_factory=set)

    def has_icon(self, icon_id: int) -> bool:
        return icon_id in self.icons

    def add_item(self, item_id: int) -> None:
        if item_id in self.icons:
            print("已存在头像：", item_id)
            return
        if self.tables.icon(item_id) is None:
            print("非法头像：", item_id)
            return
        self.icons.add(item_id)
        print("获得头像：", self.tables.item_name(item_id))

    def check_get_icon(self, role_id: int) -> None:
        """Grant the icon tied to a role, if there is one."""
        config = self.tables.icon_by_role(role_id)
        if config is None:
            return
        self.add_item(config.icon_id)

    def to_json(self) -> str:
        """Serialise the owned icons."""
        info = {str(icon_id): {"IconId": icon_id} for icon_id in sorted(self.icons)}
        return json.dumps({"IconInfo": info}, separators=(",", ":"))

    def load_json(self, text: str) -> None:
        """Add the icons stored in JSON; raises ValueError on malformed data."""
        raw = json.loads(text)
        if not isinstance(raw, dict):
            raise ValueError("icon data must be a JSON object")
        info = raw.get("IconInfo") or {}
        if not isinstance(info, dict):
            raise ValueError("IconInfo must be a JSON object")
        for key in info:
            self.icons.add(int(key))
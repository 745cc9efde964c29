# teyvat

`teyvat` is a library of building blocks for a small role-playing game
server. It uses only the standard library and has three layers:

* **Networking** – a length-prefixed TCP message format
  (`teyvat.message`), routing of requests by message id
  (`teyvat.routing`), per-client connections with properties
  (`teyvat.connection`), a registry of live connections
  (`teyvat.connmanager`) and the listening server (`teyvat.server`).
  Settings come from `teyvat.settings`.
* **Game tables** – typed records loaded from CSV files
  (`teyvat.csvutil`, `teyvat.config_items`, `teyvat.config_world`) and
  the weighted drop groups built from them (`teyvat.drops`).
* **Player modules** – bag, characters, weapons, relics, name cards,
  icons, cooking, furniture, tasks, profile and wishes
  (`teyvat.bag`, `teyvat.roles`, `teyvat.inventory`, `teyvat.icons`,
  `teyvat.profile`, `teyvat.wish`), gathered in `teyvat.player.Player`,
  and the registry of online players (`teyvat.world.WorldManager`).

## The wire format

Every message is an 8-byte little-endian header – data length, then
message id, both unsigned 32-bit – followed by the data.

```python
from teyvat.message import DataPack, new_msg_package

pack = DataPack()
frame = pack.pack(new_msg_package(1, b"zinx"))
# b"\x04\x00\x00\x00\x01\x00\x00\x00zinx"

head = pack.unpack(frame[:8])   # Message(msg_id=1, data_len=4, data=b"")
```

`DataPack(max_package_size=4096)` limits the announced body length;
`unpack` raises `MessageTooLarge` above it (a limit of 0 turns the check
off) and `ValueError` for a head shorter than 8 bytes.

Game messages carry JSON. `teyvat.msgjson.encode_json_msg(msg_id, data)`
returns a complete frame for any JSON-serialisable value (objects with a
`to_dict()` method, such as `SyncUID`, and dataclasses included), and
`send_json_msg(msg_id, data, sock)` writes it to a socket.

## Routing and the server

A router either subclasses `BaseRouter` and overrides any of
`pre_handle`, `handle` and `post_handle`, or is built from plain
callables:

```python
from teyvat.routing import BaseRouter
from teyvat.server import Server

def ping(request):
    request.connection.send_msg(200, b"ping...ping...ping")

server = Server()
server.add_router(0, BaseRouter(ping))
server.set_on_conn_start(lambda conn: conn.set_property("Name", "guest"))
server.serve()
```

`MsgHandler` runs the routers on a thread pool; registering the same id
twice raises `DuplicateRouterError`.

`Server.serve()` binds to the host and port of its settings, accepts
clients in the background and blocks until SIGINT or
`request_shutdown()`; it then waits `shutdown_delay` seconds (3 by
default) and calls `stop()`, which closes every connection. Clients
beyond `max_conn` are closed at once. The stop hook runs before a
connection is removed from the server's `ConnManager`.

Each `Connection` has `send_msg(msg_id, data)`, which raises
`ConnectionClosed` once the connection is stopped, and properties set
with `set_property`, read with `get_property` (a `KeyError` when absent)
and dropped with `remove_property`.

## Settings

`ServerSettings` holds the defaults: host `""`, port 8999, 1000
connections, packages up to 4096 bytes and 10 worker threads.
`load_settings(path)` (default `json/zinx.json`) overrides them from a
JSON object whose keys match the names case-insensitively (`TcpPort`,
`MaxConn`, `WorkerPoolSize`, …); a worker pool larger than
`max_worker_pool_size` is cut down to it. A `Server` uses the defaults
unless it is given `settings=`.

## Player and user ids

```python
from teyvat.ids import pid_to_uid, uid_to_pid

pid_to_uid(1)          # 100000001
uid_to_pid(100000001)  # 1
```

## Banned words

```python
from teyvat.banwords import get_ban_word_manager

manager = get_ban_word_manager()
manager.is_ban_word("外挂")   # True
```

Each word is matched as a regular expression anywhere in the text. The
extra list is present from the start; the configured base list is
loaded when `run()` starts, and `run()` blocks until `close()`.
`ModPlayer.set_name` and `set_sign` refuse banned text.

## Game data

`GameData.load(directory)` (default `csv`) reads these tables and builds
the wish and item drop groups:

* `Item.csv`, `Role.csv`, `Weapon.csv`, `Card.csv`, `Icon.csv`,
  `Cook.csv`, `CookBook.csv`, `Home.csv`, `Relics.csv` (`ItemTables`)
* `WishDrop.csv`, `DropItem.csv`, `Map.csv`, `MapEvent.csv`,
  `PlayerLevel.csv`, `UniqueTask.csv` (`WorldTables`)

The first row of each file names the columns; a file that cannot be
read or has no data rows raises `CsvLoadError`. Lookups return `None`
for unknown ids, and `ItemTables.item_name` an empty string.
`GameData.random_drop` and `GameData.item_drop` roll with the data's
`rng`, which can be a seeded `random.Random`.

## Players

```python
from teyvat.drops import GameData
from teyvat.player import Player

data = GameData.load("csv")
player = Player(data)
player.add_bag_item(1000005, 10)
player.mod_wish.do_pool(10, player)   # consumes nothing; grants the results
print(player.wish_helper())
print(player.base_info())
```

Adding an item through the bag hands characters, icons, name cards,
weapons, relics, cooking skills and furniture to their own modules;
`ModBag.remove_item` raises `BagError` when items are missing or cannot
be removed. `ModWish.do_pool_test(times)` simulates wishes with their
own pity counters and returns the report. Many operations print their
outcome; `teyvat.capture.capture_output(func)` returns what a callable
printed.

`Player.send_string_msg` and `sync_uid` send JSON to the player's
connection. `WorldManager.add_player` registers a player under its
connection's `PID` property and disconnects a player already online
under it.

## What it does not do

* Nothing is stored between runs: players live in memory only.
  `ModBag` and `ModIcon` offer `to_json()` and `load_json()`, but
  reading and writing them is left to the caller.
* There is no chat, no map exploration and no client.
* The server has no game routes of its own and the package installs no
  command; an application registers its routers and calls
  `Server.serve()`.

## Tests

The tests use pytest, installed with the `test` extra:

```
pip install -e .[test]
pytest
```
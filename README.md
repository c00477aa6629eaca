# rkit

A small library of building blocks for device and kiosk applications.

## Modules

- `rkit.database`: `Database` opens an SQLite file (the default) or a MySQL
  server (`DbType.MYSQL`, through `pymysql`) and creates a `Settings`
  key/value table on open. It offers `execute`, `get_table`, `insert`,
  `insert_key_pair`, `update_key_pair` and `get_key_pair`. `get_key_pair`
  returns an empty string for a missing key. Failures raise `DatabaseError`.
  `Database` works as a context manager and closes the connection on exit.
- `rkit.codec`: `encode` and `decode` for a `Message` with the fields
  `action`, `kind`, `items` and `rows`. In the text form, `::` separates
  sections, `;;` separates items and rows, and `,,` separates the cells of a row.
- `rkit.utility`: INI helpers `create_config` and `load_config`, plus
  `read_file`, `write_file`, `check_login` and `TranslatorSelector`, which
  tracks the active file in a list of translation files. `check_login` has a
  fixed expiry date that has already passed. It raises `PermissionError`
  unless you pass an earlier `today`.
- `rkit.tcp`: `TcpClient.request` connects, sends a payload and collects the
  reply until the peer stays silent for the timeout. It raises `ConnectError`
  if it cannot connect, and `EmptyReplyError` if the reply is not longer than
  the payload. `TcpServer` listens on a port and keeps only the newest client.
  It passes received data to an `on_read` callback and can `reply` to that
  client.
- `rkit.ipc`: the same pair over Unix domain sockets, `LocalClient` and
  `LocalServer`. Bare names are placed in the temporary directory. The server
  answers every read with `b"RERE"` and removes its socket file on `stop`.
- `rkit.wifi`: `WpaCli` drives `wpa_cli`, `udhcpc`, `ip` and the driver
  reload commands for one interface (default `wlan0`). It can list, scan,
  add (WEP, WPA, WPA2 personal and enterprise), connect, remove and
  disconnect networks, and it can report status. The `runner` argument
  replaces the shell, which is useful for testing.
- `rkit.paging`: `PageWheel` lays out a grid of items across pages.
  `ScrollView` adds press/move/release dragging with snapping to pages and
  click-to-index. `number_selector` builds a one-digit picker.
- `rkit.block`: `BlockLayer`, an input-blocking overlay state with an
  optional timeout advanced by `tick`, and `FrameCycler` for looping
  animation frames.
- `rkit.keyboard`: `LineBuffer` (text with a cursor) and two keyboard
  models, `Keyboard` (letters plus two symbol pages) and `SimpleKeyboard`
  (appends to the end of its text).

## Install

    pip install .

For the tests:

    pip install ".[test]"
    pytest

## Example

```python
from rkit.codec import Message, encode, decode
from rkit.database import Database

message = Message(action="get", kind="user", items=["a", "b"], rows=[["1", "2"]])
assert decode(encode(message)) == message

with Database() as db:
    db.open(":memory:")
    db.insert_key_pair("volume", "7")
    print(db.get_key_pair("volume"))  # 7
```

## What it does not do

The UI modules hold state and geometry only. They draw nothing, and no
widgets, windows or screens are included. The package has no command-line
program. The TCP and local servers only pass received bytes to your callback
and do not interpret them. `rkit.ipc` needs a platform with Unix domain
sockets.
# dirbrowse

A small client and server for browsing a directory tree over TCP.

The server scans a root directory and sends the client a list of its
entries. Hidden names (those starting with a dot) are left out. Each
entry is labelled by its name alone: a name that contains a dot is
shown as `[FILE]name`, and any other name as `[DIR]name`. The client
picks an entry by its position in the list, counting from 0. The server
tries to move into that entry and sends the new listing. If the number
is out of range or the entry cannot be opened as a directory, the server
stays where it is and sends the current listing again.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Running

Start the server:

```
dirbrowse-server [--root DIR] [--host ADDR] [--port PORT] [--password TEXT]
```

- `--root` is the directory to serve. It defaults to your home directory.
- `--host` is the address to bind. By default the server binds all IPv4
  addresses.
- `--port` defaults to 8001.
- `--password` defaults to `password`.

On startup the server prints the listing of the root. It then logs its
progress to standard error and serves one client at a time.

Start the client in another terminal:

```
dirbrowse-client [--host ADDR] [--port PORT]
```

It connects to `127.0.0.1:8001` by default and prompts `enter something:`.
Type the password there. A line that contains `LEAVE` closes the
connection instead. If the server accepts the password, it sends the
listing and the client prints it. From then on, each line you type is
read as an entry number. Its leading integer is used, 0 if there is
none, reduced to one byte. The client prints the listing that comes
back. End the input (Ctrl-D) to quit.

If the password is wrong, the server closes the connection. The client
then reports that the server refused.

## Using it from Python

`dirbrowse.listing` handles the directory side:

- `scan_directory(path)` returns the labels of a directory's visible
  entries, in the order the directory yields them.
- `label_for(name)` labels a name. `name_from_label(label)` strips the
  label and raises `ValueError` for text that is not a label.
- `DirectoryBrowser(root)` holds `path` and `entries`. `refresh()` rescans
  `path`. `descend(index)` moves into an entry and raises `IndexError`
  or `OSError` without changing state. `format()` renders the listing
  one entry per line.

`dirbrowse.protocol` holds the wire format:

- `send_list` and `receive_list` exchange a listing.
- `send_choice` and `receive_choice` exchange a picked number.
- `has_handshake` and `check_password` inspect a message.
- `drain` discards whatever is already waiting on a socket.

Protocol failures raise `ProtocolError`.

`dirbrowse.server` provides `create_server_socket(host, port)` and
`DirectoryServer(root, password, host, port)`. The server has
`handle_client(conn)` for one session and `serve_forever()`.

`dirbrowse.client` provides `connect(host, port)` and
`DirectoryClient(sock)`. The client has `authenticate(text)`,
`receive_listing()`, `pick(number)` and `close()`. It also works as a
context manager.

## Protocol

- **Login.** A 113-byte message that starts with the marker
  `handshakeddd`, followed by a space and the typed text, padded with
  zero bytes.
- **Listing.** One byte giving the number of entries, at most 255. Then
  each entry as one byte giving its length and then its UTF-8 bytes.
- **Choice.** The marker followed by a zero byte, then one byte holding
  the entry number.

The receiver answers every step of a listing or a choice with a single
byte: `1` to accept, `0` to refuse.

## What it does not do

- It only shows names. There is no way to download or read files.
- There is no way to move back up to a parent directory.
- The `[DIR]`/`[FILE]` label comes from the name alone, not from the
  entry's real type.
- The password travels in plain text, and the connection is not
  encrypted.
- The server handles one client at a time.
# fenrisclient

The client half of a small remote file service. It turns what a user types
at a prompt into requests for the server, and turns the server's answers
into lines ready to print in a terminal.

## Modules

- `fenrisclient.messages` — the data exchanged with the server:
  `RequestType` and `ResponseType` enums, and the `Request`, `FileInfo`,
  `DirectoryListing` and `Response` dataclasses. `Response.has_file_info()`
  and `Response.has_directory_listing()` report whether those optional
  parts are present.
- `fenrisclient.request_manager` — `RequestManager.generate_request(args)`
  builds a `Request` from a split command line. It knows `ping`, `create`,
  `cat`, `write`, `append`, `rm`, `info`, `mkdir`, `ls`, `cd`, `rmdir` and
  `terminate`. `ls` without an argument lists `.`. For `create`, `write`
  and `append`, the words after the file name are joined with spaces as the
  content, or `-f <path>` reads the content from a local file (a file that
  cannot be opened is logged and the content left empty). Unknown commands
  and missing arguments raise `RequestError`, a `ValueError`.
- `fenrisclient.response_manager` — `ResponseManager.handle_response(response)`
  returns a list of display lines. The first line is the status
  (`Success` or `Error`); the rest depend on the response type: pong, file
  info, file content (split into lines, or summarised as binary data),
  directory listing (a table with name, size, modified time and type),
  success, error and terminated. It also offers `format_file_size`
  (B/KB/MB/GB/TB with two decimals), `format_timestamp` (local time as
  `YYYY-MM-DD HH:MM:SS`, or `Invalid timestamp`) and `format_permissions`
  (`rwxr-xr-x (755)` style).
- `fenrisclient.interface` — `TUI`, the interactive prompt. It reads lines
  through an input function (default `input`) and writes to a text stream
  (default standard output), both passable to the constructor.
  `get_server_ip` accepts an IPv4 address or host name and falls back to
  `127.0.0.1`; `get_port_number` accepts 1–65535 and falls back to `7777`.
  `get_command` shows a `fenris:<dir>>` prompt, validates the command with
  `validate_command`, shows help itself for `help`, and returns `["exit"]`
  at end of input. `display_result`, `update_current_directory`,
  `get_current_directory` and `display_help` complete it.
- `fenrisclient.client` — `Client` ties it together. `run` connects when
  needed, reads commands from its TUI and passes them to its connection
  manager until the user types `exit`, then disconnects. Failed connection
  attempts are retried after `retry_delay` seconds (2 by default).
  Components are plugged in with `set_tui` and `set_connection_manager`,
  or a `connection_factory` given to the constructor; `process_command`
  handles a single command and `is_exit_requested` reports whether the loop
  has been asked to stop.
- `fenrisclient.colors` — ANSI colour codes and helpers (`success`,
  `error`, `info`, `warning`), switched for the whole process with
  `enable_colors` and `disable_colors`; `colors_enabled` reports the state.

## Commands accepted at the prompt

| Command  | Arguments          | Meaning                    |
|----------|--------------------|----------------------------|
| `cd`     | `<directory>`      | change directory           |
| `ls`     | `[directory]`      | list a directory           |
| `cat`    | `<file>`           | show a file                |
| `write`  | `<file> <content>` | create or overwrite a file |
| `append` | `<file> <content>` | append to a file           |
| `rm`     | `<file>`           | remove a file              |
| `info`   | `<file>`           | show file details          |
| `mkdir`  | `<directory>`      | create a directory         |
| `rmdir`  | `<directory>`      | remove a directory         |
| `ping`   |                    | check the server responds  |
| `help`   |                    | list commands              |
| `exit`   |                    | leave the client           |

The prompt also accepts `upload <local_file>`, but no request is built for
it, so the client reports "Invalid command or arguments".

## Example

```python
from fenrisclient import colors
from fenrisclient.messages import Response, ResponseType
from fenrisclient.request_manager import RequestManager
from fenrisclient.response_manager import ResponseManager

colors.disable_colors()

request = RequestManager().generate_request(["write", "/notes.txt", "hello"])
print(request.command.name, request.filename, request.data)
# WRITE_FILE /notes.txt hello

response = Response(success=True, type=ResponseType.SUCCESS, data="File written")
print(ResponseManager().handle_response(response))
# ['Success', 'File written']
```

## What this package does not do

- It has no network layer. `Client` talks to the server only through a
  connection manager object you supply, offering `is_connected`,
  `has_connection_info`, `set_connection_info`, `get_server_info`
  (returning an object with `address` and `port`), `connect`,
  `reset_connection_info`, `disconnect`, `send_request` (taking a
  `Request`, returning a bool) and `receive_response` (returning a
  `Response` or `None`). Sockets, key exchange, encryption and the wire
  encoding of messages are not part of it.
- It has no server.
- It installs no command; start the client from Python by building a
  `Client`, giving it a connection manager and calling `run()`.

The package has no third-party runtime dependencies; the `test` extra pulls
in pytest for the test suite.
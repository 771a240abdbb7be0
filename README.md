# khorbase

Small building blocks for network servers. It uses only the standard library.

## Modules

- `khorbase.autobuffer`: `AutoBuffer` is a byte buffer with a filled region
  and spare capacity. The capacity grows in steps of `granulate` bytes, 1024
  by default. It has `append`, `find`, `compare`, `replace` (in place, first
  match or all), `cut_from_head`, `advance`, `retreat` and `flush`. The
  properties `data`, `free_size` and `full_size` report its state.
  `BufferChunk` holds a position inside a buffer. Its `chunk()` returns the
  filled bytes from that position on.
- `khorbase.i18n`: `Internalization` keeps one `Dictionary` per language and
  creates a dictionary the first time a language is asked for. A missing tag
  gives an empty string. `Dictionary.get_value` can call a fallback instead,
  `fallback(lang, tag)`. Appending a tag that already exists keeps the first
  value.
- `khorbase.utils` provides:
  - `escape_string`
  - `epoch_diff`
  - `epoch_microseconds_to_datetime` and `epoch_milliseconds_to_datetime`
  - `clear_html_tags`, which strips tags, trims line breaks and turns
    `&nbsp;` into spaces
  - `json_string`, which writes compact JSON with sorted keys
  - `parse_json`
  - `compact_uuid`, which drops the dashes
- `khorbase.profiler`: `CpuProfiler` is a context manager that logs the time
  spent at debug level, in the chosen `Precision` (seconds, milliseconds,
  microseconds or nanoseconds). `profile_function` is a decorator that does
  the same for every call of a function.
- `khorbase.logger`: `prepare_logger(configure, logger_name)` sets up a
  standard `logging` logger that writes to stdout and to a rotating file.
  `configure` is a nested mapping, and the settings are read from
  `configure["log"][logger_name]`:

  | key             | default                  |
  |-----------------|--------------------------|
  | `pattern`       | a `logging.Formatter` format string |
  | `level`         | `WARNING`                |
  | `file_name`     | `./log`                  |
  | `max_file_size` | 20 MiB                   |
  | `max_files`     | 10                       |
  | `async`         | true                     |

  `level` may be DEBUG, TRACE, INFO, ERROR, CRITICAL or OFF. Any other
  name gives WARNING; `level_from_name` does this mapping. With `async` set,
  records pass through a queue to a background listener.
- `khorbase.case_tables` and `khorbase.convert`: `towlower` and
  `lower_string` map characters to lower case using fixed delta tables. The
  tables cover Latin, Greek, Cyrillic, Armenian, fullwidth forms and Deseret.
  `lower_delta` returns the raw table entry for a code point.
- `khorbase.session`: `Session` records a session's lifetime, visit count and
  the client addresses it has seen. `SessionStore` saves sessions to an
  SQLite table. `SessionController` keeps live sessions in memory and copies
  them to the store. Its `get_session` pushes a live session's expiry forward,
  or makes a new session through a creator callable.
- `khorbase.s2h_session`: `S2HSession` is a session that also holds the
  logged-in user's id, nickname, position and roles. These are saved with the
  session as JSON.
- `khorbase.fastfile`: `FastFile` maps a file into memory and can grow it.
  It is used as a context manager. When a writable file is closed, it is cut
  back to its logical size.

## Examples

```python
from khorbase.autobuffer import AutoBuffer

buf = AutoBuffer()
buf.append(b"hello world")
buf.replace(b"world", b"there")
assert buf.data == b"hello there"
```

```python
from khorbase.i18n import Internalization

texts = Internalization()
texts.append_value("en", "greeting", "Hello")
assert texts.get_value("en", "greeting") == "Hello"
assert texts.get_value("en", "missing") == ""
```

```python
from khorbase.convert import lower_string

assert lower_string("ПРИВЕТ") == "привет"
```

```python
from khorbase.s2h_session import S2HSession
from khorbase.session import SessionController

sessions = SessionController()
sessions.open(":memory:", 4, 4, S2HSession)
session, created = sessions.get_session("unknown", S2HSession)
assert created and sessions.find_session(session.session_id) is session
sessions.close()
```

## What it does not do

khorbase provides building blocks only. It has no HTTP or binary-protocol
server, no command-line program, no user or token database, and no
configuration-file loader. `prepare_logger` takes a mapping that has already
been built.

## Tests

```
pip install -e .[test]
pytest
```
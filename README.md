# goweb

Building blocks for a small web framework:

- `goweb.paths` – `clean_path`, which canonicalises URL paths.
- `goweb.utils` – helpers such as `join_paths`, `parse_accept`,
  `filter_flags`, `resolve_address` and the `H` map (with `H.to_xml`).
- `goweb.mode` – debug / release / test mode switching (`set_mode`, `mode`,
  `mode_code`, `is_debugging`).
- `goweb.response` – `Headers`, an in-memory `ResponseRecorder`, and a
  `ResponseWriter` that tracks the status code and the number of body bytes
  written.
- `goweb.render` – renderers for raw data, plain text, XML, YAML,
  MessagePack, protobuf messages, streams, redirects and jinja2 HTML
  templates.
- `goweb.render_json` – JSON renderers: `JSON`, `IndentedJSON`,
  `SecureJSON`, `JsonpJSON`, `AsciiJSON` and `PureJSON`.
- `goweb.logger` – access-log line formatting with optional ANSI colours.
- `goweb.recovery` – helpers for error reports: `stack`, `function_name`,
  `source`, `time_format` and `mask_authorization`.
- `goweb.execution` – `get_exec_directory` and `check_process_exists`.
- `goweb.app` – `GoWebApp`, which knows the application's version and
  folder layout, and `GoWebAppProvider` / `new_app` to build it.

## Install

```
pip install .
```

## Paths

```python
from goweb.paths import clean_path
from goweb.utils import join_paths

clean_path("abc/./../def")        # "/def"
join_paths("/a/", "/hola/")       # "/a/hola/"
```

## Writing responses

```python
from goweb.response import ResponseRecorder, ResponseWriter

rec = ResponseRecorder()
w = ResponseWriter(rec)
w.write_header(300)
w.write(b"hola")
w.status, w.size, w.written   # (300, 4, True)
rec.code, rec.text()          # (300, "hola")
```

## Rendering

Every renderer has `render(w)` and `write_content_type(w)`; `w` is any
object with a `headers` attribute (a `Headers`) and a `write` method, such as
`ResponseRecorder`.

```python
from goweb.response import ResponseRecorder
from goweb.render_json import JSON
from goweb.render import String

w = ResponseRecorder()
JSON({"foo": "bar"}).render(w)
w.text()                       # '{"foo":"bar"}'
w.headers.get("Content-Type")  # 'application/json; charset=utf-8'

w = ResponseRecorder()
String("hola %s %d", ["manu", 2]).render(w)
w.text()                       # 'hola manu 2'
```

`Redirect` raises `ValueError` for a status code outside 300–308 other than
201. `HTMLDebug.instance` raises `ValueError` when it has neither files nor a
glob pattern.

## Modes

```python
from goweb.mode import set_mode, mode

set_mode("release")
mode()  # "release"
```

An unknown mode raises `ValueError`. The initial mode is read from the
`GIN_MODE` environment variable; an empty value means debug.

## Access-log lines

```python
from datetime import datetime, timedelta
from goweb.logger import LogFormatterParams, default_log_formatter

line = default_log_formatter(LogFormatterParams(
    time_stamp=datetime(2018, 12, 7, 9, 11, 42),
    status_code=200,
    latency=timedelta(seconds=5),
    client_ip="20.20.20.20",
    method="GET",
    path="/",
))
```

Colours are written when `force_console_color()` was called, or in the
default mode when `is_term` is true; `disable_console_color()` turns them off
and `reset_console_color()` restores the default.

## Application folders

```python
from goweb.app import GoWebApp

app = GoWebApp(base_folder="/srv/app")
app.config_folder()   # "/srv/app/config"
app.log_folder()      # "/srv/app/storage/log"
```

Without a base folder, `base_folder()` reads a `-base_folder` option from the
command line and otherwise uses the current directory.

## What it does not do

The package has no URL router, no request context or middleware chain, no
HTTP server and no service container. It supplies the pieces around them:
path handling, response writing and rendering, log formatting and the
application's folder layout.

## Tests

```
pip install .[test]
pytest
```
# atlaskit

Building blocks for API services in plain Python:

- collection query operators: filtering, sorting, pagination, field selection
  and searching (`atlaskit.query`);
- resource identifiers, error details and per-field error messages
  (`atlaskit.rpc`);
- a per-call context with incoming and outgoing metadata
  (`atlaskit.callcontext`), request IDs (`atlaskit.requestid`) and request
  info derived from HTTP requests (`atlaskit.requestinfo`);
- a small structured JSON logger and a per-call log-level interceptor
  (`atlaskit.logs`).

It runs on Python 3.10 or later and uses only the standard library.

## Installation

```
pip install atlaskit
```

To work on the package and run its tests:

```
pip install -e ".[test]"
pytest
```

## Filtering

A filter expression is made of conditions joined with `and`, `or`, `not` and
parentheses. The operators are `==`/`eq`, `!=`/`ne`, `~`/`match`,
`!~`/`nomatch`, `:=`/`ieq` (case-insensitive equality), `>`/`gt`, `>=`/`ge`,
`<`/`lt`, `<=`/`le` and `in` with a list of strings or numbers. Strings are
quoted with `'` or `"`; a doubled quote stands for itself. `field == null`
tests for `None`.

```python
from atlaskit.query.parser import apply_filter, parse_filtering

flt = parse_filtering("name == 'bob' and age >= 18")
print(flt.filter({"name": "bob", "age": 21}))             # True

print(apply_filter({"tags": "x"}, "tags in ['x', 'y']"))  # True
print(apply_filter({}, ""))                               # True
```

`parse_filtering` returns `None` for an empty expression and a `Filtering`
tree otherwise; `FilteringParser().parse` does the same. Fields are looked up
by key in mappings, by `metadata["json"]` / `metadata["name"]` (or the
attribute name) on dataclasses, and by attribute on other objects.

Errors:

- `UnexpectedSymbolError` and `UnexpectedTokenError`
  (`atlaskit.query.lexer`) for text that breaks the grammar;
- `TypeMismatchError` (`atlaskit.query.filtering`) when a field is missing or
  holds a value of the wrong type;
- `re.error` for a bad regular expression after `~`.

An object that subclasses `atlaskit.query.filtering.Matcher` decides for
itself by implementing `match(filtering)`. The tokenizer is available on its
own as `atlaskit.query.lexer.FilteringLexer`, with `next_token()` and
iteration over the tokens.

## Sorting, pagination, searching

```python
from atlaskit.query.sorting import parse_sorting
from atlaskit.query.pagination import parse_pagination, PageInfo
from atlaskit.query.searching import parse_searching

sorting = parse_sorting("name desc, age")
print(str(sorting))                 # name DESC, age ASC
print(sorting.criterias[0].is_desc())  # True

page = parse_pagination("50", "100", "")
print(page.default_limit())         # 50
print(page.first_page())            # False

info = PageInfo()
info.set_last_offset()
print(info.no_more())               # True

print(str(parse_searching("foo")))  # foo
```

`parse_sorting` raises `ValueError` for an unknown order or a malformed
criterion. `parse_pagination` raises `PaginationError` when the limit is not a
positive 32-bit integer or the offset is not a non-negative one; an offset of
`"null"` means 0. Without a limit, `default_limit()` returns its argument if
positive, else `DEFAULT_LIMIT` (1000).

## Field selection

```python
from atlaskit.query.fields import parse_field_selection

fields = parse_field_selection("a.b,a.c,x")
fields.add("x.y")
fields.delete("a.c")
print(sorted(fields.all_field_strings()))   # ['a.b', 'x.y']
print(fields.get("a").name)                 # a
```

Every method takes an optional delimiter for nested names (`.` by default).

## Resource identifiers and error details

```python
from atlaskit.rpc.resource import Identifier, build_string, is_nil, parse_string
from atlaskit.rpc.errdetails import Code, TargetInfo, new_target_info
from atlaskit.rpc.errfields import FieldInfo

print(build_string("app", "res", "id1"))    # app/res/id1
print(parse_string("/a/b/c/"))              # ('a', 'b', 'c')
ident = Identifier.from_json('"app/res/id1"')
print(ident.to_json())                      # "app/res/id1"
print(Identifier().to_json())               # "null"
print(is_nil(Identifier()))                 # True

ti = new_target_info(Code.UNIMPLEMENTED, "", "")
print(ti.to_json())                         # {"code":"NOT_IMPLEMENTED"}
print(TargetInfo.from_json('{"code": "NEW_CODE"}').code)  # 2 (UNKNOWN)

fi = FieldInfo()
fi.add_field("name", "must not be empty")
print(fi.to_json())                         # {"name":["must not be empty"]}
```

## Call context, request IDs and request info

`CallContext` holds incoming and outgoing metadata (keys are lower-cased,
values are tuples of strings) and a dict of log fields shared by the contexts
derived from it. `header(ctx, key)` returns the first value of a key, also
looking under the `grpcgateway-` prefix.

```python
from atlaskit.callcontext import CallContext
from atlaskit.requestid import from_context, unary_server_interceptor

ctx = CallContext(incoming={"X-Request-ID": "abc"})
intercept = unary_server_interceptor()
print(intercept(ctx, None, None, lambda c, req: from_context(c)))  # abc
print(ctx.log_fields)                       # {'request_id': 'abc'}
```

When the call carries no request ID, a new UUID is generated.
`stream_server_interceptor()` does the same for a stream object that exposes
its `CallContext` as `context`.

```python
from atlaskit.callcontext import CallContext
from atlaskit import requestinfo

info = requestinfo.new_request_info("GET", "http://localhost:8080/app/items/42")
print(info.identifier, info.operation_type)  # app/items/42 Read

metadata = requestinfo.metadata_annotator("POST", "http://localhost:8080/app/items")
back = requestinfo.from_context(CallContext(incoming=metadata))
print(back.operation_type)                   # Create
```

`new_request_info` raises `InvalidHTTPRequestPathError` for a path that is not
`/<app>/<type>` or `/<app>/<type>/<id>`; `from_context` raises
`AppNameMissingError` or `ResourceTypeMissingError`. All of them derive from
`RequestInfoError`.

## Logging

`atlaskit.logs.log.Logger` writes one JSON object per message (`time`, `msg`,
`level` and the entry's fields) to its `out` stream. `new_logger(level)`
returns one writing to stderr; `parse_level`, `Entry.with_fields`,
`level_log` and `default_code_to_level` (RPC status code to level) go with it.

`atlaskit.logs.interceptor.log_level_interceptor(default_level)` runs a
handler with a copy of the logger at the level named in the call's
`log-level` metadata, adds any `log-trace-key` value to the fields, and copies
the handler's fields back afterwards:

```python
import io
from atlaskit.callcontext import CallContext
from atlaskit.logs.log import Level, Logger
from atlaskit.logs.interceptor import log_level_interceptor

entry = Logger(out=io.StringIO(), level=Level.WARN).with_fields({"source": "api"})
ctx = CallContext(incoming={"log-level": "debug"})
intercept = log_level_interceptor(Level.INFO)
print(intercept(entry, ctx, None, None, lambda e, c, r: e.logger.level))  # Level.DEBUG
```

`annotator(headers)` turns the `log-level` and `log-trace-key` HTTP headers
into metadata; `new_logger_fields` builds the standard `grpc.*` fields of a
call.

## What this package does not do

- It does not plug into a gRPC server or client: the interceptors are plain
  functions over `CallContext`.
- It has no unary or stream client/server logging interceptors and no gateway
  logging interceptor. `Options`, `with_levels`, `with_custom_fields`,
  `with_custom_headers` and `init_options` build option sets, but nothing in
  the package reads the custom fields and headers from them.
- It does not read account IDs or other claims from authentication tokens.
- It has no page-token encoding or decoding.
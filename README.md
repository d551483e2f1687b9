# helixkit

Building blocks for a graph database server, in pure Python with no
third-party dependencies:

- **`helixkit.protocol.value`**: `Value` holds a property value: a string,
  float, 32-bit integer, boolean, array of values, or nothing (`ValueKind`
  names the kinds). It converts to plain JSON data (`to_json` / `from_json`)
  and to a tagged `(variant index, payload)` form (`to_tagged` /
  `from_tagged`). `properties_to_json` and `properties_from_json` handle whole
  property maps.
- **`helixkit.protocol.graph_types`**: `Node`, `Edge` and `Count`. Nodes and
  edges look up properties with `check_property` and convert to and from JSON
  data; a `Count` compares equal to a plain integer and has `gt`, `gte`, `lt`,
  `lte`, `eq` and `neq`.
- **`helixkit.protocol.traversal`**: `TraversalValue` (empty, a count, arrays
  of nodes, edges or named values, or paths) and `ReturnValue`.
  `TraversalValue.collect` merges many results: the first count wins outright,
  otherwise nodes win over edges and edges over named values.
- **`helixkit.protocol.http`**: `Request.from_stream` parses one HTTP/1.1
  request from a binary stream (header names are lower-cased, the body is read
  by `Content-Length`); `Response.send` writes a response. A 404 or 500
  status replaces the body with a standard message.
- **`helixkit.gateway.router`**: `HelixRouter` maps `(METHOD, path)` pairs to
  handlers. A handler is called with a `HandlerInput` (the request and the
  graph object) and the `Response` to fill in. Unknown routes get a 404.
- **`helixkit.gateway.thread_pool`**: `ThreadPool` serves sockets on worker
  threads: each worker reads a request, routes it, sends the response and
  closes the socket. A handler that raises produces a 500. Errors are logged
  through `logging`.
- **`helixkit.gateway.connection`**: `ConnectionHandler` listens on a
  `"host:port"` address and hands every accepted client to a `ThreadPool`;
  `HelixGateway` builds a router and a connection handler together (pool size
  defaults to `DEFAULT_POOL_SIZE`, 10).
- **`helixkit.generator.conditions`** and **`helixkit.generator.query_gen`**:
  `TraversalGenerator` builds the source text of a traversal handler step by
  step. Each step is only allowed from the right state (vertex steps on a
  vertex traversal, edge steps on an edge traversal), otherwise `TypeError`.
  Filter conditions are `PropertyComparison`, `TraversalComparison`,
  `LogicalCombination` and `PropertyExists`.
- **`helixkit.generator.project_gen`**: `ProjectGenerator` writes a project
  directory (`Cargo.toml`, `src/lib.rs`, `src/traversals.rs`) holding the
  generated handlers.
- **`helixkit.errors`**: the exception types `ParseError`, `LexError`,
  `RouterError`, `RouterIOError` and `GraphConnectionError`. The gateway raises
  `GraphConnectionError` when it cannot bind or accept.

## Install

```
pip install .
```

Install the test extra with `pip install .[test]`.

## Examples

Values:

```python
from helixkit.protocol.value import Value

v = Value.from_native([1, "a", True])
v.to_json()      # [1, "a", True]
v.to_tagged()    # (4, [(2, 1), (0, "a"), (3, True)])
```

Routing a request:

```python
import io
from helixkit.gateway.router import HelixRouter
from helixkit.protocol.http import Request, Response

router = HelixRouter()

def hello(handler_input, response):
    response.status = 200
    response.body = b"Success"

router.add_route("GET", "/test", hello)
request = Request.from_stream(io.BytesIO(b"GET /test HTTP/1.1\r\n\r\n"))
response = Response()
router.handle(None, request, response)

out = io.BytesIO()
response.send(out)   # b"HTTP/1.1 200 OK\r\n...Success"
```

Serving over TCP:

```python
from helixkit.gateway.connection import HelixGateway

gateway = HelixGateway("127.0.0.1:8080", graph=None, size=4,
                       routes={("GET", "/test"): hello})
handler = gateway.connection_handler
done = handler.accept_conns()   # a Future, accepting on a background thread
...
handler.close()                 # stops listening and the workers
done.result()
```

Generating traversal code:

```python
from helixkit.generator.query_gen import TraversalGenerator

code = (
    TraversalGenerator("test_function")
    .v()
    .out("knows")
    .in_("follows")
    .out_e("likes")
    .generate_code()
)
```

Writing a project from generated queries:

```python
from helixkit.generator.project_gen import ProjectGenerator

ProjectGenerator("graph_queries", "out").with_queries({"test_function": code}).generate()
```

`run_generator(output_dir)` builds two sample queries and writes them as a
`graph_queries` project under `output_dir` (by default `../`).

## What this package does not do

- It has no graph storage or query engine. The `graph` object handed to the
  router and the gateway is passed to handlers untouched; what it is and what
  it does is up to you.
- It has no parser for the query language. `ParseError` and `LexError` exist
  for callers that do parsing, but nothing here raises them.
- The generated handler source is text only; this package does not compile or
  run it.
- There is no command-line program.

## Tests

```
pytest
```
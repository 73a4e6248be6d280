# echoplex

Small TCP echo servers that show two ways of waiting on many sockets at once,
together with two ways of holding a single shared object.

- `SelectTcpServer` (`echoplex.select_server`) watches the listening socket and
  a fixed table of client slots with level-triggered `select`. When every slot
  is taken, further connections are accepted and then closed straight away.
- `EpollTcpServer` (`echoplex.epoll_server`) registers the listening socket
  with epoll and each client as a non-blocking, edge-triggered socket. On every
  readiness event it reads the socket until nothing is left before it waits
  again. epoll is available on Linux only.
- `SingletonLazy` and `SingletonEager` (`echoplex.singleton`) each hand out
  one shared instance. The lazy one is created on the first call to
  `get_instance()`, the eager one when the module is imported.

Both servers send every chunk they receive back to the client that sent it,
read at most 1023 bytes at a time, and report new connections, received data
and disconnections on standard output.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Command line

The `echoplex` command has two subcommands; one of them must be given.

### `echoplex serve`

```
echoplex serve
```

starts the epoll echo server on port 8099, accepting connections on all
interfaces, and runs until it is interrupted (Ctrl-C ends it with exit status
0). You can check it with any TCP client, for example `nc localhost 8099`.

Options:

- `--mode {epoll,select}`: which server to run (default `epoll`).
- `--host HOST`: address to bind to (default: all interfaces).
- `--port PORT`: port to bind to (default 8099).
- `--max-clients N`: number of client slots for the select server
  (default 10; ignored by the epoll server).

```
echoplex serve --mode select --host 127.0.0.1 --port 9000 --max-clients 4
```

If the socket cannot be bound, or `--max-clients` is below 1, the command
prints `echoplex: <reason>` on standard error and exits with status 1.

### `echoplex singleton`

```
echoplex singleton --kind lazy
```

prints the greeting of the eager (default) or lazy singleton.

## Using the servers from code

Both servers bind their socket when they are created, begin listening with
`start()`, and report the bound `(host, port)` through the `address`
property, which is handy when binding to port 0.

```python
from echoplex.select_server import SelectTcpServer

with SelectTcpServer(host="127.0.0.1", port=8099, max_clients=10) as server:
    server.start()
    server.serve_forever()
```

`serve_forever()` calls `start()` itself if the server is not listening yet.
The select server loops until interrupted; the epoll server returns when
waiting for events fails.

To drive the event loop yourself, call `serve_once(timeout)` in place of
`serve_forever()`. Each call waits at most `timeout` seconds (for ever when it
is `None`), handles whatever became ready, and returns how many sockets were
ready, 0 on timeout. Calling it before `start()` raises `RuntimeError`.

```python
from echoplex.epoll_server import EpollTcpServer

with EpollTcpServer(host="127.0.0.1", port=0) as server:
    server.start()
    print("listening on", server.address)
    while True:
        server.serve_once(0.5)
```

Leaving the `with` block closes every client connection and the listening
socket; you can also call `close()` yourself. Using `address` or `start()` on
a closed server raises `RuntimeError`.

## Singletons

```python
from echoplex.singleton import SingletonEager, SingletonLazy

assert SingletonLazy.get_instance() is SingletonLazy.get_instance()
SingletonEager.get_instance().print_greeting()
```

Calling either class directly, or copying an instance with `copy.copy` or
`copy.deepcopy`, raises `TypeError`. `SingletonLazy` creates its instance
under a lock, so concurrent first calls still get the same object.

## What it does not do

The servers only echo. They have no TLS, no configuration file, no logging
beyond plain prints to standard output, and no way to stop them other than
interrupting the process or calling `close()` from code.
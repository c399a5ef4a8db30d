# relaychat

relaychat is a small TCP chat relay server. Every client connects to the same port. Each chunk of data that a client sends is forwarded to every connected client, including the sender. Server activity is written to log files.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
relaychat
```

By default the server listens on port 8080 on all IPv4 addresses and writes its logs into `./logs`. Both can be changed:

```
relaychat --port 9000 --logs-dir /tmp/relay-logs
```

The logs directory is created if it does not exist. You can try the server with any TCP client, for example `nc localhost 8080` in two terminals.

The server stops cleanly on SIGINT, SIGTERM and, where the platform has it, SIGQUIT. It records the signal number in the log and exits with that number as its status.

## Logs

- `logs.txt` records server start-up and the signal that stopped it.
- `ClientManagerLogs.txt` records the server starting and stopping, new connections, disconnections, received messages and socket errors.

Each line starts with its level: `[ERROR]`, `[WARNING]`, `[MESSAGE]`, `[INFO]` or `[UNKNOWN]`. With `LogLevel.CUSTOM` a caller-supplied prefix is used in place of the level.

## Using the pieces as a library

### Channels

`relaychat.gochan.GoChan` is a FIFO channel in the style of Go, shared between threads. A capacity of 0 means an unbounded buffer; with a positive capacity `send` blocks while the buffer is full.

```python
from relaychat.gochan import GoChan

chan = GoChan(10)          # buffered, capacity 10
chan.send("hello")         # True; False once the channel is closed
item = chan.receive()      # blocks for an item; None once closed and drained
chan.close()               # wakes every waiting sender and receiver
chan.is_closed()           # True

for item in chan:          # iterates until the channel is closed and drained
    ...
```

A negative capacity raises `ValueError`.

### Loggers

```python
from relaychat.logger import AsyncLogger, ConsoleLogger, FileLogger, LogLevel, format_message

format_message("disk full", LogLevel.ERR, "")     # "[ERROR] disk full"
format_message("note", LogLevel.CUSTOM, "[NOTE]") # "[NOTE] note"

with AsyncLogger(FileLogger("server.log")) as logger:
    logger.log("ready", LogLevel.INFO, "")
    logger.log("note", LogLevel.CUSTOM, "[NOTE]")
# leaving the block calls close(): queued messages are written, then the worker thread stops
```

- `FileLogger` appends one line per message to its file and raises `OSError` if the file cannot be opened.
- `ConsoleLogger` prints to standard output; each printed line is the tagged message followed by the message text once more.
- `AsyncLogger` queues messages (up to 10 at a time) for a background thread that passes them to the wrapped logger. After `close()`, `log` writes straight to the wrapped logger.

### The relay server

```python
from relaychat.client_manager import ClientManager
from relaychat.logger import ConsoleLogger

with ClientManager(ConsoleLogger()) as manager:
    manager.start(8080)        # start(0) picks a free port, see manager.port
    manager.broadcast("server says hi\n", None)
    ClientManager.sleep(1000)
# leaving the block calls stop()
```

Without a logger, `ClientManager` logs to the console. `start` raises `OSError` if the socket cannot be created, bound or put into listening mode, and `RuntimeError` if the server is already running. `broadcast` accepts `str` (sent as UTF-8) or `bytes` and can skip one client socket given as `exclude`. `stop` closes every connection and waits for their threads; calling it when the server is not running does nothing.

## What it does not do

relaychat only relays raw data. It has no client program, no user names or authentication, no rooms, no message framing (each chunk read from a socket, up to 4096 bytes, is forwarded as it arrived), no encryption, and it keeps no history of messages beyond what is written to the log files.
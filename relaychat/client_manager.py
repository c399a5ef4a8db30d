"""A TCP relay server that echoes every received message to all connected clients."""

from __future__ import annotations

import socket
import threading
import time
from typing import Optional, Union

from relaychat.logger import ConsoleLogger, Logger, LogLevel


class ClientManager:
    """Accepts TCP clients and relays each message it receives to every client."""

    BUFFER_SIZE = 4096
    _POLL_INTERVAL = 0.2

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger if logger is not None else ConsoleLogger()
        self._clients: list[socket.socket] = []
        self._lock = threading.Lock()
        self._running = threading.Event()
        self._server: Optional[socket.socket] = None
        self._port: Optional[int] = None
        self._connection_thread: Optional[threading.Thread] = None
        self._client_threads: list[threading.Thread] = []

    @property
    def running(self) -> bool:
        return self._running.is_set()

    @property
    def port(self) -> Optional[int]:
        """The port the server is bound to, or None before it has started."""
        return self._port

    def start(self, port: int) -> None:
        """Bind to ``port`` on all IPv4 addresses and start accepting clients."""
        if self._running.is_set():
            raise RuntimeError("server is already running")
        try:
            server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        except OSError as exc:
            self._logger.log(f"Socket creation failed: {exc.errno}", LogLevel.ERR)
            raise
        try:
            server.bind(("", port))
        except OSError as exc:
            self._logger.log(f"Bind failed: {exc.errno}", LogLevel.ERR)
            server.close()
            raise
        try:
            server.listen(socket.SOMAXCONN)
        except OSError as exc:
            self._logger.log(f"Listen failed: {exc.errno}", LogLevel.ERR)
            server.close()
            raise

        server.settimeout(self._POLL_INTERVAL)
        self._server = server
        self._port = server.getsockname()[1]
        self._running.set()
        self._connection_thread = threading.Thread(
            target=self._accept_connections, name="relay-accept", daemon=True
        )
        self._connection_thread.start()
        self._logger.log(f"Server started on port {self._port}", LogLevel.INFO)

    def stop(self) -> None:
        """Close the server and every client connection, then wait for their threads."""
        if not self._running.is_set():
            return
        self._running.clear()

        if self._server is not None:
            self._server.close()
            self._server = None

        if self._connection_thread is not None:
            self._connection_thread.join()
            self._connection_thread = None

        with self._lock:
            for conn in self._clients:
                try:
                    conn.shutdown(socket.SHUT_RDWR)
                except OSError:
                    pass
                conn.close()
            self._clients.clear()

        for thread in self._client_threads:
            if thread is not threading.current_thread():
                thread.join()
        self._client_threads.clear()

        self._logger.log("Server stopped", LogLevel.INFO)

    def broadcast(self, message: Union[str, bytes], exclude: Optional[socket.socket] = None) -> None:
        """Send ``message`` to every connected client except ``exclude``."""
        data = message.encode("utf-8") if isinstance(message, str) else bytes(message)
        with self._lock:
            for conn in self._clients:
                if conn is exclude:
                    continue
                try:
                    conn.sendall(data)
                except OSError as exc:
                    self._logger.log(
                        f"Send failed to socket {conn.fileno()}, error: {exc.errno}",
                        LogLevel.WARNING,
                    )

    @staticmethod
    def sleep(milliseconds: int) -> None:
        time.sleep(milliseconds / 1000)

    def __enter__(self) -> "ClientManager":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _accept_connections(self) -> None:
        while self._running.is_set():
            server = self._server
            if server is None:
                break
            try:
                conn, (ip, client_port) = server.accept()
            except socket.timeout:
                continue
            except OSError as exc:
                if not self._running.is_set():
                    break
                self._logger.log(f"Accept failed: {exc.errno}", LogLevel.ERR)
                continue

            conn.settimeout(self._POLL_INTERVAL)
            self._logger.log(f"New connection from {ip}:{client_port}", LogLevel.INFO)
            with self._lock:
                self._clients.append(conn)

            thread = threading.Thread(
                target=self._serve_client, args=(conn,), name="relay-client", daemon=True
            )
            self._client_threads.append(thread)
            thread.start()

    def _serve_client(self, conn: socket.socket) -> None:
        ident = conn.fileno()
        try:
            while self._running.is_set():
                try:
                    data = conn.recv(self.BUFFER_SIZE)
                except socket.timeout:
                    continue
                except OSError as exc:
                    self._logger.log(
                        f"Recv failed for socket {ident}, error: {exc.errno}", LogLevel.WARNING
                    )
                    break
                if not data:
                    self._logger.log(f"Client disconnected: {ident}", LogLevel.INFO)
                    break
                text = data.decode("utf-8", errors="replace")
                self._logger.log(f"Received from {ident}: {text}", LogLevel.MESSAGE)
                self.broadcast(data)
        finally:
            with self._lock:
                if conn in self._clients:
                    self._clients.remove(conn)
            conn.close()
"""Command-line entry point running the relay server until a signal stops it."""

from __future__ import annotations

import argparse
import signal
from pathlib import Path
from typing import Optional, Sequence

from relaychat.client_manager import ClientManager
from relaychat.logger import AsyncLogger, FileLogger, LogLevel

DEFAULT_PORT = 8080
MAIN_LOG_NAME = "logs.txt"
CLIENT_MANAGER_LOG_NAME = "ClientManagerLogs.txt"


def _parse_args(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="relaychat", description="Run the TCP relay server.")
    parser.add_argument("--port", type=int, default=DEFAULT_PORT, help="port to listen on")
    parser.add_argument("--logs-dir", type=Path, default=Path("logs"), help="directory for log files")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the server and serve until SIGINT, SIGTERM or SIGQUIT arrives."""
    args = _parse_args(argv)
    args.logs_dir.mkdir(parents=True, exist_ok=True)

    main_logger = AsyncLogger(FileLogger(args.logs_dir / MAIN_LOG_NAME))
    manager_logger = AsyncLogger(FileLogger(args.logs_dir / CLIENT_MANAGER_LOG_NAME))
    manager = ClientManager(manager_logger)

    def handle_signal(signum: int, _frame: object) -> None:
        main_logger.log(f"Received signal {int(signum)}, shutting down...", LogLevel.INFO)
        manager.stop()
        manager_logger.close()
        main_logger.close()
        raise SystemExit(int(signum))

    signals = [signal.SIGINT, signal.SIGTERM]
    sigquit = getattr(signal, "SIGQUIT", None)
    if sigquit is not None:
        signals.append(sigquit)

    previous = {}
    try:
        main_logger.log("Starting server...", LogLevel.INFO)
        for sig in signals:
            previous[sig] = signal.signal(sig, handle_signal)
        manager.start(args.port)
        while True:
            ClientManager.sleep(10000)
    finally:
        for sig, handler in previous.items():
            signal.signal(sig, handler)
        manager.stop()
        manager_logger.close()
        main_logger.close()
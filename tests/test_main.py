import os
import signal
import threading
import time

import pytest

from relaychat.main import main


def _signal_when_started(log_file, signum, timeout=10.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if log_file.exists() and "Server started on port" in log_file.read_text(encoding="utf-8"):
            break
        time.sleep(0.05)
    os.kill(os.getpid(), signum)


def test_sigterm_stops_server_and_exits_with_signal_number(tmp_path):
    logs_dir = tmp_path / "logs"
    manager_log = logs_dir / "ClientManagerLogs.txt"
    trigger = threading.Thread(
        target=_signal_when_started, args=(manager_log, signal.SIGTERM), daemon=True
    )
    trigger.start()

    with pytest.raises(SystemExit) as excinfo:
        main(["--port", "0", "--logs-dir", str(logs_dir)])
    trigger.join()

    assert excinfo.value.code == int(signal.SIGTERM)
    main_lines = (logs_dir / "logs.txt").read_text(encoding="utf-8").splitlines()
    assert main_lines == [
        "[INFO] Starting server...",
        f"[INFO] Received signal {int(signal.SIGTERM)}, shutting down...",
    ]
    manager_lines = manager_log.read_text(encoding="utf-8").splitlines()
    assert manager_lines[0].startswith("[INFO] Server started on port ")
    assert manager_lines[-1] == "[INFO] Server stopped"


def test_signal_handlers_are_restored_after_exit(tmp_path):
    before = signal.getsignal(signal.SIGTERM)
    logs_dir = tmp_path / "logs"
    trigger = threading.Thread(
        target=_signal_when_started,
        args=(logs_dir / "ClientManagerLogs.txt", signal.SIGTERM),
        daemon=True,
    )
    trigger.start()
    with pytest.raises(SystemExit):
        main(["--port", "0", "--logs-dir", str(logs_dir)])
    trigger.join()
    assert signal.getsignal(signal.SIGTERM) == before


def test_invalid_port_argument_is_rejected(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        main(["--port", "not-a-port", "--logs-dir", str(tmp_path)])
    assert excinfo.value.code == 2
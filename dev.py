#!/usr/bin/env python3
"""
Dev mode runner for the structured note analyzer

Runs the Starlette app under uvicorn with the port and log level from the
environment, and restarts it whenever a source file in the package changes.
Output from the server is streamed straight to this terminal.
"""
import subprocess
import sys
import time
from pathlib import Path
from typing import Optional

from watchdog.events import FileSystemEvent, PatternMatchingEventHandler
from watchdog.observers import Observer

from note_analyzer.config import Settings, load_settings

PACKAGE_DIR = Path(__file__).parent / "note_analyzer"
APP_PATH = "note_analyzer.server_http:app"
DEBOUNCE_SECONDS = 0.5


def server_command(settings: Settings, host: str = "127.0.0.1") -> list[str]:
    """uvicorn invocation for the configured port and log level"""
    return [
        sys.executable, "-m", "uvicorn", APP_PATH,
        "--host", host,
        "--port", str(settings.port),
        "--log-level", settings.log_level.lower(),
    ]


class SourceChangeHandler(PatternMatchingEventHandler):
    """Restart the server when a .py file under the package changes"""

    def __init__(self, command: list[str], debounce: float = DEBOUNCE_SECONDS):
        super().__init__(
            patterns=["*.py"],
            ignore_patterns=["*/__pycache__/*"],
            ignore_directories=True
        )
        self.command = command
        self.debounce = debounce
        self.process: Optional[subprocess.Popen] = None
        self.last_restart = 0.0

    def start_server(self) -> None:
        self.stop()
        self.process = subprocess.Popen(self.command)
        self.last_restart = time.monotonic()
        print(f"Server started (PID: {self.process.pid}): {' '.join(self.command[2:])}")

    def should_restart(self, now: float) -> bool:
        # Editors often write a file several times per save
        return now - self.last_restart >= self.debounce

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type not in ("created", "modified", "deleted", "moved"):
            return
        if not self.should_restart(time.monotonic()):
            return
        print(f"\n{event.src_path} {event.event_type} - restarting...")
        self.start_server()

    def stop(self) -> None:
        if self.process and self.process.poll() is None:
            self.process.terminate()
            self.process.wait()
        self.process = None


def main():
    settings = load_settings()
    handler = SourceChangeHandler(server_command(settings))

    print(f"note-analyzer dev mode on http://127.0.0.1:{settings.port} ({settings.locator_backend} locator)")
    print("Ctrl+C to stop\n")

    handler.start_server()
    observer = Observer()
    observer.schedule(handler, str(PACKAGE_DIR), recursive=True)
    observer.start()

    try:
        while observer.is_alive():
            observer.join(timeout=1)
    except KeyboardInterrupt:
        print("\nStopping dev server...")
    finally:
        observer.stop()
        handler.stop()
        observer.join()


if __name__ == "__main__":
    main()

import asyncio
import sys
import signal
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from src.keymap.constants import ListenerDefaults
from src.keymap.vmc import ControllerKeymap
from src.udp_listener.listener import UDPListener


logger = logging.getLogger(__name__)


USAGE = """Usage: python -m src.main [OPTIONS]

Listens for VMC controller input over UDP and maps the right controller's
B/A buttons to the right/left arrow keys.

Listener Options:
  --host=HOST       - Address to bind (default: 0.0.0.0)
  --port=PORT       - UDP port (default: 39600)
  --dry-run         - Log key presses instead of injecting them

Logging Options:
  --log-file=PATH   - Log to file (default: stdout only)
  --log-level=LEVEL - Logging level: DEBUG, INFO, WARNING, ERROR (default: INFO)
"""


@dataclass
class ServiceConfig:
    """Runtime options for the keymap service."""
    host: str = ListenerDefaults.HOST
    port: int = ListenerDefaults.PORT
    dry_run: bool = False
    log_file: Optional[Path] = None
    log_level: str = ListenerDefaults.LOG_LEVEL


def setup_logging(log_file: Path = None, level: str = "INFO"):
    """
    Send log records to stdout, and to ``log_file`` when given.

    Args:
        log_file: Path to log file (optional, parent directories are created)
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))
        root_logger.addHandler(file_handler)

    return root_logger


def parse_args(argv: List[str]) -> ServiceConfig:
    """
    Parse command line options.

    Args:
        argv: Arguments without the program name

    Returns:
        ServiceConfig

    Raises:
        ValueError: On unknown options or invalid values
    """
    config = ServiceConfig()

    for arg in argv:
        if arg.startswith("--host="):
            config.host = arg.split("=", 1)[1]
        elif arg.startswith("--port="):
            config.port = int(arg.split("=", 1)[1])
            if not 0 <= config.port <= 65535:
                raise ValueError(f"Port out of range: {config.port}")
        elif arg == "--dry-run":
            config.dry_run = True
        elif arg.startswith("--log-file="):
            config.log_file = Path(arg.split("=", 1)[1])
        elif arg.startswith("--log-level="):
            config.log_level = arg.split("=", 1)[1].upper()
            if config.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
                raise ValueError(f"Unknown log level: {config.log_level}")
        else:
            raise ValueError(f"Unknown option: {arg}")

    return config


def create_key_actions(dry_run: bool):
    """Return the key action backend for the chosen mode."""
    if dry_run:
        from src.keymap.keyboard import LoggingKeyActions
        return LoggingKeyActions()

    # pynput needs an input backend at import time
    from src.keymap.keyboard import PynputKeyActions
    return PynputKeyActions()


async def run_service(config: ServiceConfig):
    """Run the UDP listener until SIGINT/SIGTERM."""
    keymap = ControllerKeymap(create_key_actions(config.dry_run))
    listener = UDPListener(host=config.host, port=config.port, packet_handler=keymap.handle_packet)

    listener_task = asyncio.create_task(listener.start())

    # Set up graceful shutdown
    stop_event = asyncio.Event()

    def signal_handler():
        print("\nShutting down...")
        stop_event.set()

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, signal_handler)

    stop_waiter = asyncio.create_task(stop_event.wait())
    done, _ = await asyncio.wait({listener_task, stop_waiter}, return_when=asyncio.FIRST_COMPLETED)

    if listener_task in done and listener_task.exception():
        logger.error(f"UDP listener failed: {listener_task.exception()}")
        stop_waiter.cancel()
        return collect_stats(listener, keymap)

    print("Stopping UDP listener...")
    await listener.stop()
    await listener_task

    return collect_stats(listener, keymap)


def collect_stats(listener: UDPListener, keymap: ControllerKeymap) -> dict:
    """Listener packet counters plus the keymap's running key press count."""
    return {**listener.get_stats(), "actions_triggered": keymap.actions_triggered}


def print_stats(stats: dict):
    print("\nUDP Listener Statistics:")
    print(f"  Packets received: {stats['packets_received']}")
    print(f"  Packets processed: {stats['packets_processed']}")
    print(f"  Parse errors: {stats['parse_errors']}")
    print(f"  Handler errors: {stats['handler_errors']}")
    print(f"  Key presses: {stats['actions_triggered']}")


def main():
    if "--help" in sys.argv[1:] or "-h" in sys.argv[1:]:
        print(USAGE)
        sys.exit(0)

    try:
        config = parse_args(sys.argv[1:])
    except ValueError as e:
        print(f"Error: {e}\n")
        print(USAGE)
        sys.exit(1)

    # Setup logging
    setup_logging(log_file=config.log_file, level=config.log_level)

    print(f"Listening for VMC controller input on udp://{config.host}:{config.port}")
    if config.dry_run:
        print("Dry run: key presses are logged, not injected")

    try:
        stats = asyncio.run(run_service(config))
    except KeyboardInterrupt:
        print("\nShutdown complete.")
        return

    print_stats(stats)
    print("Service stopped.")


if __name__ == "__main__":
    main()

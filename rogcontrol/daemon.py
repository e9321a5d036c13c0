#!/usr/bin/env python3
"""ROG Control Daemon

Background service for ASUS laptop hotkeys and performance modes.

Features:
- Daemon settings loaded from YAML, user settings from a JSON store.
- M3 / M4 / Fn+F4 / Fn+F5 hotkeys mapped to configurable actions.
- Performance modes with per-mode fan curves and ACPI profiles.
- Battery charge limit re-applied on startup and on power source changes.
- Periodic CPU temperature / battery discharge logging.

Hotkey events arrive on listener threads; actions always run on the main
thread through the action queue.
"""

import argparse
import logging
import signal
import sys
import threading

from .action_queue import ActionQueue
from .commands import ApplyChargeLimitCommand
from .config import ConfigManager, find_config_file
from .controller import RogController
from .dispatcher import EventDispatcher
from .event_sources import InputDeviceEventSource, PowerSourceWatcher
from .events import EventBus
from .sensors import SensorSampler
from .store import ConfigStore


def setup_logging(log_file_path: str = None, log_level_str: str = "INFO"):
    """Configure logging system for console and optional file output."""
    log_level = getattr(logging, log_level_str.upper(), logging.INFO)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s [%(levelname)s] %(module)s: %(message)s',
        datefmt='%H:%M:%S',
        handlers=handlers,
        force=True,
    )
    logging.debug("Logging initialized at level %s", log_level_str.upper())


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="ASUS ROG hotkey and performance mode daemon.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to YAML daemon settings. If not provided, searches in standard locations."
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (overrides the settings file)."
    )
    parser.add_argument(
        "--event",
        type=int,
        metavar="ID",
        help="Dispatch a single hardware event id, run its action and exit."
    )
    parser.add_argument(
        "--sensors",
        action="store_true",
        help="Print one sensor sample and exit."
    )
    return parser.parse_args(argv)


class Daemon:
    """Wires the store, dispatcher, controller and event sources together."""

    def __init__(self, config: ConfigManager, keys=None, launcher=None):
        self.config = config
        self.bus = EventBus()
        self.store = ConfigStore(config.store_path)
        self.actions = ActionQueue()
        self.controller = RogController(self.store, config, self.bus)
        self.sampler = SensorSampler(config)

        if keys is None:
            from .adapters import PynputKeyEmulator
            keys = PynputKeyEmulator()
        if launcher is None:
            from .adapters import SubprocessLauncher
            launcher = SubprocessLauncher()

        self.dispatcher = EventDispatcher(
            self.store, self.controller, keys, launcher, handoff=self.actions.submit
        )
        self.sources = [
            InputDeviceEventSource(config.input_device_name, config.keycode_map),
        ]
        self.power = PowerSourceWatcher(config.ac_path, config.power_poll_interval)
        self._stop = threading.Event()

    def on_power_event(self, event_id: int) -> None:
        """Power source changed: dispatch the event and re-apply the charge limit."""
        self.dispatcher.dispatch(event_id)
        self.actions.submit(ApplyChargeLimitCommand(self.controller))

    def log_sensors(self) -> None:
        reading = self.sampler.sample()
        temp = f"{reading.cpu_temp:.1f}°C" if reading.cpu_temp is not None else "n/a"
        power = f"{reading.battery_discharge:.1f}W" if reading.battery_discharge is not None else "n/a"
        logging.info("cpu=%s discharge=%s", temp, power)

    def run(self) -> None:
        """Apply stored settings, start listeners and serve actions until stopped."""
        self.controller.apply_stored_settings()

        for source in self.sources:
            source.start(self.dispatcher.dispatch)
        self.power.start(self.on_power_event)

        sensor_thread = threading.Thread(target=self._sensor_loop, name="sensors", daemon=True)
        sensor_thread.start()

        logging.info("Serving hotkeys. Press Ctrl+C to exit.")
        try:
            self.actions.serve_forever(self._stop)
        finally:
            for source in self.sources:
                source.stop()
            self.power.stop()
            logging.info("Exited cleanly.")

    def request_shutdown(self) -> None:
        """Request daemon shutdown (thread-safe)."""
        self._stop.set()

    def _sensor_loop(self) -> None:
        while not self._stop.wait(self.config.sensor_interval):
            self.log_sensors()


def main(argv=None) -> None:
    """Main application entry point."""
    args = parse_args(argv)

    config_file_path = find_config_file(args.config)
    try:
        config = ConfigManager(config_file_path)
    except (FileNotFoundError, ValueError) as exc:
        sys.exit(f"[ERR] {exc}")

    setup_logging(config.log_file, args.log_level or config.log_level)
    if config_file_path:
        logging.info("Using configuration from: %s", config_file_path)
    else:
        logging.info("No configuration file found, using defaults")

    if args.sensors:
        reading = SensorSampler(config).sample()
        print(f"cpu_temp={reading.cpu_temp} battery_discharge={reading.battery_discharge}")
        return

    daemon = Daemon(config)
    logging.info("User settings: %s", daemon.store.path)

    if args.event is not None:
        command = daemon.dispatcher.dispatch(args.event)
        if command is None:
            logging.info("Event %d has no action", args.event)
        daemon.actions.run_pending()
        return

    def signal_handler(sig, frame):
        daemon.request_shutdown()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        daemon.run()
    except Exception as e:
        logging.critical("An unhandled exception occurred in the main loop!", exc_info=True)
        logging.error("Fatal error: %s", e)
        sys.exit(1)


if __name__ == "__main__":
    main()

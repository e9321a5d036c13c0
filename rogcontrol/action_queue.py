"""
Hand-off of commands to the control thread.

Event sources call submit() from their own threads; the thread that owns
UI and hardware state drains the queue and executes the commands.
"""

import logging
import queue
import threading

from .commands import Command


class ActionQueue:
    """
    Single-consumer command channel.

    Commands run one at a time, in submission order, on the thread that
    calls run_pending() or serve_forever().
    """

    def __init__(self):
        self._queue: "queue.Queue[Command]" = queue.Queue()

    def submit(self, command: Command) -> None:
        """Queue a command. Safe to call from any thread."""
        self._queue.put(command)

    def pending(self) -> int:
        return self._queue.qsize()

    def run_pending(self) -> int:
        """Execute everything queued so far without blocking. Returns the count."""
        count = 0
        while True:
            try:
                command = self._queue.get_nowait()
            except queue.Empty:
                return count
            self._execute(command)
            count += 1

    def serve_forever(self, stop_event: threading.Event, poll: float = 0.5) -> None:
        """
        Execute commands as they arrive until stop_event is set.

        Args:
            stop_event: Set from any thread to end the loop
            poll: Seconds to wait for a command before rechecking stop_event
        """
        while not stop_event.is_set():
            try:
                command = self._queue.get(timeout=poll)
            except queue.Empty:
                continue
            self._execute(command)

    @staticmethod
    def _execute(command: Command) -> None:
        try:
            command.execute()
        except Exception:
            logging.exception("Command %r failed", command)

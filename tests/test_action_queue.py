import threading

from rogcontrol.action_queue import ActionQueue
from rogcontrol.commands import Command


class _Record(Command):
    def __init__(self, log, name, fail=False):
        self.log = log
        self.name = name
        self.fail = fail

    def execute(self) -> None:
        self.log.append((self.name, threading.current_thread().name))
        if self.fail:
            raise RuntimeError("boom")


def test_run_pending_executes_in_order_on_calling_thread():
    log = []
    actions = ActionQueue()

    worker = threading.Thread(
        target=lambda: [actions.submit(_Record(log, n)) for n in ("a", "b")], name="events"
    )
    worker.start()
    worker.join()

    assert log == []
    assert actions.run_pending() == 2
    assert log == [("a", "MainThread"), ("b", "MainThread")]
    assert actions.pending() == 0


def test_failing_command_does_not_stop_queue():
    log = []
    actions = ActionQueue()
    actions.submit(_Record(log, "bad", fail=True))
    actions.submit(_Record(log, "good"))

    assert actions.run_pending() == 2
    assert [name for name, _ in log] == ["bad", "good"]


def test_serve_forever_stops_on_event():
    log = []
    stop = threading.Event()
    actions = ActionQueue()

    class _Stop(Command):
        def execute(self) -> None:
            stop.set()

    actions.submit(_Record(log, "a"))
    actions.submit(_Stop())
    actions.serve_forever(stop, poll=0.01)

    assert [name for name, _ in log] == ["a"]

from rogcontrol.ports import KeyEmulator, ModeController, ProcessLauncher


class _Controller(ModeController):
    def __init__(self):
        self.calls = []

    def toggle_visibility(self) -> None:
        self.calls.append("toggle_visibility")

    def cycle_performance_mode(self) -> None:
        self.calls.append("cycle_performance_mode")

    def cycle_lighting_mode(self) -> None:
        self.calls.append("cycle_lighting_mode")


class _Keys(KeyEmulator):
    def __init__(self):
        self.pressed = []

    def press(self, key) -> None:
        self.pressed.append(key)


class _Launcher(ProcessLauncher):
    def __init__(self):
        self.launched = []

    def launch(self, command: str) -> None:
        self.launched.append(command)

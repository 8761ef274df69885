"""Shared test helpers for AerialTimer."""

from aerialtimer.audio.tones import ToneGenerator
from aerialtimer.wakelock import WakeLock


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Monotonic clock the test moves by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingToneGenerator(ToneGenerator):
    """Remembers every (frequency, duration, gain) it was asked to play."""

    def __init__(self):
        self.calls: list[tuple[float, float, float]] = []

    def play(self, frequency, duration, gain):
        self.calls.append((frequency, duration, gain))

    @property
    def frequencies(self) -> list[float]:
        return [c[0] for c in self.calls]

    def clear(self):
        self.calls.clear()


class BrokenToneGenerator(ToneGenerator):
    def __init__(self):
        self.attempts = 0

    def play(self, frequency, duration, gain):
        self.attempts += 1
        raise RuntimeError("audio device unavailable")


class FakeWakeLock(WakeLock):
    """In-memory lock; ``drop()`` simulates the platform revoking it."""

    def __init__(self, supported: bool = True, grant: bool = True):
        self._supported = supported
        self._grant = grant
        self._active = False
        self.acquire_calls = 0
        self.release_calls = 0

    @property
    def supported(self) -> bool:
        return self._supported

    @property
    def active(self) -> bool:
        return self._active

    def acquire(self) -> bool:
        self.acquire_calls += 1
        if self._supported and self._grant:
            self._active = True
        return self._active

    def release(self) -> None:
        self.release_calls += 1
        self._active = False

    def drop(self) -> None:
        self._active = False


def run_to_finish(controller, limit: int = 100_000) -> list:
    """Tick a started controller until FINISHED; return phases visited."""
    phases = [controller.phase]
    for _ in range(limit):
        if controller.state.is_finished:
            break
        controller.advance()
        if controller.phase is not phases[-1]:
            phases.append(controller.phase)
    return phases

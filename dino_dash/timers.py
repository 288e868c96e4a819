import itertools
import logging

logger = logging.getLogger(__name__)


class TimerEvent:
    def __init__(self, clock, due, delay, callback, loop, seq):
        self.clock = clock
        self.due = due
        self.delay = delay
        self.callback = callback
        self.loop = loop
        self.seq = seq
        self.removed = False

    def remove(self):
        self.removed = True

    def _fire(self):
        if self.loop:
            self.due += self.delay
        else:
            self.removed = True
        self.callback()


class Fade:
    """Linear alpha tween, completed exactly once."""

    def __init__(self, start, end, duration, on_complete=None):
        if duration <= 0:
            raise ValueError(f"fade duration must be positive, got {duration}")
        self.start = start
        self.end = end
        self.duration = duration
        self.on_complete = on_complete
        self.elapsed = 0
        self.done = False

    @property
    def alpha(self):
        progress = min(1.0, self.elapsed / self.duration)
        return int(round(self.start + (self.end - self.start) * progress))

    def advance(self, ms):
        if self.done:
            return
        self.elapsed += ms
        if self.elapsed >= self.duration:
            self.elapsed = self.duration
            self.done = True
            if self.on_complete is not None:
                self.on_complete()


class Clock:
    """Millisecond clock driving timer events and tweens.

    Nothing runs on its own: the owner calls ``advance`` once per frame and
    every due callback runs inline, in due order, on the caller's thread.
    """

    def __init__(self):
        self.now = 0
        self._events = []
        self._tweens = []
        self._seq = itertools.count()

    def add_event(self, delay, callback, loop=False):
        if delay < 0 or (loop and delay <= 0):
            raise ValueError(f"invalid timer delay {delay} (loop={loop})")
        event = TimerEvent(self, self.now + delay, delay, callback, loop, next(self._seq))
        self._events.append(event)
        return event

    def add_tween(self, tween):
        self._tweens.append(tween)
        return tween

    def pending(self):
        return [e for e in self._events if not e.removed]

    def active_tweens(self):
        return [t for t in self._tweens if not t.done]

    def advance(self, ms):
        target = self.now + ms
        while True:
            due = [e for e in self._events if not e.removed and e.due <= target]
            if not due:
                break
            event = min(due, key=lambda e: (e.due, e.seq))
            self.now = max(self.now, event.due)
            event._fire()
        self.now = target
        self._events = [e for e in self._events if not e.removed]

        for tween in list(self._tweens):
            tween.advance(ms)
        self._tweens = [t for t in self._tweens if not t.done]

    def clear(self):
        logger.debug("Clearing %d timers and %d tweens", len(self.pending()), len(self.active_tweens()))
        for event in self._events:
            event.remove()
        self._events = []
        self._tweens = []


class TimerSlot:
    """Holds at most one pending event; scheduling replaces the old one."""

    def __init__(self, clock, name):
        self.clock = clock
        self.name = name
        self.event = None

    @property
    def pending(self):
        return self.event is not None and not self.event.removed

    def schedule(self, delay, callback, loop=False):
        self.cancel()
        self.event = self.clock.add_event(delay, callback, loop=loop)
        return self.event

    def cancel(self):
        if self.event is not None:
            self.event.remove()
            self.event = None

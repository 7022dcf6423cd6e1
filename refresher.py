import math
import threading
from enum import Enum

from config import MAX_UPDATE_INTERVAL, MIN_UPDATE_INTERVAL
from errors import UiDispatchFailure
from events import Tick
from layout import UNKNOWN_QUOTE, is_known_quote


class SchedulerState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    RENDERING = "rendering"


def normalize_interval(interval):
    """
    Returns a usable wait in seconds.

    Non-numeric, non-finite or non-positive values become MIN_UPDATE_INTERVAL;
    anything above MAX_UPDATE_INTERVAL is clamped, since Event.wait() rejects
    timeouts beyond threading.TIMEOUT_MAX.
    """
    try:
        value = float(interval)
    except (TypeError, ValueError, OverflowError):
        value = 0
    if not math.isfinite(value) or value <= 0:
        print(f"[REFRESH] Invalid update interval {interval!r}, using {MIN_UPDATE_INTERVAL} seconds.")
        return MIN_UPDATE_INTERVAL
    if value > MAX_UPDATE_INTERVAL:
        print(f"[REFRESH] Update interval {interval!r} is too long, using {MAX_UPDATE_INTERVAL} seconds.")
        return MAX_UPDATE_INTERVAL
    return value


def normalize_quotes(symbols, quotes):
    """Aligns a fetched batch to the symbols; missing or corrupt entries become unknown."""
    quotes = list(quotes)
    if len(quotes) != len(symbols):
        print(f"[REFRESH] Fetcher returned {len(quotes)} quotes for {len(symbols)} symbols.")
    normalized = []
    for index, symbol in enumerate(symbols):
        quote = quotes[index] if index < len(quotes) else UNKNOWN_QUOTE
        if quote is not UNKNOWN_QUOTE and not is_known_quote(quote):
            print(f"[REFRESH] Ignoring corrupt quote for {symbol}: {quote!r}")
            quote = UNKNOWN_QUOTE
        normalized.append(float(quote) if quote is not UNKNOWN_QUOTE else UNKNOWN_QUOTE)
    return normalized


class RefreshScheduler:
    """
    Periodically fetches quotes for the registry's symbols and renders them.

    The timer runs on a daemon thread which also performs the fetch, so the UI
    thread never waits on the network. Rendering is posted to the UI dispatcher.
    A result is dropped if the scheduler was stopped or the symbol list was
    replaced while the fetch was in flight.
    """

    def __init__(self, registry, fetcher, projector, dispatcher, interval):
        self.registry = registry
        self.fetcher = fetcher
        self.projector = projector
        self.dispatcher = dispatcher
        self.interval = normalize_interval(interval)
        self.state = SchedulerState.IDLE
        self.stop_event = threading.Event()
        self.stop_event.set()
        self.refresh_thread = None
        self.tick_count = 0

    @property
    def running(self):
        return not self.stop_event.is_set()

    def start(self):
        """Runs one refresh right away, then one per interval, until stop()."""
        if self.running:
            return
        self.stop_event = threading.Event()
        self.refresh_thread = threading.Thread(target=self._refresh_loop, args=(self.interval, self.stop_event), daemon=True)
        self.refresh_thread.start()
        print(f"[REFRESH] Started, refreshing every {self.interval:g} seconds.")

    def stop(self):
        """Disarms the timer; a fetch still in flight finishes but is never rendered."""
        if not self.running:
            return
        self.stop_event.set()
        print("[REFRESH] Stopped.")

    def join(self, timeout=None):
        if self.refresh_thread is not None:
            self.refresh_thread.join(timeout)

    def restart(self, interval=None):
        self.stop()
        if interval is not None:
            self.interval = normalize_interval(interval)
        self.start()

    def _refresh_loop(self, interval, stop_event):
        self.handle(self._next_tick(), stop_event)
        while not stop_event.wait(interval):
            self.handle(self._next_tick(), stop_event)

    def _next_tick(self):
        self.tick_count += 1
        return Tick(sequence=self.tick_count)

    def handle(self, tick, stop_event=None):
        """
        Runs one fetch-then-render cycle for a Tick.

        Without a stop_event this is a one-off refresh that stop() does not cancel.
        Returns True when a render was posted to the UI thread.
        """
        if stop_event is None:
            stop_event = threading.Event()
        try:
            return self._run_cycle(tick, stop_event)
        except Exception as e:
            print(f"Error during refresh cycle {tick.sequence}: {e}")
            return False
        finally:
            self.state = SchedulerState.IDLE

    def _run_cycle(self, tick, stop_event):
        epoch, symbols = self.registry.snapshot()

        self.state = SchedulerState.FETCHING
        try:
            quotes = self.fetcher(symbols)
        except Exception as e:
            print(f"[REFRESH] Fetch failed for tick {tick.sequence}, showing unknown quotes: {e}")
            quotes = [UNKNOWN_QUOTE] * len(symbols)
        quotes = normalize_quotes(symbols, quotes)

        if stop_event.is_set():
            print(f"[REFRESH] Scheduler stopped, discarding results of tick {tick.sequence}.")
            return False
        if self.registry.epoch != epoch:
            print(f"[REFRESH] Symbols changed during tick {tick.sequence}, discarding stale results.")
            return False

        self.state = SchedulerState.RENDERING
        try:
            self.dispatcher.post(lambda: self._render(stop_event, epoch, quotes))
        except UiDispatchFailure as e:
            print(f"[REFRESH] Could not hand tick {tick.sequence} to the UI: {e}")
            return False
        return True

    def _render(self, stop_event, epoch, quotes):
        # Runs on the UI thread
        if stop_event.is_set():
            return
        self.projector.apply_quotes(epoch, quotes)

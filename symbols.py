import threading


class SymbolRegistry:
    """
    Ordered list of tracked ticker symbols.

    The list only changes through replace(). Every replace bumps the epoch, so a
    fetch issued against an older snapshot can tell that its result is stale
    without comparing the lists themselves.
    """

    def __init__(self, symbols=()):
        self._lock = threading.Lock()
        self._symbols = tuple(symbols)
        self._epoch = 0
        self._listeners = []

    @property
    def symbols(self):
        with self._lock:
            return self._symbols

    @property
    def epoch(self):
        with self._lock:
            return self._epoch

    def snapshot(self):
        """Returns ``(epoch, symbols)`` read atomically; safe from any thread."""
        with self._lock:
            return self._epoch, self._symbols

    def subscribe(self, listener):
        """Registers ``listener(epoch, symbols)``, called after every replace."""
        self._listeners.append(listener)

    def replace(self, symbols):
        """
        Replaces the whole symbol list and notifies listeners.

        Listeners rebuild every menu row and recompute the layout metrics, so this
        must run on the UI thread. An empty list is accepted and yields an empty menu.
        """
        new_symbols = tuple(symbols)
        with self._lock:
            self._epoch += 1
            self._symbols = new_symbols
            epoch = self._epoch
        print(f"[SYMBOLS] Replaced symbol list (epoch {epoch}): {', '.join(new_symbols) or '<empty>'}")
        for listener in list(self._listeners):
            listener(epoch, new_symbols)
        return epoch

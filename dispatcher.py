import queue
import threading

from errors import UiDispatchFailure

DEFAULT_QUEUE_SIZE = 256


class UiDispatcher:
    """
    Bounded queue of callbacks that only the UI thread runs.

    Any thread may post(); posting never blocks. The UI thread calls drain()
    periodically (see StockIndicator.check_ui_queue) and runs whatever is pending.
    The first thread to drain becomes the UI thread; draining from any other
    thread raises UiDispatchFailure.
    """

    def __init__(self, maxsize=DEFAULT_QUEUE_SIZE):
        self._queue = queue.Queue(maxsize=maxsize)
        self._closed = threading.Event()
        self.ui_thread_id = None

    @property
    def closed(self):
        return self._closed.is_set()

    def post(self, callback):
        if self._closed.is_set():
            raise UiDispatchFailure("UI dispatcher is closed.")
        try:
            self._queue.put_nowait(callback)
        except queue.Full:
            raise UiDispatchFailure("UI dispatch queue is full, dropping update.")

    def drain(self, limit=None):
        """Runs pending callbacks on the calling thread; returns how many ran."""
        current = threading.get_ident()
        if self.ui_thread_id is None:
            self.ui_thread_id = current
        elif current != self.ui_thread_id:
            raise UiDispatchFailure("UI callbacks can only be drained on the UI thread.")
        count = 0
        while limit is None or count < limit:
            try:
                callback = self._queue.get_nowait()
            except queue.Empty:
                break
            count += 1
            if self._closed.is_set():
                continue
            try:
                callback()
            except UiDispatchFailure as e:
                print(f"[UI] Update dropped: {e}")
            except Exception as e:
                print(f"Error running UI callback: {e}")
        return count

    def pending(self):
        return self._queue.qsize()

    def close(self):
        """Stops accepting callbacks; anything still queued is discarded."""
        self._closed.set()
        while True:
            try:
                self._queue.get_nowait()
            except queue.Empty:
                break

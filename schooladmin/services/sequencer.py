"""
Request Sequencer
Per-entity sequence numbers so a late response cannot overwrite newer state
"""
import threading


class RequestSequencer:
    """Issues monotonically increasing numbers per key"""

    def __init__(self):
        self._latest = {}
        self._lock = threading.Lock()

    def issue(self, key):
        with self._lock:
            seq = self._latest.get(key, 0) + 1
            self._latest[key] = seq
            return seq

    def is_current(self, key, seq):
        with self._lock:
            return self._latest.get(key) == seq

    def reset(self):
        with self._lock:
            self._latest.clear()

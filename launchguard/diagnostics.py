"""
Retention of the main program's latest output.

Everything the main program writes to stdout/stderr is forwarded to the
launcher's own streams as-is, while the last few KB are kept in memory so that
failure notifications can show what the program said before it went down.
"""

import logging
import sys
import threading

logger = logging.getLogger(__name__)


class ByteLogWriter:
    """Forwards written bytes to a destination and memorises the latest of them."""

    def __init__(self, destination=None, capacity: int = 4 * 1024):
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.destination = destination
        self.capacity = capacity
        self._latest = bytearray()
        self._lock = threading.Lock()

    def write(self, data: bytes) -> int:
        """Write data to the destination and remember its tail."""
        if self.destination is not None:
            try:
                self.destination.write(data)
                self.destination.flush()
            except (OSError, ValueError) as e:
                logger.debug(f"Failed to forward program output: {e}")

        with self._lock:
            if len(data) >= self.capacity:
                self._latest = bytearray(data[-self.capacity:])
            else:
                self._latest.extend(data)
                overflow = len(self._latest) - self.capacity
                if overflow > 0:
                    del self._latest[:overflow]
        return len(data)

    def retrieve(self, as_text: bool = False):
        """Return a copy of the memorised output without clearing it."""
        with self._lock:
            latest = bytes(self._latest)
        if as_text:
            return latest.decode("utf-8", errors="replace")
        return latest

    def pump(self, stream):
        """Copy a binary stream into this writer until it reaches EOF."""
        try:
            for chunk in iter(lambda: stream.read1(4096), b""):
                self.write(chunk)
        except (OSError, ValueError) as e:
            logger.debug(f"Stopped reading program output: {e}")
        finally:
            try:
                stream.close()
            except OSError:
                pass


def stdout_writer(capacity: int) -> ByteLogWriter:
    return ByteLogWriter(sys.stdout.buffer, capacity)


def stderr_writer(capacity: int) -> ByteLogWriter:
    return ByteLogWriter(sys.stderr.buffer, capacity)

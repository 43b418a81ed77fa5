"""Background expiration sweep

Classes:
    ExpirationSweeper:
        Daemon thread removing inactive links from a DAO on a fixed interval.

Example:
    >>> from linkshortener.dao.memory import LinkMemoryDAO
    >>> dao = LinkMemoryDAO()
    >>> with ExpirationSweeper(dao, interval_seconds=60):
    ...     pass  # serve requests; the sweep runs every minute
"""

import logging
import threading

from linkshortener.dao.base import LinkBaseDAO
from linkshortener.constants import Defaults


logger = logging.getLogger(__name__)


class ExpirationSweeper:
    """Periodically call `dao.sweep_expired()` from a daemon thread

    The sweep is best effort: resolution re-checks activity itself, so a late
    or failed sweep only delays memory reclamation.

    Attributes:
        dao (LinkBaseDAO):
            Store to sweep.

        interval_seconds (float):
            Pause between two sweeps.
    """

    def __init__(self, dao: LinkBaseDAO, interval_seconds: float = Defaults.SWEEP_INTERVAL_SECONDS):
        if interval_seconds <= 0:
            raise ValueError(f'Sweep interval must be positive (given value: {interval_seconds}).')

        self.dao = dao
        self.interval_seconds = interval_seconds
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def run_once(self) -> int:
        """Sweep once in the calling thread

        Returns:
            int: number of removed links.
        """
        removed = self.dao.sweep_expired()
        if removed:
            logger.info('Removed inactive links.', extra={'removed': removed})
        return removed

    def _loop(self) -> None:
        # Event.wait() returns True as soon as stop() is called
        while not self._stop.wait(self.interval_seconds):
            try:
                self.run_once()
            except Exception:
                logger.exception('Expiration sweep failed. Retrying on next interval.')

    def start(self) -> 'ExpirationSweeper':
        if self.running:
            return self

        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name='expiration-sweeper', daemon=True)
        self._thread.start()
        logger.debug('Started expiration sweeper.', extra={'intervalSeconds': self.interval_seconds})
        return self

    def stop(self, timeout: float | None = None) -> None:
        """Interrupt the sleeping sweeper and wait for its thread to finish"""
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
        logger.debug('Stopped expiration sweeper.')

    def __enter__(self) -> 'ExpirationSweeper':
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

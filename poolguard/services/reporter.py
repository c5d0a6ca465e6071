import threading

from poolguard.models.diagnostic import Diagnostic


class DiagnosticCollector:
    """Reporting channel that keeps diagnostics in emission order.

    Safe to share between threads scanning different files.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._diagnostics: list[Diagnostic] = []

    def report(self, diagnostic: Diagnostic) -> None:
        with self._lock:
            self._diagnostics.append(diagnostic)

    @property
    def diagnostics(self) -> list[Diagnostic]:
        with self._lock:
            return list(self._diagnostics)

    def __len__(self) -> int:
        with self._lock:
            return len(self._diagnostics)

"""Provenance tracking: which root last supplied each template name."""

import threading


class ProvenanceTable:
    """Thread-safe mapping of template name to the root that supplied it.

    Every operation is individually atomic. Entries are overwritten on each
    successful lookup and never removed; the set of distinct template names
    an application uses is small and finite.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._roots: dict[str, str] = {}

    def get(self, template_name: str) -> str | None:
        """Return the root that last supplied the name, if any."""
        with self._lock:
            return self._roots.get(template_name)

    def put(self, template_name: str, root: str) -> None:
        """Record (or overwrite) the root that supplied the name."""
        with self._lock:
            self._roots[template_name] = root

    def snapshot(self) -> dict[str, str]:
        """Return a copy of the current entries."""
        with self._lock:
            return dict(self._roots)

    def __contains__(self, template_name: object) -> bool:
        with self._lock:
            return template_name in self._roots

    def __len__(self) -> int:
        with self._lock:
            return len(self._roots)

from typing import Protocol, Set


# -----------------------------------------
# Alert ledger (keys of alerts already shown)
# -----------------------------------------
class AlertLedger(Protocol):
    """Set of dedup keys for alerts raised during the current monitor run."""
    def contains(self, key: str) -> bool: ...
    def add(self, key: str) -> None: ...
    def clear(self) -> None: ...
    def __len__(self) -> int: ...

class InMemoryAlertLedger:
    """Process-local ledger; lives exactly as long as the monitor."""
    def __init__(self) -> None:
        self._keys: Set[str] = set()

    def contains(self, key: str) -> bool:
        return key in self._keys

    def add(self, key: str) -> None:
        self._keys.add(key)

    def clear(self) -> None:
        self._keys.clear()

    def __len__(self) -> int:
        return len(self._keys)

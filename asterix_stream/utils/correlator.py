from typing import Dict, Iterable, List, Optional
import time


class Correlator:
    """Short-lived identity memory: key -> (times seen, last seen).

    Keys are track numbers, Mode S addresses or Mode 3/A codes. Entries not
    refreshed within `ttl_s` seconds are dropped, so a reused track number
    starts counting again.
    """

    def __init__(self, ttl_s: float = 60.0):
        self.ttl_s = ttl_s
        self._seen: Dict[str, dict] = {}

    def update(self, keys: Iterable[Optional[str]], now: Optional[float] = None) -> List[dict]:
        """Register a sighting of every key; returns [{"id", "seenCount"}]."""
        if now is None:
            now = time.time()

        self.prune(now)

        hits = []
        for key in keys:
            if not key:
                continue
            entry = self._seen.setdefault(key, {"count": 0, "last_seen": now})
            entry["count"] += 1
            entry["last_seen"] = now
            hits.append({"id": key, "seenCount": entry["count"]})

        return hits

    def prune(self, now: float) -> None:
        expired = [key for key, entry in self._seen.items() if now - entry["last_seen"] > self.ttl_s]
        for key in expired:
            del self._seen[key]

    def __contains__(self, key: str) -> bool:
        return key in self._seen

    def __len__(self) -> int:
        return len(self._seen)

from dataclasses import dataclass


@dataclass(frozen=True)
class StagedEntry:
    """Data posted by the widget, waiting for pickup."""

    payload: bytes
    expires_at: float

    def is_expired(self, now: float) -> bool:
        # invalid at or after expires_at
        return now >= self.expires_at

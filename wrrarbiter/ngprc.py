"""Next-grant precalculator: derives the next round-robin candidates."""

from __future__ import annotations

from enum import Enum

CHANNELS = 4


class PrecalcState(Enum):
    RESET = 0
    NEXT_GRANT = 1


class NextGrantPrecalculator:
    """Clocked block that masks requests above the last granted channel."""

    def __init__(self, channels: int = CHANNELS) -> None:
        if channels < 1:
            raise ValueError(f"channels must be at least 1, got {channels}")
        self.channels = channels
        self._mask = (1 << channels) - 1
        self.state = PrecalcState.RESET
        self.next_grant = 0
        self.priority_mask = 0
        self.concat_grant = 0

    def rotate_left(self, value: int) -> int:
        """Rotate ``value`` left by one bit within the channel width."""
        value &= self._mask
        return ((value << 1) | (value >> (self.channels - 1))) & self._mask

    def clock(self, reset: bool, request: int, grant: int) -> int:
        """Apply one evaluation and return the new next-grant vector."""
        request &= self._mask
        if reset:
            self.state = PrecalcState.RESET
            self.next_grant = 0
            self.priority_mask = 0
            return self.next_grant

        previous = self.state
        self.state = PrecalcState.NEXT_GRANT
        if previous is PrecalcState.RESET:
            self.next_grant = 0
            self.priority_mask = 0
            return self.next_grant

        rotated = self.rotate_left(grant)
        self.concat_grant = rotated
        mask = -rotated & self._mask
        if mask == 0:
            mask = self._mask
        self.priority_mask = mask
        candidates = request & mask
        self.next_grant = candidates if candidates or not request else request
        return self.next_grant
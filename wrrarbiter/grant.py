"""Weighted grant state machine."""

from __future__ import annotations

from enum import Enum

from wrrarbiter.decoder import Mux


class GrantState(Enum):
    IDLE = 0
    GRANT = 1
    COUNT = 2


class GrantModule:
    """Grants one channel at a time and holds it for its weight in cycles."""

    def __init__(self, channels: int = 4, weight_width: int = 4, sel_width: int = 2) -> None:
        self._mux = Mux(channels, weight_width, sel_width)
        self.channels = channels
        self.weight_width = weight_width
        self._mask = (1 << channels) - 1
        self.state = GrantState.IDLE
        self.current_grant = 0
        self.weight_counter = 0
        self.grant = 0

    def selected_weight(self, weight: int) -> int:
        """Weight of the channel held in the current grant."""
        return self._mux.select(self.current_grant, weight)

    def clock(self, reset: bool, request: int, next_grant: int, weight: int) -> int:
        """Apply one clock edge and return the grant output."""
        request &= self._mask
        if reset:
            self.state = GrantState.IDLE
            self.current_grant = 0
            self.weight_counter = 0
            self.grant = 0
        elif self.state is GrantState.IDLE:
            if request:
                candidates = (request & next_grant) or request
                self.current_grant = candidates & -candidates
                self.state = GrantState.GRANT
        elif self.state is GrantState.GRANT:
            self.grant = self.current_grant
            self.weight_counter = self.selected_weight(weight)
            self.state = GrantState.COUNT
        elif self.weight_counter == 0:
            self.grant = 0
            self.state = GrantState.IDLE
        else:
            self.weight_counter -= 1
        return self.grant
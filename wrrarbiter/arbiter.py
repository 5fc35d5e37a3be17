"""Weighted round-robin arbiter built from the precalculator and grant machine."""

from __future__ import annotations

from wrrarbiter.grant import GrantModule
from wrrarbiter.ngprc import NextGrantPrecalculator


class RoundRobinArbiter:
    """Top level: all internal registers update together on each rising edge."""

    def __init__(self, channels: int = 4, width: int = 4, sel_width: int = 2) -> None:
        self._precalc = NextGrantPrecalculator(channels)
        self._granter = GrantModule(channels, width, sel_width)
        self.channels = channels
        self.width = width
        self._next_grant = 0
        self._grant = 0
        self._last_reset = False

    @property
    def next_grant(self) -> int:
        return self._next_grant

    def _reset_changed(self, reset: bool, request: int, weight: int) -> None:
        # The precalculator reacts to any reset edge, the grant machine to rising ones.
        self._next_grant = self._precalc.clock(reset, request, self._grant)
        if reset:
            self._grant = self._granter.clock(True, request, self._next_grant, weight)
        self._last_reset = reset

    def clock(self, reset: bool, request: int, weight: int) -> int:
        """Apply one rising clock edge and return the new grant."""
        reset = bool(reset)
        if reset != self._last_reset:
            self._reset_changed(reset, request, weight)
        next_grant = self._precalc.clock(reset, request, self._grant)
        grant = self._granter.clock(reset, request, self._next_grant, weight)
        self._next_grant, self._grant = next_grant, grant
        return grant

    def grant(self) -> int:
        """Current one-hot grant output."""
        return self._grant
"""One-hot decoding and packed-bus weight selection."""

from __future__ import annotations


def _check_positive(**values: int) -> None:
    for name, value in values.items():
        if value < 1:
            raise ValueError(f"{name} must be at least 1, got {value}")


def one_hot_to_index(one_hot: int, channels: int, sel_width: int) -> int:
    """Return the index of the lowest set bit among ``channels`` bits.

    The result is truncated to ``sel_width`` bits; an all-zero input gives 0.
    """
    _check_positive(channels=channels, sel_width=sel_width)
    bits = one_hot & ((1 << channels) - 1)
    if not bits:
        return 0
    index = (bits & -bits).bit_length() - 1
    return index & ((1 << sel_width) - 1)


def unpack_weights(packed: int, channels: int, width: int) -> list[int]:
    """Split a packed bus into ``channels`` fields of ``width`` bits, channel 0 lowest."""
    _check_positive(channels=channels, width=width)
    field = (1 << width) - 1
    return [(packed >> (i * width)) & field for i in range(channels)]


class Mux:
    """Selects one channel's field from a packed bus using a one-hot select."""

    def __init__(self, channels: int = 4, width: int = 4, sel_width: int = 2) -> None:
        _check_positive(channels=channels, width=width, sel_width=sel_width)
        self.channels = channels
        self.width = width
        self.sel_width = sel_width

    def select(self, one_hot_sel: int, data_in: int) -> int:
        """Return the field chosen by ``one_hot_sel``, or 0 if the index is out of range."""
        sel = one_hot_to_index(one_hot_sel, self.channels, self.sel_width)
        fields = unpack_weights(data_in, self.channels, self.width)
        return fields[sel] if sel < self.channels else 0
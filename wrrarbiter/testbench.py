"""Stimulus, monitor output and VCD tracing for the arbiter."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Iterable, TextIO

from wrrarbiter.arbiter import RoundRobinArbiter


@dataclass(frozen=True)
class Sample:
    """Signal values seen on one rising clock edge."""

    time_ns: int
    reset: bool
    request: int
    weight: int
    grant: int


def _identifier(index: int) -> str:
    chars = []
    index += 1
    while index:
        index, rest = divmod(index - 1, 94)
        chars.append(chr(33 + rest))
    return "".join(reversed(chars))


class VcdWriter:
    """Writes value changes in Value Change Dump format."""

    def __init__(self, stream: TextIO, timescale_ns: int = 1) -> None:
        if timescale_ns < 1:
            raise ValueError("timescale_ns must be at least 1")
        self._stream = stream
        self._timescale = timescale_ns
        self._signals: dict[str, tuple[str, int]] = {}
        self._last: dict[str, int] = {}
        self._header_written = False
        self._closed = False
        self._time: int | None = None

    def add_signal(self, name: str, width: int) -> None:
        if self._header_written:
            raise ValueError("signals must be added before the first change")
        if width < 1:
            raise ValueError("width must be at least 1")
        if name in self._signals:
            raise ValueError(f"signal {name!r} already added")
        self._signals[name] = (_identifier(len(self._signals)), width)

    def _write_header(self) -> None:
        lines = [f"$timescale {self._timescale} ns $end", "$scope module top $end"]
        lines += [
            f"$var wire {width} {ident} {name} $end"
            for name, (ident, width) in self._signals.items()
        ]
        lines += ["$upscope $end", "$enddefinitions $end"]
        self._stream.write("\n".join(lines) + "\n")
        self._header_written = True

    def change(self, time_ns: int, name: str, value: int) -> None:
        """Record ``value`` for ``name`` at ``time_ns``; unchanged values are skipped."""
        if self._closed:
            raise ValueError("writer is closed")
        ident, width = self._signals[name]
        tick = time_ns // self._timescale
        if self._time is not None and tick < self._time:
            raise ValueError("time must not go backwards")
        if not self._header_written:
            self._write_header()
        value &= (1 << width) - 1
        if self._last.get(name) == value:
            return
        if tick != self._time:
            self._stream.write(f"#{tick}\n")
            self._time = tick
        if width == 1:
            self._stream.write(f"{value}{ident}\n")
        else:
            self._stream.write(f"b{value:b} {ident}\n")
        self._last[name] = value

    def close(self) -> None:
        if not self._header_written:
            self._write_header()
        self._closed = True
        self._stream.flush()


def stimulus_schedule() -> list[tuple[bool, int, int, int]]:
    """Steps of (reset, request, weight, clock edges to hold them)."""
    return [
        (True, 0x0, 0x0000, 2),
        (False, 0xF, 0x1111, 200),
        (False, 0xF, 0x1312, 200),
        (False, 0xF, 0x1312, 100),
        (False, 0x0, 0x0000, 100),
    ]


def run_testbench(
    schedule: Iterable[tuple[bool, int, int, int]] | None = None,
    channels: int = 4,
    width: int = 4,
    sel_width: int = 2,
    period_ns: int = 10,
) -> list[Sample]:
    """Drive the arbiter with ``schedule`` and sample it on every rising edge.

    Edge counts include both clock edges; new step values become visible
    after the edge that ends the previous step.
    """
    if period_ns < 2 or period_ns % 2:
        raise ValueError("period_ns must be a positive even number")
    steps = list(stimulus_schedule() if schedule is None else schedule)
    arbiter = RoundRobinArbiter(channels, width, sel_width)
    request_mask = (1 << channels) - 1
    weight_mask = (1 << (channels * width)) - 1
    half = period_ns // 2
    samples: list[Sample] = []
    edge = 0
    for reset, request, weight, edges in steps:
        if edges < 1:
            raise ValueError("each step must last at least one edge")
        reset, request, weight = bool(reset), request & request_mask, weight & weight_mask
        for _ in range(edges):
            if edge % 2 == 0:
                samples.append(Sample(edge * half, reset, request, weight, arbiter.grant()))
                arbiter.clock(reset, request, weight)
            edge += 1
    return samples


def format_sample(sample: Sample) -> str:
    """Monitor text for one sample."""
    stamp = "0 s" if sample.time_ns == 0 else f"{sample.time_ns} ns"
    return (
        f"Time: {stamp}\n"
        f"  Reset: {int(sample.reset)}\n"
        f"  Request: 0x{sample.request:x}\n"
        f"  Weight: 0x{sample.weight:x}\n"
        f"  Grant: 0x{sample.grant:x}\n"
        f"{'-' * 40}\n"
    )


def write_vcd(samples: Iterable[Sample], stream: TextIO, channels: int = 4, width: int = 4) -> None:
    """Trace clk, reset, request, weight and grant for ``samples``."""
    samples = list(samples)
    writer = VcdWriter(stream, 1)
    for name, bits in (
        ("clk", 1),
        ("reset", 1),
        ("request", channels),
        ("weight", channels * width),
        ("grant", channels),
    ):
        writer.add_signal(name, bits)
    half = (samples[1].time_ns - samples[0].time_ns) // 2 if len(samples) > 1 else 0
    for sample in samples:
        writer.change(sample.time_ns, "clk", 1)
        writer.change(sample.time_ns, "reset", int(sample.reset))
        writer.change(sample.time_ns, "request", sample.request)
        writer.change(sample.time_ns, "weight", sample.weight)
        writer.change(sample.time_ns, "grant", sample.grant)
        if half > 0:
            writer.change(sample.time_ns + half, "clk", 0)
    writer.close()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="wrrarbiter", description="Run the weighted round-robin arbiter testbench."
    )
    parser.add_argument("--vcd", default="dump.vcd", help="trace file to write")
    args = parser.parse_args(argv)
    samples = run_testbench()
    for sample in samples:
        sys.stdout.write(format_sample(sample))
    with open(args.vcd, "w", encoding="ascii") as handle:
        write_vcd(samples, handle)
    return 0


if __name__ == "__main__":
    sys.exit(main())
# wrrarbiter

A cycle-accurate Python model of a weighted round-robin arbiter. Each
rising clock edge is one call to `clock()`; the model keeps the same
registers and state machines that the hardware has.

## Parts

- `wrrarbiter.decoder`: `one_hot_to_index` (index of the lowest set
  bit, truncated to the selector width), `unpack_weights` (splits a
  packed bus into per-channel fields, channel 0 lowest) and `Mux`,
  whose `select()` picks one channel's weight from a packed weight bus
  using a one-hot selector.
- `wrrarbiter.ngprc`: `NextGrantPrecalculator` (states in
  `PrecalcState`). It rotates the last grant left by one bit, builds a
  priority mask from it and masks the request lines to find the
  channels that come next in round-robin order; when none of them is
  requesting, all requests are candidates.
- `wrrarbiter.grant`: `GrantModule` (states in `GrantState`: `IDLE`,
  `GRANT`, `COUNT`). It picks the lowest-numbered channel out of the
  precalculated set, asserts its grant, loads that channel's weight
  into a counter and holds the grant until the counter has run down to
  zero.
- `wrrarbiter.arbiter`: `RoundRobinArbiter`, which wires the two
  together. `clock(reset, request, weight)` applies one rising edge and
  returns the new grant; `grant()` returns the current grant and the
  `next_grant` property the precalculated candidates.
- `wrrarbiter.testbench`: the reference stimulus
  (`stimulus_schedule`), `run_testbench` which drives the arbiter and
  returns one `Sample` per rising edge, `format_sample` for the
  per-cycle monitor text, and `VcdWriter` / `write_vcd` for waveform
  output.

## Using the model

```python
from wrrarbiter.arbiter import RoundRobinArbiter

arb = RoundRobinArbiter(channels=4, width=4, sel_width=2)
arb.clock(reset=True, request=0, weight=0)
for _ in range(10):
    arb.clock(reset=False, request=0xF, weight=0x1312)
    print(hex(arb.grant()))
```

Weights are packed with channel 0 in the least significant `width` bits.

## Running the testbench

```
wrrarbiter-tb
```

This runs the reference stimulus (a short reset, all four channels
requesting with weight patterns `0x1111` and then `0x1312`, then no
requests) on a 10 ns clock and prints the time, reset, request, weight
and grant values at every rising clock edge. It also writes a VCD
waveform of clk, reset, request, weight and grant that any waveform
viewer can open; the file is `dump.vcd` unless `--vcd PATH` names
another. `wrrarbiter-tb --help` lists the options.

## What it does not do

The package is a fixed model of this one arbiter, stepped one rising
edge at a time. It is not a general event-driven simulator: there is no
way to describe other circuits, no delta cycles and no asynchronous
events beyond the reset handling built into `RoundRobinArbiter`. The
testbench command always runs the built-in stimulus; custom schedules
are run from Python through `run_testbench`.

## Tests

```
pip install -e ".[test]"
pytest
```
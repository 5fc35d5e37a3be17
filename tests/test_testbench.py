import io

import pytest

from wrrarbiter.testbench import (
    Sample,
    VcdWriter,
    format_sample,
    main,
    run_testbench,
    stimulus_schedule,
    write_vcd,
)


def test_schedule_matches_stimulus():
    schedule = stimulus_schedule()
    assert schedule[0][0] is True
    assert [step[3] for step in schedule] == [2, 200, 200, 100, 100]
    assert schedule[1][1:3] == (0xF, 0x1111)
    assert schedule[2][1:3] == (0xF, 0x1312)


def test_samples_spaced_by_period():
    samples = run_testbench(period_ns=10)
    assert samples[0].time_ns == 0
    assert all(b.time_ns - a.time_ns == 10 for a, b in zip(samples, samples[1:]))


def test_samples_start_in_reset_and_end_idle():
    samples = run_testbench()
    assert samples[0].reset is True
    assert samples[0].grant == 0
    assert samples[-1].request == 0
    assert samples[-1].grant == 0


def test_every_channel_granted_and_one_hot():
    grants = {sample.grant for sample in run_testbench()}
    assert grants == {0, 0b0001, 0b0010, 0b0100, 0b1000}


def test_odd_period_rejected():
    with pytest.raises(ValueError):
        run_testbench(period_ns=7)


def test_empty_step_rejected():
    with pytest.raises(ValueError):
        run_testbench([(True, 0, 0, 0)])


def test_format_sample_lines():
    text = format_sample(Sample(10, False, 0xF, 0x1312, 0x2))
    lines = text.splitlines()
    assert lines[0] == "Time: 10 ns"
    assert lines[1] == "  Reset: 0"
    assert lines[2] == "  Request: 0xf"
    assert lines[3] == "  Weight: 0x1312"
    assert lines[4] == "  Grant: 0x2"
    assert lines[5] == "-" * 40


def test_vcd_writer_output():
    stream = io.StringIO()
    writer = VcdWriter(stream, 1)
    writer.add_signal("clk", 1)
    writer.add_signal("request", 4)
    writer.change(0, "clk", 1)
    writer.change(0, "request", 0xF)
    writer.change(5, "clk", 0)
    writer.change(10, "request", 0xF)
    writer.close()
    text = stream.getvalue()
    assert "$timescale 1 ns $end" in text
    assert "$enddefinitions $end" in text
    assert text.count("b1111 ") == 1
    assert "#0\n" in text and "#5\n" in text
    assert "#10\n" not in text


def test_vcd_writer_errors():
    writer = VcdWriter(io.StringIO(), 1)
    writer.add_signal("clk", 1)
    writer.change(10, "clk", 1)
    with pytest.raises(ValueError):
        writer.change(5, "clk", 0)
    with pytest.raises(KeyError):
        writer.change(20, "missing", 1)
    with pytest.raises(ValueError):
        writer.add_signal("late", 1)


def test_write_vcd_declares_traced_signals():
    stream = io.StringIO()
    write_vcd(run_testbench(), stream, 4, 4)
    text = stream.getvalue()
    for name in ("clk", "reset", "request", "weight", "grant"):
        assert f" {name} $end" in text
    assert "$var wire 16 " in text


def test_main_prints_and_traces(tmp_path, capsys):
    path = tmp_path / "dump.vcd"
    assert main(["--vcd", str(path)]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Time: 0 s\n")
    assert "$enddefinitions $end" in path.read_text(encoding="ascii")
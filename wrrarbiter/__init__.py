"""Cycle-accurate model of a weighted round-robin arbiter, with a testbench and VCD output."""

__version__ = "0.1.0"
__all__ = ["decoder", "ngprc", "grant", "arbiter", "testbench"]
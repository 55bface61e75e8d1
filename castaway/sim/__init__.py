"""
Determinism-friendly simulation helpers.

This package intentionally contains *small* primitives (RNG, day clock, tunables and
data contracts) shared by world generation and the survival simulation.
"""

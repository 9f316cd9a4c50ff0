"""Test package for Wavelength Co-op.

Core tests (geometry, scoring, deck, round state machine, results) are pure
and need no display. The UI tests run headlessly using pygame's dummy video
driver. Run ``pytest`` from the project root.
"""

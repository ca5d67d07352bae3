"""Tests for the ICL Engine X9 codec, validator and configuration."""

# Reference Check Detail line with known field values
GOLDEN_CHECK_DETAIL = "25      123456789 031300012             555888100001000001              GD1Y030B"

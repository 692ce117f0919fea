"""Models for probe data structures."""

from .probe_result import ProbeResult, RssSample, StatSummary

__all__ = ["ProbeResult", "RssSample", "StatSummary"]

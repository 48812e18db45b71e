"""
Resampling backends.

Available backends:
    CPUResampleBackend: Balanced bootstrap / bootknife index generation
    CPUBootBackend: Statistic replicates over a balanced resample
    CPUTwoSampleBackend: Two-sample bootstrap differences
"""

from pybootknife.montecarlo.backends.cpu import (
    CPUBootBackend,
    CPUResampleBackend,
    CPUTwoSampleBackend,
)

__all__ = [
    "CPUResampleBackend",
    "CPUBootBackend",
    "CPUTwoSampleBackend",
]

"""
pybootknife: balanced bootstrap and bootknife resampling for Python.

Reproducible resampling primitives for bootstrap inference. The core is
a balanced resample generator: every observation appears across all
resamples exactly as often as its target weight, optionally with one
observation left out of each resample (bootknife).

Submodules:
    montecarlo: resample(), boot(), boot_two_sample()
    core: exceptions, validation, result envelope
"""

__version__ = "0.1.0"

from pybootknife import montecarlo
from pybootknife.montecarlo import resample, boot, boot_two_sample

__all__ = [
    "__version__",
    "montecarlo",
    "resample",
    "boot",
    "boot_two_sample",
]

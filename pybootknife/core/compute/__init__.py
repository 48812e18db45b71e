"""Compute utilities shared by backends."""

from pybootknife.core.compute.timing import Timer

__all__ = ["Timer"]

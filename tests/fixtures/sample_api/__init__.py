"""
Sample API documented by the end-to-end tests.

Re-exports from ``core`` and ``ops``; ``Array`` is a second name for
``Tensor``. ``DType`` is not exported and is only reachable through
signatures.
"""

from .core import Device, Shape, Tensor
from .ops import DEFAULTS, MAX_RANK, VERSION, Reducer, add, negate, norm, zeros

Array = Tensor

__all__ = [
    "Tensor",
    "Array",
    "Shape",
    "Device",
    "add",
    "zeros",
    "norm",
    "negate",
    "VERSION",
    "DEFAULTS",
    "MAX_RANK",
    "Reducer",
]

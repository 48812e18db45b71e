"""
Core protocols for pybootknife.

Structural interface that every computational backend satisfies. We use
Protocol (structural typing) rather than ABC (nominal typing) so a
backend needs no base class, only the right shape.
"""

from typing import Protocol, TypeVar, runtime_checkable

P = TypeVar('P', covariant=True)  # Parameter payload type
D = TypeVar('D', contravariant=True)  # Design type


@runtime_checkable
class Backend(Protocol[D, P]):
    """
    Protocol for computational backends.

    A backend takes a validated, frozen design and produces a Result
    envelope. Backends hold no state between calls; the only state that
    outlives a call is the random generator referenced by the design.

    Type Parameters:
        D: The design type this backend accepts
        P: The parameter payload type this backend produces
    """

    @property
    def name(self) -> str:
        """
        Backend identifier.

        Convention: '{device}_{algorithm}'
        Examples: 'cpu_balanced', 'cpu_boot', 'cpu_two_sample'
        """
        ...

    def solve(self, design: D) -> 'Result[P]':
        """
        Execute the computation.

        Raises:
            ValidationError: If design is invalid for this backend
        """
        ...

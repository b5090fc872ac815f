"""Error classes for native-properties.

This module provides:
- NativePropertiesError: Base exception class for all errors
- UnsupportedPlatformError: The operating system is not recognised
- IndeterminateArchitectureError: Unknown architecture without a bit-width hint
- CascadeError, CascadeNotFoundError, CascadeDataError: Cascade data exceptions
"""


class NativePropertiesError(Exception):
    """Base exception for all native-properties errors."""

    pass


class UnsupportedPlatformError(NativePropertiesError):
    """Raised when the OS identifier matches no supported family."""

    def __init__(self, system: str) -> None:
        """Initialise the error with the raw OS identifier.

        Args:
            system: The OS identifier as reported by the host (``uname -s``)

        """
        super().__init__(f"Unsupported system type: {system}")
        self.system = system


class IndeterminateArchitectureError(NativePropertiesError):
    """Raised when an unknown architecture has no usable bit-width hint."""

    def __init__(self, machine: str) -> None:
        """Initialise the error with the raw machine string.

        Args:
            machine: The machine architecture as reported by the host (``uname -m``)

        """
        super().__init__(
            f"Unsupported machine type: {machine} "
            "(no 32/64-bit hint available to choose a generic build)"
        )
        self.machine = machine


class CascadeError(NativePropertiesError):
    """Base exception for cascade-related errors."""

    pass


class CascadeNotFoundError(CascadeError):
    """Raised when no cascade is registered for an architecture."""

    pass


class CascadeDataError(CascadeError):
    """Raised when cascade data cannot be loaded or validated."""

    pass

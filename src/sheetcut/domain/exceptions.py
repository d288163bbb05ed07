"""Domain exceptions for the sheet cutting engine."""


class SheetConfigurationError(ValueError):
    """Raised when sheet settings cannot produce a usable placement area.

    This is the only fatal outcome of an optimization run. It is raised
    before any placement is attempted, so callers never receive a partial
    layout together with this error.
    """

    pass


class PackingInvariantError(AssertionError):
    """Raised when the packer's internal bookkeeping becomes inconsistent.

    Indicates a programming error (for example a scored region that can no
    longer hold the piece it was scored for), never a property of the input.
    """

    pass

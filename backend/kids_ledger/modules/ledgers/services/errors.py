class LedgerValidationError(ValueError):
    pass


class NeighborNotFoundError(LookupError):
    pass


class ParentNotFoundError(LookupError):
    pass


class CreationFailureError(RuntimeError):
    pass

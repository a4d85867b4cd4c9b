"""Service-layer exceptions."""


class FactoryError(Exception):
    """Raised when a runtime entity or item cannot be created."""


class SaveLoadError(Exception):
    """Raised when a saved run cannot be serialized or rehydrated."""


class AuthenticationError(Exception):
    """Raised when a persistence operation is attempted without a user identity."""


class PersistenceError(Exception):
    """Raised when the run store fails to read or write a run."""


class EditingLockedError(Exception):
    """Raised when the program or inventory is edited while editing is locked."""


class TurnInProgressError(Exception):
    """Raised when a turn is requested while another one is still running."""


class ProgressionError(Exception):
    """Raised when a progression action is not valid in the current state."""

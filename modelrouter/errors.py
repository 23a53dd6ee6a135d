"""Exceptions raised by the routing core."""


class RouterError(Exception):
    """Base class for all modelrouter errors."""


class CatalogError(RouterError, ValueError):
    """The model catalog is malformed. Raised at load time, never per request."""


class ConfigError(RouterError):
    """The configuration file could not be read or parsed."""


class CalibrationError(RouterError):
    """Calibration could not produce a threshold."""


class NoSuitableModelError(RouterError, LookupError):
    """No model anywhere in the catalog can hold the requested context."""

    def __init__(self, context_size: int):
        self.context_size = context_size
        super().__init__(
            f"No suitable model found for the current request "
            f"(context size {context_size})"
        )

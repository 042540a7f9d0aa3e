class VelotypeError(Exception):
    """Base class for errors raised by the engine."""


class ConfigurationError(VelotypeError, ValueError):
    pass


class StoreError(VelotypeError):
    pass

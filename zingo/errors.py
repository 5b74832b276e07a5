"""Exception types shared across the package."""


class ZingoError(Exception):
    """Base class for all Zingo errors."""
    pass


class SchemaError(ZingoError):
    """Raised when a persisted document cannot be decoded into an entity."""
    pass


class ConfigError(ZingoError):
    """Raised for configuration values that cannot be used."""
    pass

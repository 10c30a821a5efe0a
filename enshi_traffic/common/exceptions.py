class TrafficMetricsError(Exception):
    """Base exception for all traffic metrics errors."""
    pass

class InvalidInputError(TrafficMetricsError):
    """Raised when an input range or domain value is malformed."""
    pass

class EntityNotFoundError(TrafficMetricsError):
    """Raised when the repository does not know a section, point or region."""
    pass

class ConfigurationError(TrafficMetricsError):
    """Raised when configuration is invalid."""
    pass

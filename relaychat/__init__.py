"""A TCP chat relay server with Go-style channels and asynchronous loggers."""

__version__ = "0.1.0"
__all__ = ["client_manager", "gochan", "logger", "main"]
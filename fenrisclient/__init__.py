"""Client for a remote file service: command prompt, request building and response formatting."""

__version__ = "0.1.0"

__all__ = [
    "client",
    "colors",
    "interface",
    "messages",
    "request_manager",
    "response_manager",
]
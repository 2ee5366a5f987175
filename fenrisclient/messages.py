"""Request and response messages exchanged with the file server."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional


class RequestType(IntEnum):
    """Operations a client can ask the server to perform."""

    PING = 0
    CREATE_FILE = 1
    READ_FILE = 2
    WRITE_FILE = 3
    APPEND_FILE = 4
    DELETE_FILE = 5
    INFO_FILE = 6
    CREATE_DIR = 7
    LIST_DIR = 8
    CHANGE_DIR = 9
    DELETE_DIR = 10
    TERMINATE = 11


class ResponseType(IntEnum):
    """Kinds of reply the server sends back."""

    PONG = 0
    FILE_INFO = 1
    FILE_CONTENT = 2
    DIR_LISTING = 3
    SUCCESS = 4
    ERROR = 5
    TERMINATED = 6


@dataclass
class Request:
    """A single command sent to the server."""

    command: RequestType = RequestType.PING
    filename: str = ""
    data: str = ""


@dataclass
class FileInfo:
    """Metadata about a file or directory on the server."""

    name: str = ""
    size: int = 0
    modified_time: int = 0
    is_directory: bool = False
    permissions: int = 0


@dataclass
class DirectoryListing:
    """Entries of a directory on the server."""

    entries: list[FileInfo] = field(default_factory=list)


@dataclass
class Response:
    """A reply from the server."""

    type: ResponseType = ResponseType.SUCCESS
    success: bool = False
    data: str = ""
    error_message: str = ""
    file_info: Optional[FileInfo] = None
    directory_listing: Optional[DirectoryListing] = None

    def has_file_info(self) -> bool:
        """Return whether the response carries file metadata."""
        return self.file_info is not None

    def has_directory_listing(self) -> bool:
        """Return whether the response carries a directory listing."""
        return self.directory_listing is not None
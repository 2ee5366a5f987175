"""Turn user command words into server requests."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from fenrisclient.messages import Request, RequestType


class RequestError(ValueError):
    """Raised when a command cannot be turned into a request."""


_COMMANDS: dict[str, RequestType] = {
    "ping": RequestType.PING,
    "create": RequestType.CREATE_FILE,
    "cat": RequestType.READ_FILE,
    "write": RequestType.WRITE_FILE,
    "append": RequestType.APPEND_FILE,
    "rm": RequestType.DELETE_FILE,
    "info": RequestType.INFO_FILE,
    "mkdir": RequestType.CREATE_DIR,
    "ls": RequestType.LIST_DIR,
    "cd": RequestType.CHANGE_DIR,
    "rmdir": RequestType.DELETE_DIR,
    "terminate": RequestType.TERMINATE,
}

# Commands that take a single path argument, with the message used when it is missing.
_PATH_COMMANDS: dict[RequestType, str] = {
    RequestType.DELETE_FILE: "delete_file command requires a filename",
    RequestType.INFO_FILE: "info command requires a filename",
    RequestType.CREATE_DIR: "mkdir command requires a directory name",
    RequestType.CHANGE_DIR: "cd command requires a directory name",
    RequestType.DELETE_DIR: "rmdir command requires a directory name",
}


class RequestManager:
    """Builds requests from tokenised user commands."""

    def __init__(self, logger_name: str = "RequestManager") -> None:
        self._logger = logging.getLogger(logger_name)

    def generate_request(self, args: Sequence[str]) -> Request:
        """Build the request for a command; raise RequestError if it is invalid."""
        if not args:
            self._fail("no command provided")

        cmd = args[0]
        command = _COMMANDS.get(cmd)
        if command is None:
            self._fail(f"unknown command '{cmd}'")

        if command in (RequestType.PING, RequestType.TERMINATE):
            return Request(command=command)

        if command is RequestType.CREATE_FILE:
            if len(args) < 2:
                self._fail("create command requires a filename")
            return self.create_file_request(args, 1)

        if command is RequestType.READ_FILE:
            if len(args) < 2:
                self._fail("read command requires a filename")
            return self.read_file_request(args, 1)

        if command is RequestType.WRITE_FILE:
            if len(args) < 3:
                self._fail(
                    "write command requires a filename and content (or -f <filepath>)"
                )
            return self.write_file_request(args, 1)

        if command is RequestType.APPEND_FILE:
            if len(args) < 3:
                self._fail(
                    "append command requires a filename and content (or -f <filepath>)"
                )
            return self.append_file_request(args, 1)

        if command is RequestType.LIST_DIR:
            target = args[1] if len(args) > 1 else "."
            return Request(command=command, filename=target)

        if len(args) < 2:
            self._fail(_PATH_COMMANDS[command])
        return Request(command=command, filename=args[1])

    def create_file_request(self, args: Sequence[str], start_idx: int) -> Request:
        """Build a CREATE_FILE request; content is optional."""
        return self._content_request(RequestType.CREATE_FILE, "create", args, start_idx)

    def read_file_request(self, args: Sequence[str], start_idx: int) -> Request:
        """Build a READ_FILE request."""
        return Request(command=RequestType.READ_FILE, filename=args[start_idx])

    def write_file_request(self, args: Sequence[str], start_idx: int) -> Request:
        """Build a WRITE_FILE request."""
        return self._content_request(RequestType.WRITE_FILE, "write", args, start_idx)

    def append_file_request(self, args: Sequence[str], start_idx: int) -> Request:
        """Build an APPEND_FILE request."""
        return self._content_request(RequestType.APPEND_FILE, "append", args, start_idx)

    def _content_request(
        self, command: RequestType, verb: str, args: Sequence[str], start_idx: int
    ) -> Request:
        request = Request(command=command, filename=args[start_idx])
        rest = list(args[start_idx + 1:])
        if not rest:
            return request
        if rest[0] == "-f" and len(rest) > 1:
            source = Path(rest[1])
            try:
                raw = source.read_bytes()
            except OSError:
                self._logger.warning(
                    "could not open file '%s' for %s content", rest[1], verb
                )
            else:
                request.data = raw.decode("utf-8", errors="surrogateescape")
        else:
            request.data = " ".join(rest)
        return request

    def _fail(self, message: str) -> None:
        self._logger.error(message)
        raise RequestError(message)
"""Turn server responses into lines of text for display."""

from __future__ import annotations

import logging
import time
from typing import Callable

from fenrisclient import colors
from fenrisclient.messages import FileInfo, Response, ResponseType

_KB = 1024.0
_MB = _KB * 1024.0
_GB = _MB * 1024.0
_TB = _GB * 1024.0

_BINARY_SAMPLE_SIZE = 1024
_TIME_COLUMN_WIDTH = 20


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8", errors="surrogateescape"))


def _looks_binary(text: str) -> bool:
    return any(
        ch == "\0" or (ord(ch) < 32 and ch not in "\n\r\t")
        for ch in text[:_BINARY_SAMPLE_SIZE]
    )


def _split_lines(text: str) -> list[str]:
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return lines


class ResponseManager:
    """Formats responses as display lines, the first being the status."""

    def __init__(self, logger_name: str = "ResponseManager") -> None:
        self._logger = logging.getLogger(logger_name)
        self._handlers: dict[ResponseType, Callable[[Response], list[str]]] = {
            ResponseType.PONG: self._pong_lines,
            ResponseType.FILE_INFO: self._file_info_lines,
            ResponseType.FILE_CONTENT: self._file_content_lines,
            ResponseType.DIR_LISTING: self._directory_listing_lines,
            ResponseType.SUCCESS: self._success_lines,
            ResponseType.ERROR: self._error_lines,
            ResponseType.TERMINATED: self._terminated_lines,
        }
        self._logger.debug("ResponseManager initialized")

    def handle_response(self, response: Response) -> list[str]:
        """Return the status line followed by the formatted body of the response."""
        self._logger.debug("Handling response of type: %d", int(response.type))
        status = colors.success("Success") if response.success else colors.error("Error")
        result = [status]

        handler = self._handlers.get(response.type)
        if handler is None:
            self._logger.warning("Received unknown response type: %s", response.type)
            result.append("Unknown response type")
        else:
            result.extend(handler(response))

        self._logger.debug(
            "Response handling complete, generated %d result lines", len(result)
        )
        return result

    def _pong_lines(self, response: Response) -> list[str]:
        lines = [colors.success("Server is alive")]
        if response.data:
            self._logger.debug("PONG response includes message: %s", response.data)
            lines.append(colors.info("Message: " + response.data))
        return lines

    def _file_info_lines(self, response: Response) -> list[str]:
        if not response.has_file_info():
            self._logger.warning("Received FILE_INFO response without file_info field")
            return ["Error: File info missing in response"]

        info: FileInfo = response.file_info  # type: ignore[assignment]
        self._logger.debug("Processing file info for: %s", info.name)
        size_str = self.format_file_size(info.size)
        time_str = self.format_timestamp(info.modified_time)

        if colors.colors_enabled():
            bold = lambda label: colors.BOLD + label + colors.RESET  # noqa: E731
            kind = (
                colors.BLUE + "Directory" + colors.RESET
                if info.is_directory
                else colors.GREEN + "File" + colors.RESET
            )
            lines = [
                bold("File: ") + colors.CYAN + info.name + colors.RESET,
                bold("Size: ") + size_str,
                bold("Modified: ") + time_str,
                bold("Type: ") + kind,
            ]
            if info.permissions:
                lines.append(bold("Permissions: ") + self.format_permissions(info.permissions))
        else:
            lines = [
                "File: " + info.name,
                "Size: " + size_str,
                "Modified: " + time_str,
                "Type: " + ("Directory" if info.is_directory else "File"),
            ]
            if info.permissions:
                lines.append("Permissions: " + self.format_permissions(info.permissions))

        self._logger.debug("File info formatted successfully")
        return lines

    def _file_content_lines(self, response: Response) -> list[str]:
        data = response.data
        if not data:
            self._logger.debug("File content is empty")
            if colors.colors_enabled():
                return [colors.YELLOW + "(Empty file)" + colors.RESET]
            return ["(Empty file)"]

        size = _byte_length(data)
        if _looks_binary(data):
            self._logger.debug(
                "File content appears to be binary data, size: %d bytes", size
            )
            text = "(Binary data, " + self.format_file_size(size) + ")"
            if colors.colors_enabled():
                return [colors.MAGENTA + text + colors.RESET]
            return [text]

        self._logger.debug("Processing text file content, size: %d bytes", size)
        lines = _split_lines(data)
        self._logger.debug("Processed %d lines of text content", len(lines))
        return lines

    def _directory_listing_lines(self, response: Response) -> list[str]:
        if not response.has_directory_listing():
            if response.data:
                self._logger.warning(
                    "Directory listing field missing, using legacy data field"
                )
                return [response.data]
            self._logger.error(
                "Directory listing response missing both directory_listing and data fields"
            )
            return ["Error: Directory listing missing in response"]

        entries = response.directory_listing.entries  # type: ignore[union-attr]
        self._logger.debug("Processing directory listing with %d entries", len(entries))

        use_colors = colors.colors_enabled()
        if not entries:
            self._logger.debug("Directory is empty")
            if use_colors:
                return [colors.YELLOW + "(Empty directory)" + colors.RESET]
            return ["(Empty directory)"]

        name_width = max(len(entry.name) for entry in entries) + 2
        size_width = max(len(self.format_file_size(entry.size)) for entry in entries) + 2

        header_text = (
            "Name".ljust(name_width)
            + "Size".ljust(size_width)
            + "Modified".ljust(_TIME_COLUMN_WIDTH)
            + "Type"
        )
        if use_colors:
            header = colors.BOLD + header_text + colors.RESET
            separator = colors.CYAN + "-" * len(header_text) + colors.RESET
        else:
            header = header_text
            separator = "-" * len(header_text)
        lines = [header, separator]

        for entry in entries:
            size_col = self.format_file_size(entry.size).ljust(size_width)
            time_col = self.format_timestamp(entry.modified_time).ljust(_TIME_COLUMN_WIDTH)
            if use_colors:
                tint = colors.BLUE if entry.is_directory else colors.GREEN
                kind = "Directory" if entry.is_directory else "File"
                lines.append(
                    tint
                    + entry.name.ljust(name_width)
                    + colors.RESET
                    + size_col
                    + time_col
                    + tint
                    + kind
                    + colors.RESET
                )
            else:
                lines.append(
                    entry.name.ljust(name_width)
                    + size_col
                    + time_col
                    + ("Directory" if entry.is_directory else "File")
                )

        self._logger.debug("Directory listing formatted into %d rows", len(entries) + 2)
        return lines

    def _success_lines(self, response: Response) -> list[str]:
        if response.data:
            self._logger.debug("Success response includes message: %s", response.data)
            message = response.data
        else:
            self._logger.debug("Success response with no message")
            message = "Operation completed successfully"
        return [colors.success(message)]

    def _error_lines(self, response: Response) -> list[str]:
        if response.error_message:
            self._logger.warning("Error response: %s", response.error_message)
            return [colors.error("Error: " + response.error_message)]
        if response.data:
            self._logger.warning("Error response (in data field): %s", response.data)
            return [colors.error("Error: " + response.data)]
        self._logger.warning("Error response with no error message")
        return [colors.error("Unknown error occurred")]

    def _terminated_lines(self, response: Response) -> list[str]:
        self._logger.info("Connection termination acknowledged by server")
        lines = [colors.warning("Server connection terminated")]
        if response.data:
            self._logger.debug("Termination reason: %s", response.data)
            lines.append(colors.info("Reason: " + response.data))
        return lines

    def format_file_size(self, size_bytes: int) -> str:
        """Render a byte count with a binary unit, coloured by magnitude."""
        if size_bytes < _KB:
            text = f"{size_bytes} B"
        elif size_bytes < _MB:
            text = f"{size_bytes / _KB:.2f} KB"
        elif size_bytes < _GB:
            text = f"{size_bytes / _MB:.2f} MB"
        elif size_bytes < _TB:
            text = f"{size_bytes / _GB:.2f} GB"
        else:
            text = f"{size_bytes / _TB:.2f} TB"

        if not colors.colors_enabled():
            return text
        if size_bytes < _MB:
            tint = colors.GREEN
        elif size_bytes < _GB:
            tint = colors.YELLOW
        elif size_bytes < _TB:
            tint = colors.MAGENTA
        else:
            tint = colors.RED
        return tint + text + colors.RESET

    def format_timestamp(self, timestamp: int) -> str:
        """Render a Unix timestamp as local time, or 'Invalid timestamp'."""
        try:
            text = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(timestamp))
        except (OverflowError, OSError, ValueError) as exc:
            self._logger.warning("Failed to convert timestamp %s: %s", timestamp, exc)
            if colors.colors_enabled():
                return colors.RED + "Invalid timestamp" + colors.RESET
            return "Invalid timestamp"
        if colors.colors_enabled():
            return colors.CYAN + text + colors.RESET
        return text

    def format_permissions(self, permissions: int) -> str:
        """Render Unix permission bits as rwxrwxrwx followed by the octal value."""
        triples = ((0o400, 0o200, 0o100), (0o040, 0o020, 0o010), (0o004, 0o002, 0o001))
        octal = format(permissions, "o")

        if not colors.colors_enabled():
            flags = "".join(
                letter if permissions & bit else "-"
                for bits in triples
                for letter, bit in zip("rwx", bits)
            )
            return f"{flags} ({octal})"

        tints = (colors.GREEN, colors.YELLOW, colors.CYAN)
        groups = []
        for tint, bits in zip(tints, triples):
            chars = "".join(
                (tint + letter) if permissions & bit else (colors.RED + "-")
                for letter, bit in zip("rwx", bits)
            )
            groups.append(chars + colors.RESET)
        return "".join(groups) + f" ({colors.YELLOW}{octal}{colors.RESET})"
"""Interactive terminal interface for the file client."""

from __future__ import annotations

import re
import sys
from typing import Callable, Optional, Sequence, TextIO

from fenrisclient import colors

_DEFAULT_IP = "127.0.0.1"
_DEFAULT_PORT = "7777"

_IPV4_OCTET = r"(25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)"
_IPV4_PATTERN = re.compile(r"\.".join([_IPV4_OCTET] * 4))
_HOSTNAME_PATTERN = re.compile(
    r"([a-zA-Z0-9]([a-zA-Z0-9\-]{0,61}[a-zA-Z0-9])?\.)+[a-zA-Z]{2,}"
)

_VALID_COMMANDS = frozenset(
    {
        "cd",
        "ls",
        "cat",
        "upload",
        "ping",
        "write",
        "append",
        "rm",
        "info",
        "mkdir",
        "rmdir",
        "help",
        "exit",
    }
)

_COMMAND_DESCRIPTIONS: dict[str, str] = {
    "cd": "Change the current directory (cd <directory>)",
    "ls": "List contents of a directory (ls [directory])",
    "cat": "Display contents of a file (cat <file>)",
    "upload": "Upload a file to the server (upload <local_file>)",
    "ping": "Check if server is responsive (ping)",
    "write": "Create a new file with content (write <file> <content>)",
    "rm": "Remove a file (rm <file>)",
    "info": "Display file information (info <file>)",
    "mkdir": "Create a new directory (mkdir <directory>)",
    "rmdir": "Remove a directory (rmdir <directory>)",
    "help": "Display available commands (help)",
    "exit": "Exit the client (exit)",
}

# command -> (min_args, max_args)
_COMMAND_ARGS: dict[str, tuple[int, int]] = {
    "cd": (1, 1),
    "ls": (0, 1),
    "cat": (1, 1),
    "upload": (1, 1),
    "ping": (0, 0),
    "write": (2, 2),
    "append": (2, 2),
    "rm": (1, 1),
    "info": (1, 1),
    "mkdir": (1, 1),
    "rmdir": (1, 1),
    "help": (0, 0),
    "exit": (0, 0),
}


class TUI:
    """Reads commands and server details from the user and shows results."""

    def __init__(
        self,
        input_func: Optional[Callable[[], str]] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self._input = input_func if input_func is not None else input
        self._out = output if output is not None else sys.stdout
        self._curr_dir = "/"

    def _write(self, text: str) -> None:
        self._out.write(text)
        self._out.flush()

    def _println(self, text: str) -> None:
        self._write(text + "\n")

    def _read_line(self) -> Optional[str]:
        try:
            return self._input()
        except EOFError:
            return None

    def get_server_ip(self) -> str:
        """Ask for the server address, falling back to localhost when invalid."""
        self._write(colors.BOLD + colors.CYAN + "Enter server IP address: " + colors.RESET)
        ip = self._read_line() or ""

        if ip == "localhost":
            return _DEFAULT_IP

        if not ip:
            ip = _DEFAULT_IP
            self._println(colors.info("Using default IP: " + ip))
        elif not (_IPV4_PATTERN.fullmatch(ip) or _HOSTNAME_PATTERN.fullmatch(ip)):
            self._println(
                colors.warning(
                    "Invalid IP address or hostname format. Using default instead."
                )
            )
            ip = _DEFAULT_IP
            self._println(colors.info("Using default IP: " + ip))
        return ip

    def get_port_number(self) -> str:
        """Ask for the server port, falling back to 7777 when invalid."""
        self._write(colors.BOLD + colors.CYAN + "Enter server port number: " + colors.RESET)
        port = self._read_line() or ""

        valid = (
            bool(port)
            and all(ch in "0123456789" for ch in port)
            and 1 <= int(port) <= 65535
        )
        if not valid:
            self._println(colors.warning("Invalid port number. Using default port 7777."))
            return _DEFAULT_PORT
        return port

    def get_command(self) -> list[str]:
        """Prompt for a command and return its words, or [] when nothing should run."""
        self._write(
            colors.CYAN + "fenris:" + colors.GREEN + self._curr_dir
            + colors.CYAN + "> " + colors.RESET
        )
        line = self._read_line()
        if line is None:
            return ["exit"]

        parts = line.split()
        if not parts:
            return []
        if not self.validate_command(parts):
            return []
        if parts[0] == "help":
            self.display_help()
            return []
        return parts

    def validate_command(self, command_parts: Sequence[str]) -> bool:
        """Check that the command is known and has an allowed number of arguments."""
        if not command_parts:
            return False

        cmd = command_parts[0]
        arg_count = len(command_parts) - 1

        if cmd not in _VALID_COMMANDS:
            self._println(colors.error("Invalid command: " + cmd))
            return False

        limits = _COMMAND_ARGS.get(cmd)
        if limits is not None:
            min_args, max_args = limits
            if not min_args <= arg_count <= max_args:
                if min_args == max_args:
                    plural = "s" if min_args != 1 else ""
                    message = f"Error: {cmd} requires exactly {min_args} argument{plural}"
                else:
                    message = (
                        f"Error: {cmd} requires between {min_args} and {max_args} arguments"
                    )
                self._println(colors.error(message))
                return False
        return True

    def display_result(self, success: bool, result: str) -> None:
        """Print a result line, colouring it unless it is already coloured."""
        already_coloured = "\033[" in result
        if success:
            if not result:
                self._println(colors.success("Command completed successfully."))
            elif already_coloured:
                self._println(result)
            else:
                self._println(colors.info(result))
        elif already_coloured:
            self._println(result)
        else:
            self._println(colors.error(result))

    def update_current_directory(self, new_dir: str) -> None:
        """Set the directory shown in the prompt, normalising its slashes."""
        curr = new_dir
        if not curr.startswith("/"):
            curr = "/" + curr
        if len(curr) > 1 and curr.endswith("/"):
            curr = curr[:-1]
        self._curr_dir = curr

    def get_current_directory(self) -> str:
        """Return the directory shown in the prompt."""
        return self._curr_dir

    def display_help(self) -> None:
        """Print the list of available commands."""
        lines = [
            "",
            colors.BOLD + colors.MAGENTA + "Available Commands:" + colors.RESET,
            colors.CYAN + "==================" + colors.RESET,
        ]
        width = max(len(cmd) for cmd in _COMMAND_DESCRIPTIONS) + 4

        for cmd in sorted(_COMMAND_DESCRIPTIONS):
            desc = _COMMAND_DESCRIPTIONS[cmd]
            arg_part = ""
            pos = desc.find("(")
            if pos != -1 and desc.find(")", pos) != -1:
                arg_part = desc[pos:]
                desc = desc[: pos - 1]
            line = colors.BOLD + colors.GREEN + cmd.ljust(width) + colors.RESET + desc
            if arg_part:
                line += " " + colors.YELLOW + arg_part + colors.RESET
            lines.append(line)

        self._write("\n".join(lines) + "\n\n")
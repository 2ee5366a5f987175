"""The interactive client loop tying the interface to a server connection."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Optional, Sequence

from fenrisclient import colors
from fenrisclient.interface import TUI
from fenrisclient.request_manager import RequestError, RequestManager
from fenrisclient.response_manager import ResponseManager


class Client:
    """Runs the read-command, send-request, show-response loop.

    The connection manager is any object offering ``is_connected``,
    ``has_connection_info``, ``set_connection_info``, ``get_server_info``,
    ``connect``, ``reset_connection_info``, ``disconnect``, ``send_request``
    and ``receive_response``.
    """

    def __init__(
        self,
        logger_name: str = "fenris_client",
        connection_factory: Optional[Callable[[], Any]] = None,
        retry_delay: float = 2.0,
    ) -> None:
        self._connection_manager: Any = None
        self._connection_factory = connection_factory
        self._tui: Any = TUI()
        self._request_manager = RequestManager()
        self._response_manager = ResponseManager(logger_name)
        self._logger = logging.getLogger(logger_name)
        self._retry_delay = retry_delay
        self._exit_requested = False
        self._logger.info("fenris client initialized")

    def connect_to_server(self) -> bool:
        """Connect to the server, asking the user for its address if needed."""
        conn = self._connection_manager
        if conn is not None and conn.is_connected():
            return True

        if conn is None:
            if self._connection_factory is None:
                self._logger.error("no connection manager available")
                return False
            conn = self._connection_manager = self._connection_factory()

        if not conn.has_connection_info():
            server_ip = self._tui.get_server_ip()
            server_port = self._tui.get_port_number()
            conn.set_connection_info(server_ip, server_port)
            self._logger.info("using server at %s:%s", server_ip, server_port)

        info = conn.get_server_info()
        server_ip, server_port = info.address, info.port

        self._logger.info("attempting to connect to server at %s:%s", server_ip, server_port)
        if conn.connect():
            self._logger.info(
                "successfully connected to server at %s:%s", server_ip, server_port
            )
            self._tui.display_result(
                True, f"Connected to server at {server_ip}:{server_port}"
            )
            return True

        self._logger.error("failed to connect to server at %s:%s", server_ip, server_port)
        self._tui.display_result(
            False,
            "Failed to connect to server. Please try a different address or port.",
        )
        conn.reset_connection_info()
        return False

    def process_command(self, command_parts: Sequence[str]) -> bool:
        """Handle one command; return False when the client should stop."""
        if not command_parts:
            return True

        cmd = command_parts[0]
        if cmd == "exit":
            self._logger.info("exit command received")
            self._exit_requested = True
            return False

        if cmd == "help":
            self._tui.display_help()
            return True

        try:
            request = self._request_manager.generate_request(command_parts)
        except RequestError:
            self._tui.display_result(False, "Invalid command or arguments")
            return True

        conn = self._connection_manager
        if conn is None or not conn.send_request(request):
            self._logger.error("failed to send request to server")
            self._tui.display_result(False, "Failed to send request to server")
            return True

        response = conn.receive_response()
        if response is None:
            self._logger.error("failed to receive response from server")
            self._tui.display_result(False, "Failed to receive response from server")
            return True

        formatted = self._response_manager.handle_response(response)
        success = bool(formatted) and formatted[0] == colors.success("Success")

        for line in formatted[1:]:
            self._tui.display_result(success, line)

        if len(formatted) <= 1:
            self._tui.display_result(
                success,
                "Operation completed successfully" if success else "Operation failed",
            )

        if cmd == "cd" and success and len(command_parts) > 1:
            self._tui.update_current_directory(response.data)

        return True

    def run(self) -> None:
        """Run the command loop until the user exits."""
        self._logger.info("fenris client starting")

        if self._tui is None:
            self._logger.error("TUI not initialized, cannot run client")
            self._exit_requested = True
            return

        if self._connection_manager is None and self._connection_factory is None:
            self._logger.error("no connection manager available, cannot run client")
            self._exit_requested = True
            return

        while not self._exit_requested:
            conn = self._connection_manager
            if conn is None or not conn.is_connected():
                if not self.connect_to_server():
                    time.sleep(self._retry_delay)
                    continue

            try:
                command_parts = self._tui.get_command()
                if not self.process_command(command_parts):
                    break
            except Exception as exc:  # keep the session alive on any failure
                self._logger.error("exception during command processing: %s", exc)
                self._tui.display_result(False, f"internal error: {exc}")

        conn = self._connection_manager
        if conn is not None and conn.is_connected():
            conn.disconnect()
            self._logger.info("disconnected from server")
            self._tui.display_result(True, "Disconnected from server")

        self._logger.info("fenris client exiting")

    def set_connection_manager(self, connection_manager: Any) -> None:
        """Use the given connection manager for talking to the server."""
        self._connection_manager = connection_manager

    def set_tui(self, tui: Any) -> None:
        """Use the given interface for user interaction."""
        self._tui = tui

    def is_exit_requested(self) -> bool:
        """Return whether the user has asked to exit."""
        return self._exit_requested
from dataclasses import dataclass
from typing import Optional

import pytest

from fenrisclient import colors
from fenrisclient.client import Client
from fenrisclient.messages import FileInfo, Request, RequestType, Response, ResponseType

HELP_TEXT = "Available commands:\n1. help - Show this help message\n2. exit - Exit the client\n"


class MockTUI:
    def __init__(self, port_number="7777"):
        self.commands = []
        self.results = []
        self.directories = []
        self.port_number = port_number
        self.raise_once = None

    def queue_command(self, command):
        self.commands.append(list(command))

    def get_server_ip(self):
        return "127.0.0.1"

    def get_port_number(self):
        return self.port_number

    def get_command(self):
        if self.raise_once is not None:
            exc, self.raise_once = self.raise_once, None
            raise exc
        if self.commands:
            return self.commands.pop(0)
        return ["exit"]

    def display_result(self, success, result):
        self.results.append((success, result))

    def update_current_directory(self, new_dir):
        self.directories.append(new_dir)

    def get_current_directory(self):
        return "/"

    def display_help(self):
        self.results.append((True, HELP_TEXT))


class MockServer:
    """In-process stand-in for the file server with a tiny virtual filesystem."""

    def __init__(self):
        self.files = {}
        self.directories = set()
        self.current_dir = "/"
        self.received = []

    def handle(self, request: Request) -> Response:
        self.received.append(request)
        response = Response(success=True)
        handlers = {
            RequestType.LIST_DIR: self._list_dir,
            RequestType.CHANGE_DIR: self._change_dir,
            RequestType.READ_FILE: self._read_file,
            RequestType.CREATE_FILE: self._write_file("File created: "),
            RequestType.WRITE_FILE: self._write_file("File written: "),
            RequestType.APPEND_FILE: self._append_file,
            RequestType.DELETE_FILE: self._delete_file,
            RequestType.CREATE_DIR: self._create_dir,
            RequestType.DELETE_DIR: self._delete_dir,
            RequestType.INFO_FILE: self._info_file,
        }
        if request.command == RequestType.PING:
            response.type, response.data = ResponseType.PONG, "PONG"
        elif request.command == RequestType.TERMINATE:
            response.type, response.data = ResponseType.SUCCESS, "Server terminating connection"
        elif request.command in handlers:
            handlers[request.command](request, response)
        else:
            self._fail(response, "Unknown command")
        return response

    @staticmethod
    def _fail(response, message):
        response.success = False
        response.type = ResponseType.ERROR
        response.data = message

    def _list_dir(self, request, response):
        response.type = ResponseType.DIR_LISTING
        listing = "Directory contents:\n"
        for path in self.files:
            if path.startswith(self.current_dir):
                listing += "F: " + path[len(self.current_dir):] + "\n"
        for path in self.directories:
            if path.startswith(self.current_dir) and path != self.current_dir:
                listing += "D: " + path[len(self.current_dir):] + "\n"
        response.data = listing

    def _change_dir(self, request, response):
        target = request.filename
        if target == "..":
            last = self.current_dir.rfind("/", 0, len(self.current_dir) - 1)
            if last != -1:
                self.current_dir = self.current_dir[: last + 1]
        else:
            path = target if target.startswith("/") else self.current_dir + target
            if not path.endswith("/"):
                path += "/"
            if path in self.directories or (target.startswith("/") and path == "/"):
                self.current_dir = path
            else:
                self._fail(response, "Directory not found: " + target)
                return
        response.type = ResponseType.SUCCESS
        response.data = "Changed directory to: " + self.current_dir

    def _read_file(self, request, response):
        if request.filename in self.files:
            response.type = ResponseType.FILE_CONTENT
            response.data = self.files[request.filename]
        else:
            self._fail(response, "File not found: " + request.filename)

    def _write_file(self, prefix):
        def handler(request, response):
            self.files[request.filename] = request.data
            response.type = ResponseType.SUCCESS
            response.data = prefix + request.filename
        return handler

    def _append_file(self, request, response):
        if request.filename in self.files:
            self.files[request.filename] += request.data
            response.type = ResponseType.SUCCESS
            response.data = "Content appended to file: " + request.filename
        else:
            self._fail(response, "File not found: " + request.filename)

    def _delete_file(self, request, response):
        if request.filename in self.files:
            del self.files[request.filename]
            response.type = ResponseType.SUCCESS
            response.data = "File deleted: " + request.filename
        else:
            self._fail(response, "File not found: " + request.filename)

    @staticmethod
    def _dir_path(name):
        return name if name.endswith("/") else name + "/"

    def _create_dir(self, request, response):
        path = self._dir_path(request.filename)
        self.directories.add(path)
        response.type = ResponseType.SUCCESS
        response.data = "Directory created: " + path

    def _delete_dir(self, request, response):
        path = self._dir_path(request.filename)
        if path not in self.directories:
            self._fail(response, "Directory not found: " + path)
            return
        busy = any(f.startswith(path) for f in self.files) or any(
            d != path and d.startswith(path) for d in self.directories
        )
        if busy:
            self._fail(response, "Directory not empty: " + path)
            return
        self.directories.discard(path)
        response.type = ResponseType.SUCCESS
        response.data = "Directory deleted: " + path

    def _info_file(self, request, response):
        if request.filename not in self.files:
            self._fail(response, "File not found: " + request.filename)
            return
        response.type = ResponseType.FILE_INFO
        response.file_info = FileInfo(
            name=request.filename,
            size=len(self.files[request.filename]),
            modified_time=163,
            is_directory=False,
        )


@dataclass
class ServerInfo:
    address: str = ""
    port: str = ""


class FakeConnection:
    def __init__(self, server, host="127.0.0.1", port="7777", failures=0,
                 send_ok=True, receive_ok=True):
        self.server = server
        self.info = ServerInfo(host or "", port or "")
        self.has_info = bool(host and port)
        self.failures = failures
        self.send_ok = send_ok
        self.receive_ok = receive_ok
        self.connected = False
        self.pending: Optional[Response] = None

    def has_connection_info(self):
        return self.has_info

    def set_connection_info(self, host, port):
        self.info = ServerInfo(host, port)
        self.has_info = True

    def get_server_info(self):
        return self.info

    def connect(self):
        if self.failures > 0:
            self.failures -= 1
            self.reset_connection_info()
            return False
        self.connected = True
        return True

    def reset_connection_info(self):
        self.info = ServerInfo()
        self.has_info = False

    def is_connected(self):
        return self.connected

    def disconnect(self):
        self.connected = False

    def send_request(self, request):
        if not self.connected or not self.send_ok:
            return False
        self.pending = self.server.handle(request)
        return True

    def receive_response(self):
        if not self.receive_ok:
            return None
        return self.pending


@pytest.fixture(autouse=True)
def plain_colors():
    colors.disable_colors()
    yield
    colors.enable_colors()


@pytest.fixture
def server():
    srv = MockServer()
    srv.directories.update({"/", "/dir1/", "/dir2/"})
    srv.files["/file1.txt"] = "This is file 1 content"
    srv.files["/file2.txt"] = "This is file 2 content"
    srv.files["/dir1/nested.txt"] = "Nested file content"
    return srv


@pytest.fixture
def setup(server):
    client = Client("TestClient", retry_delay=0)
    tui = MockTUI()
    client.set_tui(tui)
    client.set_connection_manager(FakeConnection(server))
    return client, tui, server


def commands(srv):
    return [r.command for r in srv.received]


def found(results, text, success=True):
    return any(ok == success and text in line for ok, line in results)


def test_connect_and_disconnect(setup):
    client, tui, _ = setup
    tui.queue_command(["exit"])
    client.run()
    assert len(tui.results) >= 2
    assert found(tui.results, "Connected to server at")
    assert tui.results[-1] == (True, "Disconnected from server")
    assert client.is_exit_requested() is True


def test_ping_command(setup):
    client, tui, server = setup
    tui.queue_command(["ping"])
    tui.queue_command(["exit"])
    client.run()
    assert RequestType.PING in commands(server)
    assert (True, "Server is alive") in tui.results


def test_list_directory_command(setup):
    client, tui, server = setup
    tui.queue_command(["ls"])
    client.run()
    assert commands(server)[0] == RequestType.LIST_DIR
    listing = [line for ok, line in tui.results if ok and "Directory contents:" in line]
    assert listing
    assert "file1.txt" in listing[0]
    assert "file2.txt" in listing[0]


def test_change_directory_command(setup):
    client, tui, server = setup
    tui.queue_command(["cd", "dir1"])
    tui.queue_command(["ls"])
    client.run()
    assert commands(server)[:2] == [RequestType.CHANGE_DIR, RequestType.LIST_DIR]
    assert server.received[0].filename == "dir1"
    assert found(tui.results, "Changed directory")
    assert found(tui.results, "nested.txt")
    assert tui.directories == ["Changed directory to: /dir1/"]


def test_read_file_command(setup):
    client, tui, server = setup
    tui.queue_command(["cat", "/file1.txt"])
    client.run()
    assert commands(server)[0] == RequestType.READ_FILE
    assert server.received[0].filename == "/file1.txt"
    assert found(tui.results, "This is file 1 content")


def test_write_file_command(setup):
    client, tui, server = setup
    tui.queue_command(["write", "/newfile.txt", "New file content"])
    tui.queue_command(["cat", "/newfile.txt"])
    client.run()
    first = server.received[0]
    assert first.command == RequestType.WRITE_FILE
    assert first.filename == "/newfile.txt"
    assert first.data == "New file content"
    assert server.received[1].command == RequestType.READ_FILE
    assert found(tui.results, "File written")
    assert found(tui.results, "New file content")


def test_append_file_command(setup):
    client, tui, server = setup
    tui.queue_command(["append", "/file1.txt", " - APPENDED TEXT"])
    tui.queue_command(["cat", "/file1.txt"])
    client.run()
    first = server.received[0]
    assert first.command == RequestType.APPEND_FILE
    assert first.filename == "/file1.txt"
    assert first.data == " - APPENDED TEXT"
    assert server.received[1].command == RequestType.READ_FILE
    assert found(tui.results, "Content appended")
    assert found(tui.results, "This is file 1 content - APPENDED TEXT")


def test_remove_file_command(setup):
    client, tui, server = setup
    tui.queue_command(["rm", "/file2.txt"])
    tui.queue_command(["cat", "/file2.txt"])
    client.run()
    assert commands(server)[:2] == [RequestType.DELETE_FILE, RequestType.READ_FILE]
    assert server.received[0].filename == "/file2.txt"
    assert found(tui.results, "File deleted")
    assert found(tui.results, "File not found", success=False)


def test_make_directory_command(setup):
    client, tui, server = setup
    tui.queue_command(["mkdir", "/newdir"])
    tui.queue_command(["cd", "/newdir"])
    tui.queue_command(["ls"])
    client.run()
    assert commands(server)[:3] == [
        RequestType.CREATE_DIR, RequestType.CHANGE_DIR, RequestType.LIST_DIR,
    ]
    assert server.received[0].filename == "/newdir"
    assert found(tui.results, "Directory created")
    assert any(ok and "Changed directory" in line and "newdir" in line
               for ok, line in tui.results)


def test_remove_directory_command(setup):
    client, tui, server = setup
    tui.queue_command(["rmdir", "/dir2"])
    tui.queue_command(["cd", "/dir2"])
    client.run()
    assert commands(server)[:2] == [RequestType.DELETE_DIR, RequestType.CHANGE_DIR]
    assert server.received[0].filename == "/dir2"
    assert found(tui.results, "Directory deleted")
    assert found(tui.results, "Directory not found", success=False)


def test_file_info_command(setup):
    client, tui, server = setup
    tui.queue_command(["info", "/file1.txt"])
    client.run()
    assert commands(server)[0] == RequestType.INFO_FILE
    assert server.received[0].filename == "/file1.txt"
    assert found(tui.results, "File: /file1.txt")


def test_invalid_command(setup):
    client, tui, server = setup
    tui.queue_command(["invalid_command"])
    client.run()
    assert found(tui.results, "Invalid command", success=False)
    assert server.received == []


def test_help_command(setup):
    client, tui, server = setup
    assert client.process_command(["help"]) is True
    assert tui.results == [(True, HELP_TEXT)]
    assert server.received == []
    assert client.is_exit_requested() is False


def test_multiple_command_sequence(setup):
    client, tui, server = setup
    for cmd in (
        ["mkdir", "/test_seq"],
        ["cd", "/test_seq"],
        ["write", "seq_file.txt", "Sequential test content"],
        ["cat", "seq_file.txt"],
        ["rm", "seq_file.txt"],
        ["cd", ".."],
        ["rmdir", "/test_seq"],
    ):
        tui.queue_command(cmd)
    client.run()
    assert commands(server)[:7] == [
        RequestType.CREATE_DIR,
        RequestType.CHANGE_DIR,
        RequestType.WRITE_FILE,
        RequestType.READ_FILE,
        RequestType.DELETE_FILE,
        RequestType.CHANGE_DIR,
        RequestType.DELETE_DIR,
    ]
    assert found(tui.results, "Sequential test content")


def test_empty_responses_from_server(setup):
    client, tui, server = setup
    tui.queue_command(["ls"])
    tui.queue_command(["cat", "/file1.txt"])
    tui.queue_command(["info", "/file1.txt"])
    client.run()
    assert len(server.received) >= 3


def test_non_existent_resources(setup):
    client, tui, _ = setup
    tui.queue_command(["cat", "/nonexistent.txt"])
    tui.queue_command(["cd", "/nonexistent/"])
    tui.queue_command(["rm", "/nonexistent.txt"])
    tui.queue_command(["rmdir", "/nonexistent/"])
    client.run()
    errors = [line for ok, line in tui.results if not ok and "not found" in line]
    assert len(errors) >= 4


def test_failed_connection_is_retried(server):
    client = Client("TestClient", retry_delay=0)
    tui = MockTUI(port_number="7777")
    client.set_tui(tui)
    client.set_connection_manager(FakeConnection(server, failures=1))
    client.run()
    assert tui.results[0] == (
        False,
        "Failed to connect to server. Please try a different address or port.",
    )
    assert (True, "Connected to server at 127.0.0.1:7777") in tui.results


def test_factory_connection_asks_user_for_address(server):
    made = []

    def factory():
        conn = FakeConnection(server, host=None, port=None)
        made.append(conn)
        return conn

    client = Client("TestClient", connection_factory=factory, retry_delay=0)
    tui = MockTUI(port_number="6000")
    client.set_tui(tui)
    client.run()
    assert len(made) == 1
    assert made[0].info == ServerInfo("127.0.0.1", "6000")
    assert (True, "Connected to server at 127.0.0.1:6000") in tui.results


def test_run_without_connection_stops():
    client = Client("TestClient", retry_delay=0)
    client.set_tui(MockTUI())
    assert client.connect_to_server() is False
    client.run()
    assert client.is_exit_requested() is True


def test_send_failure_is_reported(server):
    client = Client("TestClient", retry_delay=0)
    tui = MockTUI()
    client.set_tui(tui)
    client.set_connection_manager(FakeConnection(server, send_ok=False))
    tui.queue_command(["ping"])
    client.run()
    assert (False, "Failed to send request to server") in tui.results


def test_receive_failure_is_reported(server):
    client = Client("TestClient", retry_delay=0)
    tui = MockTUI()
    client.set_tui(tui)
    client.set_connection_manager(FakeConnection(server, receive_ok=False))
    tui.queue_command(["ping"])
    client.run()
    assert (False, "Failed to receive response from server") in tui.results


def test_exception_during_command_is_shown(setup):
    client, tui, _ = setup
    tui.raise_once = RuntimeError("boom")
    client.run()
    assert (False, "internal error: boom") in tui.results
    assert tui.results[-1] == (True, "Disconnected from server")


def test_process_command_empty_and_exit(setup):
    client, tui, _ = setup
    assert client.process_command([]) is True
    assert tui.results == []
    assert client.process_command(["exit"]) is False
    assert client.is_exit_requested() is True


def test_failed_cd_does_not_update_directory(setup):
    client, tui, _ = setup
    tui.queue_command(["cd", "missing"])
    client.run()
    assert tui.directories == []
    assert found(tui.results, "Directory not found", success=False)
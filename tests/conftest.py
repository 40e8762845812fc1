import pytest

from lineseek.models.position import Position
from lineseek.utils.debug import DebugLogger


class DummyProgress:
    """
    Test-only no-op progress object to avoid Rich Live output during tests.

    Matches the Progress API used by create_progress_bar/update_progress and
    counts how far it was advanced so tests can assert on it.
    """

    def __init__(self, *args, **kwargs):
        self.started = False
        self.finished = False
        self.completed = 0
        self.total = None

    def add_task(self, description, total=None, **kwargs):
        self.total = total
        return "task-id"

    def update(self, *args, **kwargs):
        pass

    def advance(self, task_id, advance=1):
        self.completed += advance

    def start(self):
        self.started = True
        self.finished = False

    def stop(self):
        self.finished = True

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.stop()


@pytest.fixture(autouse=True)
def dummy_progress(monkeypatch):
    """
    Replace Rich's Progress inside lineseek.utils.progress.

    create_progress_bar looks the symbol up at call time, so every progress
    bar built during a test is a DummyProgress. Yields the list of instances
    created.
    """
    from lineseek.utils import progress as progress_utils

    created = []

    def _factory(*args, **kwargs):
        prog = DummyProgress(*args, **kwargs)
        created.append(prog)
        return prog

    monkeypatch.setattr(progress_utils, "Progress", _factory)
    yield created


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep settings and debug traces away from the real environment and home dir."""
    for key in (
        "LINESEEK_CHUNK_SIZE",
        "LINESEEK_CACHE_CAPACITY",
        "LINESEEK_SHOW_PROGRESS",
        "LINESEEK_DEBUG",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("LINESEEK_DATA_DIR", str(tmp_path / "lineseek-data"))
    DebugLogger.configure(enabled=False, log_dir=None)
    yield
    DebugLogger.configure(enabled=False, log_dir=None)


def scan_forward(data: bytes) -> Position:
    """Naive single-pass count of the position right after ``data``."""
    row = column = 0
    for byte in data:
        if byte == 0x0A:
            row += 1
            column = 0
        else:
            column += 1
    return Position(row, column)


def scan_backward(data: bytes, offset: int) -> Position:
    """Backward position of ``offset``: a forward count over the reversed suffix."""
    return scan_forward(data[offset:][::-1])


def split_lines(data: bytes) -> list:
    """Split on newlines keeping terminators; a trailing empty fragment is not a line."""
    lines = [line + b"\n" for line in data.split(b"\n")]
    lines[-1] = lines[-1][:-1]
    if not lines[-1]:
        lines.pop()
    return lines


@pytest.fixture
def forward_oracle():
    return scan_forward


@pytest.fixture
def backward_oracle():
    return scan_backward


@pytest.fixture
def line_oracle():
    return split_lines


@pytest.fixture
def make_file(tmp_path):
    """Write bytes to a temporary file and return its path."""
    counter = iter(range(1_000_000))

    def _make(data: bytes, name: str = None):
        path = tmp_path / (name or f"stream_{next(counter)}.txt")
        path.write_bytes(data)
        return path

    return _make


SAMPLE_TEXT = (
    b"first line\n"
    b"\n"
    b"a much longer third line that spans several small chunks\n"
    b"x\n"
    b"\n"
    b"\n"
    b"tail without terminator"
)


@pytest.fixture
def sample_text():
    return SAMPLE_TEXT

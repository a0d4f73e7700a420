import pytest

from qr_gen.generator import ErrorCorrection, matrix_from_text


class TerminalStdin:
    def isatty(self):
        return True

    def read(self):
        raise AssertionError("terminal stdin must not be read")


@pytest.fixture
def matrix():
    return matrix_from_text("https://example.com", ErrorCorrection.M)


@pytest.fixture
def terminal_stdin():
    return TerminalStdin()

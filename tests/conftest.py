"""pytest configuration and shared fixtures."""

import pytest

from f_parse import ValueKind, with_pattern


@pytest.fixture
def hex_number():
    """Caller converter parsing hexadecimal integers."""

    @with_pattern(r"[0-9a-fA-F]+", kind=ValueKind.INTEGER)
    def convert(text):
        return int(text, 16)

    return convert


@pytest.fixture
def log_line():
    """A web-server access log line."""
    return '127.0.0.1 - frank [10/Oct/2000:13:55:36 -0700] "GET /apache_pb.gif HTTP/1.0" 200 2326'

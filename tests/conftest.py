"""
pytest configuration and fixtures.
"""

import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from httpsyntax import ParserConfig, RequestParser


@pytest.fixture
def sample_get_request() -> str:
    """Sample GET request with a relative target."""
    return (
        "GET /api/users?page=1&limit=10 HTTP/1.1\n"
        "Host: localhost:8080\n"
        "User-Agent: pytest\n"
        "Accept: application/json\n"
    )


@pytest.fixture
def sample_post_request() -> str:
    """Sample POST request with a pretty-printed JSON body and comments."""
    return (
        "// Create a user\n"
        "POST https://example.com\n"
        "    /api/users\n"
        "    ?notify=true\n"
        "Content-Type: application/json\n"
        "// Session cookies\n"
        "Cookie: session=abc\n"
        "cookie: theme=dark\n"
        "\n"
        "{\n"
        '  "name": "John",\n'
        "  // not sent\n"
        '  "email": "john@example.com"\n'
        "}\n"
    )


@pytest.fixture
def config() -> ParserConfig:
    """Default parser configuration."""
    return ParserConfig()


@pytest.fixture
def parser(config: ParserConfig) -> RequestParser:
    """Parser with the default configuration."""
    return RequestParser(config)

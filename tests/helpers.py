"""
Common test helpers
"""

# Standard
from typing import Callable
import os

# Third Party
import pytest

# First Party
import alog

# Global logging config
alog.configure(
    default_level=os.environ.get("LOG_LEVEL", "info"),
    filters=os.environ.get("LOG_FILTERS", ""),
    formatter="json" if os.environ.get("LOG_JSON", "").lower() == "true" else "pretty",
    thread_id=os.environ.get("LOG_THREAD_ID", "").lower() == "true",
)

# A file exercising most of the translation rules
sample_go_source = """package models

import "time"

// Person is somebody
// with two lines
type Person struct {
    // Name is the full name
    Name string
    Age  int // trailing
    /* block
       comment */
    Tags []*string

    // detached

    Email string
}

// Reader is not a struct
type Reader interface {
    Read() string
}

type ID int64

type Event struct {
    Person
    *time.Location
    At    time.Time
    Count int64
}
"""


@pytest.fixture
def go_file(tmp_path) -> Callable[..., str]:
    """Fixture that writes Go source to a temp file and returns its path"""

    def _write(source: str = sample_go_source, name: str = "models.go") -> str:
        path = tmp_path / name
        path.write_text(source)
        return str(path)

    yield _write

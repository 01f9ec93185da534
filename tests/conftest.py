#
# Pytest Fixtures
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections.abc as abc
import datetime as dt

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from safeobject.hoist import SafeObject


# Classes --------------------------------------------------------------------------------------------------------------

class Request:
    """
    Mimics a request object whose headers became None, so every header getter raises.
    """

    def __init__(self):
        self.headers = None
        self.path = "/index"

    @property
    def accepted_encodings(self) -> list[str]:
        accept = self.headers["Accept-Encoding"]
        return [a.strip() for a in accept.split(",")] if accept else []


class BrokenHeaders(abc.Mapping):
    """Mapping whose lookups of selected keys raise."""

    def __init__(self, data: dict, broken: set):
        self._data = data
        self._broken = broken

    def __getitem__(self, key):
        if key in self._broken:
            raise KeyError(f"header {key!r} vanished")
        return self._data[key]

    def __iter__(self):
        return iter(self._data)

    def __len__(self):
        return len(self._data)


class BrokenSequence(abc.Sequence):
    """Sequence whose item at the given index raises."""

    def __init__(self, items: list, broken_index: int):
        self._items = items
        self._broken_index = broken_index

    def __getitem__(self, index):
        if index == self._broken_index:
            raise TypeError("'NoneType' object does not support item assignment")
        return self._items[index]

    def __len__(self):
        return len(self._items)


class NotATime(dt.datetime):
    """NaT-style datetime which is unequal to itself."""

    def __eq__(self, other):
        return False

    def __ne__(self, other):
        return True

    __hash__ = dt.datetime.__hash__


# Fixtures -------------------------------------------------------------------------------------------------------------

@pytest.fixture
def hoist() -> SafeObject:
    """Engine with default options."""
    return SafeObject()


@pytest.fixture
def request_obj() -> Request:
    """Object with a throwing property."""
    return Request()


@pytest.fixture
def broken_headers() -> BrokenHeaders:
    """Mapping with one throwing key."""
    return BrokenHeaders({"Host": "example.com", "Accept-Encoding": "gzip"}, broken={"Accept-Encoding"})


@pytest.fixture
def broken_sequence() -> BrokenSequence:
    """Sequence with a throwing item at index 1."""
    return BrokenSequence(["foo", "bar", "baz"], broken_index=1)


@pytest.fixture
def invalid_date() -> NotATime:
    return NotATime(2020, 1, 1)

#
# SafeObject - Classification Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import collections
import datetime as dt
import sys

from decimal import Decimal

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from safeobject.classify import (ValueKind, classify, is_array, is_binary, is_complex_object, is_date, is_error,
                                 is_mapping, is_primitive, is_root_wrapped)


# Local Classes & Methods ----------------------------------------------------------------------------------------------

class Plain:
    pass


class Callable:
    def __call__(self):
        pass


# Tests ----------------------------------------------------------------------------------------------------------------

class TestPredicates:

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(None, True, id="none"),
            pytest.param(True, True, id="bool"),
            pytest.param(1, True, id="int"),
            pytest.param(1.5, True, id="float"),
            pytest.param("s", True, id="str"),
            pytest.param(b"b", False, id="bytes"),
            pytest.param(Decimal(1), False, id="decimal"),
            pytest.param([], False, id="list"),
        ],
    )
    def test_is_primitive(self, obj, expected):
        """Recognize None, bool, int, float and str."""
        assert is_primitive(obj) is expected

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param([], True, id="list"),
            pytest.param((), True, id="tuple"),
            pytest.param(range(1), True, id="range"),
            pytest.param({1}, True, id="set"),
            pytest.param(frozenset(), True, id="frozenset"),
            pytest.param("abc", False, id="str"),
            pytest.param(b"abc", False, id="bytes"),
            pytest.param(bytearray(), False, id="bytearray"),
            pytest.param({}, False, id="dict"),
            pytest.param(collections.deque(), True, id="deque"),
        ],
    )
    def test_is_array(self, obj, expected):
        """Recognize sequences and sets that are not text or binary."""
        assert is_array(obj) is expected

    def test_misc_predicates(self):
        """Recognize errors, dates, mappings and binary values."""
        assert is_error(KeyError()) and not is_error(KeyError)
        assert is_date(dt.date.today()) and is_date(dt.datetime.now()) and is_date(dt.time())
        assert not is_date(dt.timedelta())
        assert is_mapping(collections.OrderedDict()) and not is_mapping([])
        assert is_binary(memoryview(b"")) and not is_binary("")

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(Plain(), True, id="instance"),
            pytest.param(sys, True, id="module"),
            pytest.param(Decimal(1), True, id="decimal"),
            pytest.param(b"b", True, id="bytes"),
            pytest.param({}, False, id="dict"),
            pytest.param([], False, id="list"),
            pytest.param(1, False, id="int"),
            pytest.param(print, False, id="function"),
            pytest.param(Callable(), False, id="callable-instance"),
        ],
    )
    def test_is_complex_object(self, obj, expected):
        """Recognize objects not descended into below the root."""
        assert is_complex_object(obj) is expected

    @pytest.mark.parametrize(
        "obj, expected",
        [
            pytest.param(1, True, id="int"),
            pytest.param(None, True, id="none"),
            pytest.param([], True, id="list"),
            pytest.param(b"", True, id="bytes"),
            pytest.param(dt.date(2020, 1, 1), True, id="date"),
            pytest.param(print, True, id="function"),
            pytest.param({}, False, id="dict"),
            pytest.param(Plain(), False, id="instance"),
            pytest.param(ValueError(), False, id="error"),
        ],
    )
    def test_is_root_wrapped(self, obj, expected):
        """Recognize root values which are wrapped."""
        assert is_root_wrapped(obj) is expected


class TestClassify:

    @pytest.mark.parametrize(
        "obj, depth, expected",
        [
            pytest.param({}, 6, ValueKind.TOO_DEEP, id="too-deep"),
            pytest.param(ValueError(), 6, ValueKind.TOO_DEEP, id="too-deep-before-error"),
            pytest.param(ValueError(), 0, ValueKind.ERROR, id="root-error"),
            pytest.param(ValueError(), 3, ValueKind.ERROR, id="nested-error"),
            pytest.param(1, 0, ValueKind.ROOT_WRAP, id="root-int"),
            pytest.param([1], 0, ValueKind.ROOT_WRAP, id="root-list"),
            pytest.param(dt.date(2020, 1, 1), 0, ValueKind.ROOT_WRAP, id="root-date"),
            pytest.param(dt.date(2020, 1, 1), 1, ValueKind.DATE, id="nested-date"),
            pytest.param(Plain(), 0, ValueKind.MAPPING, id="root-instance"),
            pytest.param(Plain(), 1, ValueKind.COMPLEX, id="nested-instance"),
            pytest.param(b"", 1, ValueKind.COMPLEX, id="nested-bytes"),
            pytest.param([1], 1, ValueKind.ARRAY, id="nested-list"),
            pytest.param({1}, 2, ValueKind.ARRAY, id="nested-set"),
            pytest.param({}, 0, ValueKind.MAPPING, id="root-dict"),
            pytest.param({}, 5, ValueKind.MAPPING, id="dict-at-limit"),
            pytest.param(1, 1, ValueKind.PRIMITIVE, id="nested-int"),
            pytest.param(print, 1, ValueKind.CALLABLE, id="nested-function"),
        ],
    )
    def test_kinds(self, obj, depth, expected):
        """Classify values in priority order."""
        assert classify(obj, depth=depth, max_depth=5) is expected


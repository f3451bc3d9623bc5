#
# Reprfmt - Default Representers Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import array
import collections
import datetime
import re
import types
import uuid
import weakref
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum, Flag, IntEnum, StrEnum
from fractions import Fraction
from pathlib import PurePosixPath

# Third Party ----------------------------------------------------------------------------------------------------------
import pytest
from frozendict import frozendict

# Local ----------------------------------------------------------------------------------------------------------------
from reprfmt.formatter import format


# Tests ----------------------------------------------------------------------------------------------------------------


class Color(Enum):
    RED = 1


class Level(IntEnum):
    HIGH = 3


class Mode(StrEnum):
    FAST = "fast"


class Kind(str, Enum):
    A = "a"


class Perm(Flag):
    R = 4
    W = 2


Point = collections.namedtuple("Point", "x y")


@dataclass
class Item:
    name: str
    price: float
    secret: str = field(default="", repr=False)


class Plain:
    def __init__(self):
        self.b = 2
        self.a = 1


class Slotted:
    __slots__ = ("x", "y", "__z")

    def __init__(self):
        self.x = 1
        self.__z = 3


class Token:
    __slots__ = ()

    def __repr__(self):
        return "<token>"


class BadRepr:
    __slots__ = ()

    def __repr__(self):
        raise RuntimeError("no repr")


class Jobs(list):
    __repr_tag__ = "queue"


class Settings(dict):
    __repr_tag__ = "env"


class Pair(tuple):
    pass


def sample():
    pass


def numbers():
    yield 1


class TestScalars:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(True, "True", id="bool"),
            pytest.param(42, "42", id="int"),
            pytest.param(-1, "-1", id="int_negative"),
            pytest.param(3.14, "3.14", id="float"),
            pytest.param(float("nan"), "nan", id="nan"),
            pytest.param(float("-inf"), "-inf", id="inf"),
            pytest.param(1 + 2j, "(1+2j)", id="complex"),
            pytest.param(Decimal("1.50"), "Decimal(1.50)", id="decimal"),
            pytest.param(Fraction(1, 3), "Fraction(1/3)", id="fraction"),
            pytest.param(range(0, 10, 2), "range(0, 10, 2)", id="range"),
            pytest.param(range(3), "range(0, 3, 1)", id="range_default"),
            pytest.param(Ellipsis, "Ellipsis", id="ellipsis"),
            pytest.param(NotImplemented, "NotImplemented", id="not_implemented"),
        ],
    )
    def test_numbers_and_singletons(self, value, expected):
        assert format(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param("abc", '"abc"', id="str"),
            pytest.param("", '""', id="empty"),
            pytest.param("a\nb\tc", '"a\\nb\\tc"', id="escapes"),
            pytest.param('say "hi"', '"say \\"hi\\""', id="quotes"),
            pytest.param(b"ab\x00", 'b"ab\\0"', id="bytes"),
            pytest.param(b"\xff", 'b"\\xff"', id="bytes_hex"),
            pytest.param(bytearray(b"ab"), 'bytearray b"ab"', id="bytearray"),
            pytest.param(memoryview(b"hello"), "memoryview [ 5 bytes ]", id="memoryview"),
            pytest.param(memoryview(b""), "memoryview [ empty ]", id="memoryview_empty"),
        ],
    )
    def test_text_and_binary(self, value, expected):
        assert format(value) == expected

    def test_released_memoryview(self):
        view = memoryview(b"abc")
        view.release()
        assert format(view) == "memoryview [ released ]"

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(Color.RED, "Color.RED", id="enum"),
            pytest.param(Level.HIGH, "Level.HIGH", id="int_enum"),
            pytest.param(Mode.FAST, "Mode.FAST", id="str_enum"),
            pytest.param(Kind.A, "Kind.A", id="str_mixin"),
            pytest.param(Perm.R, "Perm.R", id="flag"),
        ],
    )
    def test_enums(self, value, expected):
        assert format(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(datetime.datetime(2020, 1, 2, 3, 4, 5), "datetime(2020-01-02T03:04:05)", id="datetime"),
            pytest.param(datetime.date(2020, 1, 2), "date(2020-01-02)", id="date"),
            pytest.param(datetime.time(3, 4), "time(03:04:00)", id="time"),
            pytest.param(datetime.timedelta(days=1, seconds=1), "timedelta(1 day, 0:00:01)", id="timedelta"),
        ],
    )
    def test_dates(self, value, expected):
        assert format(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(re.compile("ab+", re.I), "/ab+/i", id="ignorecase"),
            pytest.param(re.compile("a.b", re.M | re.S), "/a.b/ms", id="flags"),
            pytest.param(re.compile("a/b"), "/a\\/b/", id="slash"),
            pytest.param(re.compile(b"x+"), "b/x+/", id="bytes"),
        ],
    )
    def test_patterns(self, value, expected):
        assert format(value) == expected

    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(PurePosixPath("/tmp"), 'PurePosixPath("/tmp")', id="path"),
            pytest.param(
                uuid.UUID("12345678-1234-5678-1234-567812345678"),
                'UUID("12345678-1234-5678-1234-567812345678")',
                id="uuid",
            ),
        ],
    )
    def test_quoted(self, value, expected):
        assert format(value) == expected


class TestCode:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param(ValueError("bad"), "[ValueError: bad]", id="exception"),
            pytest.param(ValueError(), "[ValueError]", id="exception_empty"),
            pytest.param(len, "<function len>", id="builtin"),
            pytest.param(sample, "<function sample>", id="function"),
            pytest.param(lambda: None, "<function>", id="lambda"),
            pytest.param(Plain().__init__, "<function __init__>", id="method"),
            pytest.param(str.join, "<function join>", id="method_descriptor"),
            pytest.param(int, "<class int>", id="class"),
            pytest.param(Plain, "<class Plain>", id="user_class"),
            pytest.param(re, "<module re>", id="module"),
        ],
    )
    def test_code(self, value, expected):
        assert format(value) == expected

    def test_generator_not_consumed(self):
        gen = numbers()
        assert format(gen) == "<generator numbers>"
        assert next(gen) == 1

    def test_coroutine(self):
        async def task():
            pass

        coro = task()
        try:
            assert format(coro) == "<coroutine task>"
        finally:
            coro.close()


class TestContainers:
    @pytest.mark.parametrize(
        "value, expected",
        [
            pytest.param({}, "{}", id="dict_empty"),
            pytest.param({"b": 1, "a": 2}, "{ a: 2, b: 1 }", id="dict_sorted"),
            pytest.param(collections.defaultdict(int, a=1), "defaultdict { a: 1 }", id="defaultdict"),
            pytest.param(collections.Counter("aab"), "Counter { a: 2, b: 1 }", id="counter"),
            pytest.param(
                collections.OrderedDict([("b", 1), ("a", 2)]), 'OrderedDict { "b" => 1, "a" => 2 }', id="ordered"
            ),
            pytest.param(Settings(a=1), "Settings [env] { a: 1 }", id="tagged_dict"),
            pytest.param([], "[]", id="list_empty"),
            pytest.param([1, "a"], '[ 1, "a" ]', id="list"),
            pytest.param(Jobs([1]), "Jobs [queue] [ 1 ]", id="tagged_list"),
            pytest.param(collections.deque([1, 2]), "deque [ 1, 2 ]", id="deque"),
            pytest.param(array.array("i", [1, 2]), "array [ 1, 2 ]", id="array"),
            pytest.param((), "()", id="tuple_empty"),
            pytest.param((1,), "( 1, )", id="tuple_single"),
            pytest.param((1, (2, 3)), "( 1, ( 2, 3 ) )", id="tuple_nested"),
            pytest.param(Pair((1, 2)), "Pair ( 1, 2 )", id="tuple_subclass"),
            pytest.param(Point(1, 2), "Point { x: 1, y: 2 }", id="namedtuple"),
            pytest.param(set(), "set {}", id="set_empty"),
            pytest.param({3, 1, 2}, "set { 1, 2, 3 }", id="set_sorted"),
            pytest.param({1, "a"}, 'set { 1, "a" }', id="set_mixed"),
            pytest.param(frozenset({"b", "a"}), 'frozenset { "a", "b" }', id="frozenset"),
        ],
    )
    def test_containers(self, value, expected):
        assert format(value) == expected

    def test_third_party_mapping(self):
        out = format(frozendict(a=1))
        assert out.startswith("frozendict { ")
        assert out.endswith("1 }")

    def test_user_mapping(self):
        class Table(collections.abc.Mapping):
            def __init__(self, data):
                self._data = data

            def __getitem__(self, key):
                return self._data[key]

            def __iter__(self):
                return iter(self._data)

            def __len__(self):
                return len(self._data)

        assert format(Table({"b": 1, "a": 2})) == 'Table { "b" => 1, "a" => 2 }'

    def test_user_sequence_and_set(self):
        class Row(collections.abc.Sequence):
            def __getitem__(self, inx):
                return [1, 2][inx]

            def __len__(self):
                return 2

        class Bag(collections.abc.Set):
            def __contains__(self, item):
                return item in (2, 1)

            def __iter__(self):
                return iter((2, 1))

            def __len__(self):
                return 2

        assert format(Row()) == "Row [ 1, 2 ]"
        assert format(Bag()) == "Bag { 1, 2 }"

    def test_weak(self):
        target = Plain()
        assert format(weakref.ref(target)) == "ReferenceType"
        assert format(weakref.WeakSet()) == "WeakSet"
        assert format(weakref.WeakValueDictionary()) == "WeakValueDictionary"

    def test_mapping_proxy(self):
        assert format(types.MappingProxyType({"a": 1})) == "proxy { a: 1 }"


class TestObjects:
    def test_dataclass(self):
        """Declaration order, fields excluded from repr are skipped."""
        assert format(Item("pen", 1.5, "x")) == 'Item { name: "pen", price: 1.5 }'

    def test_plain(self):
        assert format(Plain()) == "Plain { a: 1, b: 2 }"

    def test_slots(self):
        """Unset slots are skipped, private slots are mangled."""
        assert format(Slotted()) == "Slotted { _Slotted__z: 3, x: 1 }"

    def test_object(self):
        assert format(object()) == "{}"

    def test_namespace(self):
        assert format(types.SimpleNamespace(b=[1], a=None)) == "SimpleNamespace { a: None, b: [ 1 ] }"

    def test_custom_repr_without_fields(self):
        assert format(Token()) == "<token>"

    def test_broken_repr_without_fields(self):
        assert format(BadRepr()) == "<BadRepr object (repr failed: RuntimeError)>"

    def test_nested(self):
        data = {"items": [Item("pen", 1.5)], "owner": Plain()}
        out = format(data, pretty=True)
        assert out == '{\n  items: [ Item { name: "pen", price: 1.5 } ],\n  owner: Plain { a: 1, b: 2 }\n}'

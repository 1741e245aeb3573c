import numpy as np
import pytest

from coffeemill.attribute import Attribute, AttributeKind


def test_default_is_empty():
    attr = Attribute()
    assert attr.is_empty()
    assert attr.empty()
    assert attr.kind() is AttributeKind.EMPTY


def test_boolean():
    attr = Attribute(True)
    assert not attr.empty()
    assert attr.is_boolean()
    assert attr.as_boolean() is True


def test_integer():
    attr = Attribute(42)
    assert not attr.empty()
    assert attr.is_integer()
    assert attr.as_integer() == 42


def test_floating():
    attr = Attribute(3.14)
    assert not attr.empty()
    assert attr.is_floating()
    assert attr.as_floating() == 3.14


def test_string():
    attr = Attribute("foo")
    assert not attr.empty()
    assert attr.is_string()
    assert attr.as_string() == "foo"


def test_vector():
    attr = Attribute(np.array([1.0, 2.0, 3.0]))
    assert not attr.empty()
    assert attr.is_vector()
    assert attr.as_vector()[0] == 1.0
    assert attr.as_vector()[1] == 2.0
    assert attr.as_vector()[2] == 3.0


@pytest.mark.parametrize(
    "items",
    [
        [Attribute(42), Attribute(3.14), Attribute("foobar")],
        (Attribute(42), Attribute(3.14), Attribute("foobar")),
        [42, 3.14, "foobar"],
    ],
)
def test_array(items):
    attr = Attribute(items)
    assert not attr.empty()
    assert attr.is_array()
    assert attr.as_array()[0].as_integer() == 42
    assert attr.as_array()[1].as_floating() == 3.14
    assert attr.as_array()[2].as_string() == "foobar"


def test_bool_is_not_integer():
    attr = Attribute(False)
    assert attr.is_boolean()
    assert not attr.is_integer()


def test_wrong_accessor_raises():
    attr = Attribute(42)
    with pytest.raises(TypeError):
        attr.as_string()
    with pytest.raises(TypeError):
        Attribute().as_boolean()


def test_try_get():
    attr = Attribute("foo")
    assert attr.try_get(AttributeKind.STRING) == "foo"
    assert attr.try_get(AttributeKind.INTEGER) is None


def test_clear():
    attr = Attribute(3.14)
    attr.clear()
    assert attr.is_empty()
    assert attr.try_get(AttributeKind.FLOATING) is None


def test_value_assignment_changes_kind():
    attr = Attribute(1)
    attr.value = "bar"
    assert attr.is_string()
    assert attr.as_string() == "bar"


def test_copy_is_independent():
    original = Attribute(np.array([1.0, 2.0, 3.0]))
    copy = Attribute(original)
    copy.as_vector()[0] = 9.0
    assert original.as_vector()[0] == 1.0
    assert copy == Attribute(np.array([9.0, 2.0, 3.0]))


def test_integer_overflow_rejected():
    with pytest.raises(OverflowError):
        Attribute(2**63)


def test_bad_vector_shape_rejected():
    with pytest.raises(ValueError):
        Attribute(np.zeros(4))


def test_unsupported_type_rejected():
    with pytest.raises(TypeError):
        Attribute({"a": 1})


def test_str_forms():
    assert str(Attribute()) == "nil"
    assert str(Attribute(True)) == "1"
    assert str(Attribute(42)) == "42"
    assert str(Attribute("foobar")) == "foobar"
    assert str(Attribute([42, "foobar"])) == "[ 42 foobar ]"
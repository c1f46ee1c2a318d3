import pytest

from errors import DivisionByZero, FormatError
from fraction import ExactFraction


def fields(f):
    return (f.whole, f.numerator, f.denominator)


def test_normalizes_on_construction():
    assert fields(ExactFraction(6, 8)) == (0, 3, 4)
    assert fields(ExactFraction(7, 2)) == (3, 1, 2)
    assert fields(ExactFraction(8, 4)) == (2, 0, 1)
    assert fields(ExactFraction(0, 9)) == (0, 0, 1)
    assert fields(ExactFraction.mixed(1, 5, 2)) == (3, 1, 2)


def test_negative_inputs_are_coerced_to_magnitude():
    assert fields(ExactFraction(-3, 4)) == (0, 3, 4)
    assert fields(ExactFraction(3, -4)) == (0, 3, 4)
    assert fields(ExactFraction.mixed(-1, 1, 2)) == (1, 1, 2)
    assert ExactFraction(-1, 2).is_negative() is False


def test_zero_denominator():
    with pytest.raises(DivisionByZero):
        ExactFraction(1, 0)
    with pytest.raises(ZeroDivisionError):
        ExactFraction.mixed(2, 1, 0)


def test_arithmetic():
    half, quarter = ExactFraction(1, 2), ExactFraction(1, 4)
    assert half.add(half).format() == "1"
    assert ExactFraction(3, 4).subtract(quarter).format() == "1/2"
    assert ExactFraction(2, 3).multiply(ExactFraction(3, 4)).format() == "1/2"
    assert half.divide(quarter).format() == "2"
    assert (ExactFraction.mixed(1, 1, 2) + ExactFraction(2, 3)).format() == "2'1/6"
    assert (ExactFraction(5) / ExactFraction(7)).format() == "5/7"


def test_arithmetic_returns_new_instances():
    a = ExactFraction(1, 3)
    b = a.add(ExactFraction(1, 3))
    assert a.format() == "1/3" and b.format() == "2/3"
    with pytest.raises(AttributeError):
        a._numerator = 2


def test_subtract_folds_negative_result():
    assert ExactFraction.mixed(1, 1, 2).subtract(ExactFraction(2)).format() == "1/2"


def test_divide_by_zero_value():
    with pytest.raises(DivisionByZero):
        ExactFraction(1, 2).divide(ExactFraction(0))


def test_comparison_by_cross_multiplication():
    assert ExactFraction(2, 4) == ExactFraction(1, 2)
    assert ExactFraction(3, 4).greater_or_equal(ExactFraction(2, 3))
    assert ExactFraction(2, 3).greater_or_equal(ExactFraction(4, 6))
    assert not ExactFraction(1, 3).greater_or_equal(ExactFraction(1, 2))
    assert ExactFraction(1, 3) < ExactFraction(1, 2) <= ExactFraction(2, 4)
    assert ExactFraction.mixed(1, 1, 2) > ExactFraction(1)
    assert ExactFraction(1, 2) != "1/2"
    assert len({ExactFraction(1, 2), ExactFraction(2, 4), ExactFraction(3, 6)}) == 1


def test_predicates():
    assert ExactFraction(1, 2).is_proper_fraction()
    assert ExactFraction(0).is_proper_fraction()
    assert not ExactFraction(3, 2).is_proper_fraction()
    assert not ExactFraction(1).is_proper_fraction()
    assert ExactFraction(0, 5).is_zero()
    assert not ExactFraction(1, 5).is_zero()


@pytest.mark.parametrize(
    "value, text",
    [
        (ExactFraction(0), "0"),
        (ExactFraction(3, 5), "3/5"),
        (ExactFraction(4), "4"),
        (ExactFraction(11, 4), "2'3/4"),
    ],
)
def test_format(value, text):
    assert value.format() == text
    assert str(value) == text


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3", (3, 0, 1)),
        (" 2/4 ", (0, 1, 2)),
        ("1'1/4", (1, 1, 4)),
        ("1'5/4", (2, 1, 4)),
        ("0", (0, 0, 1)),
    ],
)
def test_parse(text, expected):
    assert fields(ExactFraction.parse(text)) == expected


@pytest.mark.parametrize("text", ["", "abc", "1/2/3", "1''1/2", "1'2", "-3/4", "1.5", "1 / 2", "'1/2"])
def test_parse_rejects_malformed(text):
    with pytest.raises(FormatError):
        ExactFraction.parse(text)


def test_parse_zero_denominator():
    with pytest.raises(DivisionByZero):
        ExactFraction.parse("1/0")


def test_parse_format_is_idempotent():
    for den in range(1, 13):
        for num in range(0, 30):
            first = ExactFraction(num, den)
            again = ExactFraction.parse(first.format())
            assert fields(again) == fields(first)
            assert ExactFraction.parse(again.format()).format() == first.format()


@pytest.mark.parametrize("text", ["١/٢", "٣", "1'١/٢"])
def test_parse_rejects_non_ascii_digits(text):
    with pytest.raises(FormatError):
        ExactFraction.parse(text)


def test_parse_caps_digit_count():
    assert ExactFraction.parse("9" * 200).whole == int("9" * 200)
    with pytest.raises(FormatError):
        ExactFraction.parse("9" * 201)
    with pytest.raises(FormatError):
        ExactFraction.parse("1/" + "7" * 5000)

import pytest

from despeck.checks import even, odd


def test_pinned_values():
    assert odd(1) is True
    assert even(0) is True
    assert odd(-1) is True


@pytest.mark.parametrize("number", range(-7, 8))
def test_even_is_negation_of_odd(number):
    assert even(number) is (not odd(number))


@pytest.mark.parametrize("number", range(-7, 8))
def test_parity_alternates(number):
    assert odd(number) != odd(number + 1)
    assert odd(number) == odd(number + 2)
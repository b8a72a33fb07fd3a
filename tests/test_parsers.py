import pytest

from searchable import CustomSearch, FuzzySearch
from searchable.utils import add_slashes, strip_search_str


@pytest.mark.parametrize(
    "search_str,expected",
    [
        ("My Daily Posts", "%M%y%D%a%i%l%y%P%o%s%t%s%"),
        ("abc", "%a%b%c%"),
        ("a-1 b_2", "%a%1%b%2%"),
        ("café", "%c%a%f%"),
        ("", "%%"),
        ("?!. ,;", "%%"),
        (None, "%%"),
    ],
)
def test_fuzzy_search_pattern(search_str, expected):
    assert FuzzySearch().parse(search_str) == expected


def test_fuzzy_search_accepts_numbers():
    assert FuzzySearch().parse(2024) == "%2%0%2%4%"


def test_custom_search_uses_callback():
    parser = CustomSearch(lambda search_str: f"%{search_str}%")

    assert parser.parse("exact words") == "%exact words%"


def test_strip_search_str_keeps_ascii_letters_and_digits():
    assert strip_search_str("Hello, Wörld 42!") == "HelloWrld42"


def test_add_slashes():
    assert add_slashes("it's") == "it\\'s"
    assert add_slashes('say "hi"') == 'say \\"hi\\"'
    assert add_slashes("back\\slash") == "back\\\\slash"

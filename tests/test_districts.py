import pytest

from conftest import DISTRICTS, FIFTEEN_DISTRICTS
from prayerbot.districts import resolve, sample
from prayerbot.models import parse_districts


@pytest.fixture
def districts():
    return parse_districts(DISTRICTS)


@pytest.mark.parametrize("query", ["dhaka", "DHAKA", "  Dhaka ", "ঢাকা", "dha"])
def test_resolve_dhaka(districts, query):
    assert resolve(districts, query).en == "Dhaka"


def test_resolve_native_substring(districts):
    assert resolve(districts, "চট্ট").en == "Chattogram"


def test_resolve_not_found(districts):
    assert resolve(districts, "xyz123") is None


def test_resolve_empty_query(districts):
    assert resolve(districts, "") is None
    assert resolve(districts, "   ") is None


def test_resolve_first_match_in_list_order():
    districts = parse_districts([
        {"en": "Narayanganj", "bn": "নারায়ণগঞ্জ", "lat": 23.6, "lon": 90.5},
        {"en": "Gopalganj", "bn": "গোপালগঞ্জ", "lat": 23.0, "lon": 89.8},
    ])
    assert resolve(districts, "ganj").en == "Narayanganj"


def test_duplicate_and_malformed_records_are_dropped():
    districts = parse_districts([
        {"en": "Dhaka", "bn": "ঢাকা", "lat": 23.8, "lon": 90.4},
        {"en": "DHAKA", "bn": "অন্য", "lat": 1, "lon": 1},
        {"en": "Nowhere", "bn": "কোথাও না"},
        "garbage",
    ])
    assert [d.en for d in districts] == ["Dhaka"]
    assert resolve(districts, "dhaka").bn == "ঢাকা"


def test_sample_lists_first_ten():
    lines = sample(parse_districts(FIFTEEN_DISTRICTS), 10)
    assert len(lines) == 10
    assert lines[0] == "ঢাকা (Dhaka)"
    assert "(Pabna)" not in "\n".join(lines)

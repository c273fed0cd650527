"""
Tests for segmentation, code comparison and the sort driver.

Covers:
- Code length takes precedence over code value
- Whole-string length decides only after every compared position ties
- Compound surname detection, including one-character names
- Reverse-then-stable-sort tie handling
- Empty names rejected before the list is touched
"""

import sys
from pathlib import Path
from types import MappingProxyType
import pytest

# Add the parent directory to path to import namesort
sys.path.insert(0, str(Path(__file__).parent.parent))

from namesort.names_data import DEFAULT_CODE
from namesort.name_sorter import (
    CodeTable,
    EmptyNameError,
    NameComparator,
    NameSorter,
    SurnameSegmenter,
    sort_names,
    split_name,
)

CODES = {"欧": "10", "阳": "20", "锋": "5", "王": "4", "三": "3", "五": "4", "李": "7", "a": "1", "b": "1"}
COMPOUNDS = frozenset({"欧阳"})


@pytest.fixture
def table():
    return CodeTable.from_records([{"word": word, "order": order} for word, order in CODES.items()])


@pytest.fixture
def sorter(table):
    return NameSorter(table, COMPOUNDS)


@pytest.fixture
def comparator(sorter):
    return sorter.comparator


# ════════════════════════════════════════════════════════════════════════════════
# CODE TABLE
# ════════════════════════════════════════════════════════════════════════════════


def test_code_table_lookup_and_default(table):
    assert table.code_for("欧") == "10"
    assert table.lookup("锋") == "5"
    assert table.code_for("丙") == DEFAULT_CODE
    assert "欧" in table
    assert "丙" not in table
    assert len(table) == len(CODES)


def test_code_table_duplicate_words_keep_last_record():
    table = CodeTable.from_records([{"word": "甲", "order": "1"}, {"word": "甲", "order": "22"}])
    assert table.code_for("甲") == "22"
    assert len(table) == 1


def test_code_table_is_read_only(table):
    with pytest.raises(TypeError):
        table.codes["新"] = "1"


def test_code_table_missing_keeps_first_seen_order(table):
    assert table.missing("丁欧丙丁") == ["丁", "丙"]


# ════════════════════════════════════════════════════════════════════════════════
# SURNAME SEGMENTER
# ════════════════════════════════════════════════════════════════════════════════

SPLIT_CASES = [
    ("欧阳锋", COMPOUNDS, ("欧阳", "锋")),
    ("欧阳锋", frozenset(), ("欧", "阳锋")),
    ("锋", COMPOUNDS, ("锋", "")),
    ("锋", frozenset({"锋"}), ("锋", "")),
    ("欧阳", COMPOUNDS, ("欧阳", "")),
    ("欧", COMPOUNDS, ("欧", "")),
    ("王小明", COMPOUNDS, ("王", "小明")),
    ("司马相如", frozenset({"司马", "欧阳"}), ("司马", "相如")),
    # Compound only matches at the start of the name
    ("王欧阳", COMPOUNDS, ("王", "欧阳")),
]


@pytest.mark.parametrize("name,compounds,expected", SPLIT_CASES)
def test_split(name, compounds, expected):
    assert SurnameSegmenter(compounds).split(name) == expected
    assert split_name(name, compounds) == expected


def test_split_empty_name_raises():
    with pytest.raises(EmptyNameError):
        SurnameSegmenter(COMPOUNDS).split("")


def test_empty_name_error_is_a_value_error():
    with pytest.raises(ValueError):
        split_name("", COMPOUNDS)


# ════════════════════════════════════════════════════════════════════════════════
# CHARACTER COMPARISON
# ════════════════════════════════════════════════════════════════════════════════

CHAR_CASES = [
    # Shorter code wins regardless of value: "5" vs "10"
    ("锋", "欧", -1),
    ("欧", "锋", 1),
    # Same code length, compared as strings: "10" vs "20"
    ("欧", "阳", -1),
    # Identical codes for different characters tie
    ("a", "b", 0),
    ("王", "五", 0),
    # Tie through the shorter length, then shorter string first
    ("a", "ab", -1),
    ("ab", "a", 1),
    ("ab", "ba", 0),
    # First differing position decides, later positions ignored
    ("锋欧", "欧锋", -1),
    # Missing characters use the default code "66666", longer than any table code
    ("丙", "欧", 1),
    ("丙", "丁", 0),
    ("", "", 0),
    ("", "锋", -1),
]


@pytest.mark.parametrize("a,b,expected", CHAR_CASES)
def test_compare_chars(comparator, a, b, expected):
    assert comparator.compare_chars(a, b) == expected


def test_code_length_beats_lexicographic_value():
    table = CodeTable.from_records([{"word": "甲", "order": "5"}, {"word": "乙", "order": "12"}])
    comparator = NameComparator(table, SurnameSegmenter(frozenset()))
    # "12" < "5" as strings, but the one-digit code still sorts first
    assert comparator.compare_chars("甲", "乙") == -1
    assert comparator.compare_chars("乙", "甲") == 1


def test_default_code_compares_like_a_real_code():
    table = CodeTable(codes=MappingProxyType({"甲": "66666", "乙": "66667", "丙": "123456"}))
    comparator = NameComparator(table, SurnameSegmenter(frozenset()))
    assert comparator.compare_chars("甲", "丁") == 0
    assert comparator.compare_chars("丁", "乙") == -1
    assert comparator.compare_chars("丙", "丁") == 1


# ════════════════════════════════════════════════════════════════════════════════
# NAME COMPARISON
# ════════════════════════════════════════════════════════════════════════════════


def test_compare_names_surname_first(comparator):
    # Surname 锋 ("5") against 欧阳 ("10" ...)
    assert comparator.compare_names("锋", "欧阳锋") == -1
    assert comparator.compare_names("欧阳锋", "锋") == 1


def test_compare_names_given_name_decides_shared_surname(comparator):
    assert comparator.compare_names("欧阳锋", "欧阳阳") == -1
    assert comparator.compare_names("王三", "王五") == -1
    assert comparator.compare_names("王五", "王三") == 1


def test_compare_names_compound_against_single_surname(comparator):
    # 欧 vs 欧阳: tie on 欧, then the shorter surname first
    assert comparator.compare_names("欧锋", "欧阳锋") == -1


def test_compare_names_rejects_empty_name(comparator):
    with pytest.raises(EmptyNameError):
        comparator.compare_names("", "锋")


# ════════════════════════════════════════════════════════════════════════════════
# SORT DRIVER
# ════════════════════════════════════════════════════════════════════════════════


def test_end_to_end_example():
    codes = {"欧": "10", "阳": "20", "锋": "5"}
    assert sort_names(["欧阳锋", "锋"], codes, frozenset({"欧阳"})) == ["锋", "欧阳锋"]


def test_shared_surname_ordered_by_given_name(sorter):
    assert sorter.sort(["王五", "王三五", "王三"]) == ["王三", "王三五", "王五"]


def test_sort_in_place_returns_same_list(sorter):
    names = ["欧阳锋", "锋", "李"]
    result = sorter.sort_in_place(names)
    assert result is names
    assert names == ["锋", "李", "欧阳锋"]


def test_sort_does_not_modify_input(sorter):
    names = ["欧阳锋", "锋"]
    assert sorter.sort(names) == ["锋", "欧阳锋"]
    assert names == ["欧阳锋", "锋"]


def test_duplicates_stay_put(sorter):
    assert sorter.sort(["甲", "甲"]) == ["甲", "甲"]


def test_ties_put_later_listed_name_first(sorter):
    # 丙 and 丁 both fall back to the default code and have equal length
    assert sorter.sort(["丙", "丁"]) == ["丁", "丙"]
    assert sorter.sort(["丁", "丙"]) == ["丙", "丁"]
    # a and b share a code
    assert sorter.sort(["a", "锋", "b"]) == ["b", "a", "锋"]


def test_missing_codes_sort_last(sorter):
    assert sorter.sort(["丙", "锋", "欧阳锋"]) == ["锋", "欧阳锋", "丙"]


def test_empty_name_aborts_before_sorting(sorter):
    names = ["欧阳锋", "", "锋"]
    with pytest.raises(EmptyNameError):
        sorter.sort_in_place(names)
    assert names == ["欧阳锋", "", "锋"]


def test_single_empty_name_is_rejected(sorter):
    with pytest.raises(EmptyNameError):
        sorter.sort([""])


def test_missing_code_report(sorter):
    report = sorter.missing_code_report(["丙锋", "丁", "丙"])
    assert report
    assert report.characters == ("丙", "丁")
    assert dict(report.pinyin) == {"丙": "bing", "丁": "ding"}
    assert report.format_lines() == [f"丙\tbing\t{DEFAULT_CODE}", f"丁\tding\t{DEFAULT_CODE}"]


def test_missing_code_report_empty_when_all_known(sorter):
    report = sorter.missing_code_report(["欧阳锋", "锋"])
    assert not report
    assert report.format_lines() == []

"""
Stroke-Code Name Sorting Module

This module orders lists of Chinese personal names by per-character ordering codes
(stroke/radical codes supplied by an external table), with explicit handling for
two-character compound surnames such as 欧阳 or 司马.

## Overview

The core functionality is provided by the `NameSorter` class, which runs a short pipeline:

1. **Loading**: Reads the code table (JSON), the compound surname list and the name list
2. **Segmentation**: Splits each name into (surname, given name), preferring a known compound surname
3. **Comparison**: Ranks two names character by character using their ordering codes
4. **Sorting**: Reverses the input, then applies a stable sort with the comparator
5. **Output**: Writes one name per line

## Ordering Rules

For each character position up to the length of the shorter string:

- **Code length first**: a shorter code sorts before a longer one ("5" before "12")
- **Code value second**: equal-length codes compare as ordinary strings
- **Default code**: characters missing from the table use `DEFAULT_CODE` and compare like any code

If every compared position ties, the shorter string sorts first. Surnames are compared
before given names; the given-name comparison decides only when surnames tie.

Because the input is reversed before a stable sort, names that compare equal come out
with the later-listed name first.

## Usage Examples

```python
from namesort.name_sorter import CodeTable, NameSorter

table = CodeTable.from_records([{"word": "欧", "order": "10"}, {"word": "锋", "order": "5"}])
sorter = NameSorter(table, frozenset({"欧阳"}))

sorter.sort(["欧阳锋", "锋"])
# Returns: ["锋", "欧阳锋"]

sorter.segmenter.split("欧阳锋")
# Returns: ("欧阳", "锋")
```

## Error Handling

- `SourceUnavailableError`: an input file cannot be opened or decoded
- `MalformedRecordError`: the code table is not a JSON list of {word, order} string records
- `EmptyNameError`: an empty name reached the segmenter

All three abort the run before any output is written. Missing character codes are not
errors; they fall back to `DEFAULT_CODE` and are listed by `NameSorter.missing_code_report`.

## Thread Safety

Code table and surname set are frozen after loading, and the comparator keeps no cache,
so a `NameSorter` can be shared across threads once constructed.
"""

from __future__ import annotations
import json
import logging
import time
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, FrozenSet
from functools import cmp_to_key
from dataclasses import dataclass, replace

import pypinyin
from namesort.names_data import DEFAULT_CODE, DEFAULT_FILES, BUILTIN_COMPOUND_SURNAMES


# ════════════════════════════════════════════════════════════════════════════════
# ERRORS
# ════════════════════════════════════════════════════════════════════════════════


class NameSortError(Exception):
    """Base class for every fatal error raised while sorting names."""


class SourceUnavailableError(NameSortError):
    """An input source could not be opened or read."""

    def __init__(self, path: Path, reason: str):
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path


class MalformedRecordError(NameSortError, ValueError):
    """A code table record does not have the {word: str, order: str} shape."""


class EmptyNameError(NameSortError, ValueError):
    """An empty name was given to the segmenter."""


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class SortConfig:
    """Immutable configuration for one sorting run."""

    # Directory the relative file names are resolved against
    data_dir: Path

    code_table_file: str
    compound_surnames_file: Optional[str]  # None means use BUILTIN_COMPOUND_SURNAMES
    names_file: str
    output_file: str

    encoding: str
    default_code: str

    @classmethod
    def create_default(cls) -> "SortConfig":
        """Configuration matching the fixed file names of the batch job."""
        return cls(
            data_dir=Path("."),
            code_table_file=DEFAULT_FILES["code_table"],
            compound_surnames_file=DEFAULT_FILES["compound_surnames"],
            names_file=DEFAULT_FILES["names"],
            output_file=DEFAULT_FILES["output"],
            encoding="utf-8",
            default_code=DEFAULT_CODE,
        )

    def with_data_dir(self, new_data_dir: Path) -> "SortConfig":
        return replace(self, data_dir=Path(new_data_dir))

    def with_files(self, **files: Optional[str]) -> "SortConfig":
        """Immutable update of any of the *_file fields, e.g. with_files(names_file="in.txt")."""
        unknown = [key for key in files if not key.endswith("_file") or not hasattr(self, key)]
        if unknown:
            raise TypeError(f"unknown file fields: {', '.join(sorted(unknown))}")
        return replace(self, **files)

    def path_for(self, filename: str) -> Path:
        return self.data_dir / filename


# ════════════════════════════════════════════════════════════════════════════════
# CODE TABLE
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class CodeTable:
    """Read-only character → ordering code lookup."""

    codes: Mapping[str, str]
    default_code: str = DEFAULT_CODE

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]], default_code: str = DEFAULT_CODE) -> "CodeTable":
        """
        Build a table from {word, order} records.

        Duplicate words keep the last record seen. Records must already be validated;
        see DataLoadingService.load_code_table for the checked path from JSON.
        """
        codes: Dict[str, str] = {}
        duplicates = 0
        for record in records:
            word = record["word"]
            if word in codes:
                duplicates += 1
            codes[word] = record["order"]

        if duplicates:
            logging.debug(f"Code table has {duplicates} duplicate words; last record wins")

        return cls(codes=MappingProxyType(codes), default_code=default_code)

    def code_for(self, char: str) -> str:
        return self.codes.get(char, self.default_code)

    lookup = code_for

    def missing(self, chars: Iterable[str]) -> List[str]:
        """Characters from `chars` with no table entry, in first-seen order."""
        seen = set()
        result = []
        for char in chars:
            if char not in self.codes and char not in seen:
                seen.add(char)
                result.append(char)
        return result

    def __contains__(self, char: object) -> bool:
        return char in self.codes

    def __len__(self) -> int:
        return len(self.codes)


# ════════════════════════════════════════════════════════════════════════════════
# SURNAME SEGMENTER
# ════════════════════════════════════════════════════════════════════════════════


class SurnameSegmenter:
    """Splits a name into (surname, given name) using a compound surname allow-list."""

    def __init__(self, compound_surnames: FrozenSet[str]):
        self._compound_surnames = frozenset(compound_surnames)

    @property
    def compound_surnames(self) -> FrozenSet[str]:
        return self._compound_surnames

    def split(self, name: str) -> Tuple[str, str]:
        if not name:
            raise EmptyNameError("cannot split an empty name")

        # Only a full two-character prefix can be a compound surname
        if len(name) >= 2 and name[:2] in self._compound_surnames:
            return name[:2], name[2:]

        return name[0], name[1:]


# ════════════════════════════════════════════════════════════════════════════════
# NAME COMPARATOR
# ════════════════════════════════════════════════════════════════════════════════


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


class NameComparator:
    """
    Orders names by ordering code. Both methods return -1, 0 or 1 in the
    style of a classic cmp function, ready for functools.cmp_to_key.
    """

    def __init__(self, code_table: CodeTable, segmenter: SurnameSegmenter):
        self._code_table = code_table
        self._segmenter = segmenter

    def compare_chars(self, a: str, b: str) -> int:
        """
        Compare two character sequences position by position.

        Codes are ranked by length first and string value second. The first
        differing position decides; if all positions up to the shorter length
        tie, the shorter sequence sorts first.
        """
        for c1, c2 in zip(a, b):
            code1 = self._code_table.code_for(c1)
            code2 = self._code_table.code_for(c2)

            order = _cmp(len(code1), len(code2)) or _cmp(code1, code2)
            if order:
                return order

        return _cmp(len(a), len(b))

    def compare_names(self, a: str, b: str) -> int:
        """Compare surnames first; the given names decide when surnames tie."""
        surname_a, given_a = self._segmenter.split(a)
        surname_b, given_b = self._segmenter.split(b)

        return self.compare_chars(surname_a, surname_b) or self.compare_chars(given_a, given_b)

    def sort_key(self):
        """Key wrapper for list.sort / sorted."""
        return cmp_to_key(self.compare_names)


# ════════════════════════════════════════════════════════════════════════════════
# MISSING CODE REPORT
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class MissingCodeReport:
    """Characters that fell back to the default code, with pinyin for readability."""

    characters: Tuple[str, ...]
    pinyin: Mapping[str, str]
    default_code: str

    @classmethod
    def build(cls, names: Iterable[str], code_table: CodeTable) -> "MissingCodeReport":
        missing = code_table.missing(char for name in names for char in name)
        return cls(
            characters=tuple(missing),
            pinyin=MappingProxyType({char: _char_to_pinyin(char) for char in missing}),
            default_code=code_table.default_code,
        )

    def __bool__(self) -> bool:
        return bool(self.characters)

    def format_lines(self) -> List[str]:
        return [f"{char}\t{self.pinyin[char]}\t{self.default_code}" for char in self.characters]


def _char_to_pinyin(char: str) -> str:
    """Toneless pinyin for a single character, or the character itself if conversion fails."""
    try:
        result = pypinyin.lazy_pinyin(char, style=pypinyin.Style.NORMAL)
    except (AttributeError, ValueError, TypeError) as e:
        logging.warning(f"Pypinyin failed for '{char}': {e}")
        return char
    return result[0] if result else char


# ════════════════════════════════════════════════════════════════════════════════
# DATA LOADING SERVICE
# ════════════════════════════════════════════════════════════════════════════════


class DataLoadingService:
    """Reads the code table, compound surname list and name list from disk."""

    def __init__(self, config: SortConfig):
        self._config = config

    def load_code_table(self) -> CodeTable:
        path = self._config.path_for(self._config.code_table_file)
        start_time = time.perf_counter()

        try:
            raw = json.loads(self._read_text(path))
        except json.JSONDecodeError as e:
            raise MalformedRecordError(f"{path} is not valid JSON: {e}") from e

        table = CodeTable.from_records(self._validate_records(raw, path), self._config.default_code)
        load_time = time.perf_counter() - start_time
        logging.info(f"Loaded ordering codes for {len(table)} characters in {load_time:.3f}s")
        return table

    def load_compound_surnames(self) -> FrozenSet[str]:
        if self._config.compound_surnames_file is None:
            logging.info(f"Using {len(BUILTIN_COMPOUND_SURNAMES)} built-in compound surnames")
            return BUILTIN_COMPOUND_SURNAMES

        path = self._config.path_for(self._config.compound_surnames_file)
        surnames = frozenset(self._read_lines(path))
        logging.info(f"Loaded {len(surnames)} compound surnames from {path}")
        return surnames

    def load_names(self) -> List[str]:
        path = self._config.path_for(self._config.names_file)
        names = self._read_lines(path)
        logging.info(f"Loaded {len(names)} names from {path}")
        return names

    def write_names(self, names: List[str]) -> Path:
        """Write one name per line, newline-terminated."""
        path = self._config.path_for(self._config.output_file)
        path.write_text("".join(f"{name}\n" for name in names), encoding=self._config.encoding)
        logging.info(f"Wrote {len(names)} names to {path}")
        return path

    def _read_text(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self._config.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise SourceUnavailableError(path, str(e)) from e

    def _read_lines(self, path: Path) -> List[str]:
        """Stripped, non-blank lines of a text file."""
        lines = (line.strip() for line in self._read_text(path).splitlines())
        return [line for line in lines if line]

    def _validate_records(self, raw: Any, path: Path) -> List[Dict[str, str]]:
        if not isinstance(raw, list):
            raise MalformedRecordError(f"{path}: expected a JSON list of records, got {type(raw).__name__}")

        for index, record in enumerate(raw):
            if not isinstance(record, dict):
                raise MalformedRecordError(f"{path}: record {index} is not an object")
            for field in ("word", "order"):
                if not isinstance(record.get(field), str):
                    raise MalformedRecordError(f"{path}: record {index} has no string '{field}'")

        return raw


# ════════════════════════════════════════════════════════════════════════════════
# SORT DRIVER
# ════════════════════════════════════════════════════════════════════════════════


class NameSorter:
    """Sorts names by ordering code; entry point for the batch job."""

    def __init__(self, code_table: CodeTable, compound_surnames: FrozenSet[str]):
        self._code_table = code_table
        self._segmenter = SurnameSegmenter(compound_surnames)
        self._comparator = NameComparator(code_table, self._segmenter)

    @classmethod
    def from_config(cls, config: Optional[SortConfig] = None) -> "NameSorter":
        loader = DataLoadingService(config or SortConfig.create_default())
        return cls(loader.load_code_table(), loader.load_compound_surnames())

    @property
    def code_table(self) -> CodeTable:
        return self._code_table

    @property
    def segmenter(self) -> SurnameSegmenter:
        return self._segmenter

    @property
    def comparator(self) -> NameComparator:
        return self._comparator

    def sort_in_place(self, names: List[str]) -> List[str]:
        """
        Reverse `names`, then stable-sort it with the name comparator.

        Among names that compare equal, the one listed later in the input ends
        up first. Returns the same list object.

        Raises EmptyNameError before touching the list if any name is empty.
        """
        for index, name in enumerate(names):
            if not name:
                raise EmptyNameError(f"name at position {index} is empty")

        names.reverse()
        names.sort(key=self._comparator.sort_key())
        return names

    def sort(self, names: Iterable[str]) -> List[str]:
        return self.sort_in_place(list(names))

    def missing_code_report(self, names: Iterable[str]) -> MissingCodeReport:
        return MissingCodeReport.build(names, self._code_table)

    def run(self, config: SortConfig) -> List[str]:
        """Load names, sort them and write the output file named by `config`."""
        loader = DataLoadingService(config)
        names = loader.load_names()

        report = self.missing_code_report(names)
        if report:
            logging.warning(
                f"{len(report.characters)} characters have no ordering code and use {report.default_code}: "
                + " ".join(report.characters)
            )

        start_time = time.perf_counter()
        self.sort_in_place(names)
        sort_time = time.perf_counter() - start_time
        logging.info(f"Sorted {len(names)} names in {sort_time:.3f}s")

        loader.write_names(names)
        return names


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════


def split_name(name: str, compound_surnames: FrozenSet[str]) -> Tuple[str, str]:
    return SurnameSegmenter(compound_surnames).split(name)


def sort_names(names: Iterable[str], codes: Mapping[str, str], compound_surnames: FrozenSet[str]) -> List[str]:
    """
    Sort names with a plain character → code mapping.

    Args:
        names: Input names, none of them empty
        codes: Ordering code per character
        compound_surnames: Known two-character surnames

    Returns:
        New list in sorted order
    """
    table = CodeTable(codes=MappingProxyType(dict(codes)))
    return NameSorter(table, compound_surnames).sort(names)


def run_batch(config: Optional[SortConfig] = None) -> List[str]:
    """Run the whole batch job: load, sort, write."""
    config = config or SortConfig.create_default()
    return NameSorter.from_config(config).run(config)

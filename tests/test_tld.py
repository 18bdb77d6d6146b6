from __future__ import annotations

import re
from pathlib import Path

import pytest
import tldextract

from domain_validate.options import ValidatorOptions
from domain_validate.tld import (
    TldTable,
    load_tld_table,
    private_tld_matches,
    tld_exists,
    tld_is_valid,
)


def test_builtin_table_contains_common_tlds() -> None:
    table = load_tld_table()
    assert table.version == tldextract.__version__
    assert len(table) > 1000
    for tld in ("com", "net", "org", "uk", "cx", "museum", "xn--p1ai"):
        assert tld in table.tlds


def test_builtin_table_is_loaded_once() -> None:
    assert load_tld_table() is load_tld_table()


def test_builtin_table_follows_bundled_suffix_list() -> None:
    extractor = tldextract.TLDExtract(
        cache_dir=None, suffix_list_urls=(), include_psl_private_domains=False
    )
    table = load_tld_table()
    single_label = {s for s in extractor.tlds if "." not in s and s.isascii()}
    assert single_label <= table.tlds
    # Wildcard-only zones still contribute their TLD.
    assert "ck" in table.tlds
    assert all(tld.isascii() and tld == tld.lower() for tld in table.tlds)


def test_builtin_table_tracks_retired_and_added_tlds() -> None:
    assert not tld_exists("fiat")
    assert not tld_exists("abarth")
    assert tld_exists("merck")
    assert tld_exists("wed")


@pytest.mark.parametrize("label", ["com", "COM", "Org", "XN--P1AI"])
def test_tld_exists_is_case_insensitive(label: str) -> None:
    assert tld_exists(label)


@pytest.mark.parametrize("label", ["neely", "internal", "localhost", "1", "184", ""])
def test_tld_exists_rejects_unregistered(label: str) -> None:
    assert not tld_exists(label)


def test_private_set_folds_label_case_only() -> None:
    assert private_tld_matches("NEELY", frozenset({"neely"}))
    # Keys are used verbatim; upper-case keys never match.
    assert not private_tld_matches("neely", frozenset({"NEELY"}))


def test_private_pattern_matches_original_case() -> None:
    pattern = re.compile(r"^(?:corp|lan)$")
    assert private_tld_matches("lan", pattern)
    assert not private_tld_matches("LAN", pattern)


def test_private_pattern_is_searched_not_anchored() -> None:
    assert private_tld_matches("mycorp", re.compile("corp"))


@pytest.mark.parametrize("private_tld", ["neely", 42, object(), re.compile(b"neely")])
def test_unsupported_private_tld_never_matches(private_tld: object) -> None:
    assert not private_tld_matches("neely", private_tld)


def test_tld_is_valid_private_set_short_circuits() -> None:
    opts = ValidatorOptions(private_tld={"neely"})
    assert tld_is_valid("neely", opts)
    assert tld_is_valid("com", opts)
    assert not tld_is_valid("lan", opts)


def test_tld_is_valid_pattern_case_asymmetry() -> None:
    opts = ValidatorOptions(private_tld=re.compile(r"^lan$"))
    assert tld_is_valid("lan", opts)
    assert not tld_is_valid("LAN", opts)
    assert tld_is_valid("COM", opts)


def test_tld_is_valid_degrades_on_bad_private_tld() -> None:
    opts = ValidatorOptions(private_tld=42)
    assert tld_is_valid("com", opts)
    assert not tld_is_valid("neely", opts)


def test_tld_is_valid_with_replacement_table() -> None:
    table = TldTable(version="t", tlds=frozenset({"lan"}))
    assert tld_is_valid("LAN", ValidatorOptions(), table)
    assert not tld_is_valid("com", ValidatorOptions(), table)


def test_load_tld_table_from_file(tmp_path: Path) -> None:
    path = tmp_path / "tlds.txt"
    path.write_text(
        "# Version 2026101900, internal zones\n"
        "\n"
        "LAN\n"
        "corp  # build farm\n"
        "# trailing comment\n"
        "xn--p1ai\n",
        encoding="utf-8",
    )

    table = load_tld_table(path)
    assert table.version == "2026101900"
    assert table.tlds == frozenset({"lan", "corp", "xn--p1ai"})


def test_load_tld_table_without_version_header(tmp_path: Path) -> None:
    path = tmp_path / "tlds.txt"
    path.write_text("lan\n", encoding="utf-8")
    assert load_tld_table(path).version == "unknown"


def test_load_tld_table_rejects_invalid_entry(tmp_path: Path) -> None:
    path = tmp_path / "tlds.txt"
    path.write_text("lan\nnot valid\n", encoding="utf-8")

    with pytest.raises(ValueError, match=r"tlds\.txt:2: invalid TLD entry"):
        load_tld_table(path)


def test_load_tld_table_rejects_empty_file(tmp_path: Path) -> None:
    path = tmp_path / "tlds.txt"
    path.write_text("# Version 1\n", encoding="utf-8")

    with pytest.raises(ValueError, match="empty"):
        load_tld_table(path)


def test_load_tld_table_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_tld_table(tmp_path / "missing.txt")

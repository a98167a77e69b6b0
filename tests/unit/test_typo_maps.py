from __future__ import annotations

import json

import pytest

from core.typo_maps import (
    DEFAULT_POPULAR_DOMAINS,
    DEFAULT_TYPO_MAPS,
    build_typo_maps,
    load_typo_maps,
)


def test_default_maps_cover_major_providers():
    canonical = set(DEFAULT_TYPO_MAPS.domain_typos.values())
    for provider in ("gmail.com", "yahoo.com", "hotmail.com", "outlook.com",
                     "aol.com", "live.com", "msn.com", "icloud.com", "me.com"):
        assert provider in canonical


def test_lookalikes_map_to_themselves():
    assert DEFAULT_TYPO_MAPS.canonical_domain("yahoo.co.uk") == "yahoo.co.uk"
    assert DEFAULT_TYPO_MAPS.canonical_domain("ymail.com") == "ymail.com"


def test_tld_typos_are_suffixes():
    assert all(key.startswith(".") for key in DEFAULT_TYPO_MAPS.tld_typos)
    assert DEFAULT_TYPO_MAPS.tld_typos[".con"] == ".com"


def test_popular_domain_order():
    assert DEFAULT_TYPO_MAPS.popular_domains == DEFAULT_POPULAR_DOMAINS
    assert DEFAULT_POPULAR_DOMAINS[0] == "gmail.com"


def test_maps_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_TYPO_MAPS.domain_typos["gmail.con"] = "nope.com"
    with pytest.raises(TypeError):
        DEFAULT_TYPO_MAPS.tld_typos[".con"] = ".net"


def test_build_overlays_and_lowercases():
    maps = build_typo_maps(domain_typos={"ProtonMail.CON": "protonmail.com"})
    assert maps.canonical_domain("protonmail.con") == "protonmail.com"
    # defaults still present
    assert maps.canonical_domain("gmail.con") == "gmail.com"


def test_build_skips_tld_entries_without_dot():
    maps = build_typo_maps(tld_typos={"con": "com", ".cm0": ".com"})
    assert "con" not in maps.tld_typos
    assert maps.tld_typos[".cm0"] == ".com"


def test_load_without_path_returns_defaults():
    assert load_typo_maps(None) is DEFAULT_TYPO_MAPS


def test_load_missing_file_returns_defaults(tmp_path):
    assert load_typo_maps(str(tmp_path / "missing.json")) is DEFAULT_TYPO_MAPS


def test_load_bad_json_returns_defaults(tmp_path):
    path = tmp_path / "typo_maps.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_typo_maps(str(path)) is DEFAULT_TYPO_MAPS


def test_load_from_file(tmp_path):
    path = tmp_path / "typo_maps.json"
    path.write_text(json.dumps({
        "domain_typos": {"examp1e.com": "example.com"},
        "popular_domains": ["example.com"],
    }), encoding="utf-8")

    maps = load_typo_maps(str(path))

    assert maps.canonical_domain("examp1e.com") == "example.com"
    assert maps.popular_domains == ("example.com",)

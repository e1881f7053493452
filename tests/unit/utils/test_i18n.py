from __future__ import annotations

"""
Unit tests for the i18n resource manager.
"""

from codevisualizer.utils.i18n import I18n, i18n


def test_singleton_loads_english():
    assert i18n.is_loaded
    assert i18n.locale == "en"
    assert i18n.t("cli.categories.ai_ml") == "AI / ML"


def test_interpolation():
    assert i18n.t("cli.status.exported", path="out.json") == "Graph written to out.json"


def test_missing_key_returns_default_or_key():
    assert i18n.t("cli.nope.missing") == "cli.nope.missing"
    assert i18n.t("cli.nope.missing", default="fallback") == "fallback"


def test_non_leaf_key_is_treated_as_missing():
    assert i18n.t("cli.status") == "cli.status"


def test_missing_placeholder_returns_template():
    assert i18n.t("cli.status.exported", other="x") == "Graph written to {path}"


def test_unknown_locale_leaves_empty_catalog():
    manager = I18n("xx")

    assert manager.is_loaded is False
    assert manager.t("cli.status.exported") == "cli.status.exported"

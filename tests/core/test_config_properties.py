"""
Property-based tests for the configuration tree and loader.
"""

import json

import allure
import pytest
from hypothesis import given, settings, strategies as st

from powerprompt.config import ConfigTree, get_array, load_config, resolve_config_path
from powerprompt.constants import CONFIG_ENV_VAR, DEFAULT_CONFIG
from powerprompt.errors import ConvertError, ErrorKind


# Strategies for generating test data

key_strategy = st.text(alphabet="abcdefghijklmnopqrstuvwxyz_", min_size=1, max_size=12)

scalar_strategy = st.one_of(
    st.integers(),
    st.booleans(),
    st.text(max_size=30),
    st.floats(allow_nan=False),
)

array_strategy = st.lists(
    st.one_of(st.integers(), st.text(max_size=10), st.booleans()),
    max_size=10,
)


# **Property 1: Array reads are non-destructive**
@allure.feature("Config Accessor")
@allure.story("Non-destructive array reads")
@allure.severity(allure.severity_level.CRITICAL)
@settings(max_examples=100)
@given(
    keys=st.lists(key_strategy, min_size=2, max_size=2, unique=True),
    first=array_strategy,
    second=array_strategy,
)
def test_get_array_is_repeatable(keys: list[str], first: list, second: list):
    """
    Property 1: Array reads are non-destructive

    For any tree holding arrays, get_array returns an equal list, and a
    second read of the same tree (same key or a different one) still works.
    """
    key_a, key_b = keys
    tree = ConfigTree({"section": {key_a: first, key_b: second}})

    assert get_array(f"section.{key_a}", tree) == first
    assert get_array(f"section.{key_b}", tree) == second
    assert get_array(f"section.{key_a}", tree) == first


# **Property 2: Scalars are not arrays**
@allure.feature("Config Accessor")
@allure.story("Scalars are not arrays")
@settings(max_examples=100)
@given(key=key_strategy, value=scalar_strategy)
def test_get_array_returns_none_for_scalars(key: str, value):
    """
    Property 2: Scalars are not arrays

    For any key bound to a non-array scalar, get_array returns None.
    """
    tree = ConfigTree({key: value})

    assert get_array(key, tree) is None


@settings(max_examples=50)
@given(value=array_strategy)
def test_mutating_returned_array_leaves_tree_intact(value: list):
    """Changing the list handed out must not change what the tree holds."""
    tree = ConfigTree({"numbers": value})

    returned = get_array("numbers", tree)
    returned.append("extra")
    returned.clear()

    assert get_array("numbers", tree) == value


def test_get_array_on_mixed_tree():
    tree = ConfigTree({"numbers": [1, 2, 3], "boolean": True})

    assert get_array("numbers", tree) == [1, 2, 3]
    assert get_array("boolean", tree) is None
    assert get_array("missing", tree) is None
    assert get_array("numbers.deeper", tree) is None


def test_tree_is_isolated_from_its_input():
    data = {"modules": {"order": ["prompt"]}}
    tree = ConfigTree(data)

    data["modules"]["order"].append("text")

    assert get_array("modules.order", tree) == ["prompt"]


def test_null_is_treated_as_absent():
    tree = ConfigTree({"modules": {"prompt": None}})

    assert "modules.prompt" not in tree
    assert tree.get("modules.prompt", "fallback") == "fallback"
    assert tree.get_table("modules.prompt") is None


class TestTypedAccessors:
    """Tests for the typed read helpers on ConfigTree."""

    def test_absent_keys_read_as_none(self):
        tree = ConfigTree()

        assert tree.get_str("a.b") is None
        assert tree.get_bool("a.b") is None
        assert tree.get_int("a.b") is None
        assert tree.get_table("a.b") is None

    def test_get_int_accepts_numeric_strings(self):
        tree = ConfigTree({"padding": " 42 ", "count": 7})

        assert tree.get_int("padding") == 42
        assert tree.get_int("count") == 7

    def test_get_int_maps_parse_failure_to_invalid_form(self):
        tree = ConfigTree({"padding": "wide"})

        with pytest.raises(ConvertError) as exc_info:
            tree.get_int("padding")

        assert exc_info.value.kind is ErrorKind.INVALID_FORM
        assert exc_info.value.key == "padding"
        assert exc_info.value.__cause__ is None

    @pytest.mark.parametrize("value", [True, 1.5, [1], {"a": 1}])
    def test_get_int_rejects_other_types(self, value):
        tree = ConfigTree({"padding": value})

        with pytest.raises(ConvertError) as exc_info:
            tree.get_int("padding")

        assert exc_info.value.kind is ErrorKind.INVALID_TYPE_IN_CONFIG

    def test_get_bool_rejects_strings(self):
        tree = ConfigTree({"enabled": "yes"})

        with pytest.raises(ConvertError) as exc_info:
            tree.get_bool("enabled")

        assert exc_info.value.kind is ErrorKind.INVALID_TYPE_IN_CONFIG

    def test_get_str_rejects_numbers(self):
        tree = ConfigTree({"symbol": 5})

        with pytest.raises(ConvertError) as exc_info:
            tree.get_str("symbol")

        assert exc_info.value.kind is ErrorKind.INVALID_TYPE_IN_CONFIG

    def test_get_table_returns_a_copy(self):
        tree = ConfigTree({"style": {"background": "green"}})

        table = tree.get_table("style")
        table["background"] = "red"

        assert tree.get_table("style") == {"background": "green"}


# **Property 3: Layering prefers overrides**
@allure.feature("Config Loading")
@allure.story("Layered merge")
@settings(max_examples=100)
@given(
    base=st.dictionaries(key_strategy, scalar_strategy, max_size=5),
    overrides=st.dictionaries(key_strategy, scalar_strategy, max_size=5),
)
def test_merged_prefers_overrides(base: dict, overrides: dict):
    """
    Property 3: Layering prefers overrides

    Keys only in the base survive; keys in the override win.
    """
    tree = ConfigTree({"section": base}).merged({"section": overrides})

    for key, value in base.items():
        if key not in overrides:
            assert tree.get(f"section.{key}") == value
    for key, value in overrides.items():
        assert tree.get(f"section.{key}") == value


def test_merged_replaces_arrays_and_keeps_base_untouched():
    base = ConfigTree({"modules": {"order": ["prompt"], "prompt": {"symbol": "$"}}})

    merged = base.merged({"modules": {"order": ["text", "prompt"]}})

    assert get_array("modules.order", merged) == ["text", "prompt"]
    assert merged.get_str("modules.prompt.symbol") == "$"
    assert get_array("modules.order", base) == ["prompt"]


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_gives_defaults(self, tmp_path):
        tree = load_config(tmp_path / "absent.toml")

        assert tree == ConfigTree(DEFAULT_CONFIG)

    def test_toml_file_is_layered_over_defaults(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(
            '[modules.prompt.style_error]\nbackground = "magenta"\n',
            encoding="utf-8",
        )

        tree = load_config(path)

        assert tree.get("modules.prompt.style_error.background") == "magenta"
        assert tree.get("modules.prompt.style_error.foreground") == "white"
        assert tree.get("modules.prompt.style_success.background") == "green"

    def test_json_file_is_read_by_suffix(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"modules": {"order": ["text"]}}), encoding="utf-8")

        tree = load_config(path)

        assert get_array("modules.order", tree) == ["text"]

    def test_malformed_file_falls_back_to_defaults(self, tmp_path, caplog):
        path = tmp_path / "config.toml"
        path.write_text("this is = = not toml", encoding="utf-8")

        with caplog.at_level("WARNING", logger="powerprompt.config"):
            tree = load_config(path)

        assert tree == ConfigTree(DEFAULT_CONFIG)
        assert "Failed to load config file" in caplog.text

    def test_non_table_json_falls_back_to_defaults(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        assert load_config(path) == ConfigTree(DEFAULT_CONFIG)

    def test_environment_variable_selects_file(self, tmp_path):
        path = tmp_path / "from_env.toml"
        path.write_text('divider = ">"\n', encoding="utf-8")

        tree = load_config(environ={CONFIG_ENV_VAR: str(path)})

        assert tree.get_str("divider") == ">"

    def test_explicit_path_beats_environment(self, tmp_path):
        explicit = tmp_path / "explicit.toml"

        resolved = resolve_config_path(explicit, environ={CONFIG_ENV_VAR: "/elsewhere.toml"})

        assert resolved == explicit

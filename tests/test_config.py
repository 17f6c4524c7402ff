"""Tests for ContextVar configuration and option parsing."""

import threading

import pytest

from llaves.config import (
    AttributeOptions,
    ParseConfig,
    get_parse_config,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from llaves.errors import ConfigError


class TestDefaults:
    """Default values."""

    def test_attribute_option_defaults(self) -> None:
        options = AttributeOptions()
        assert options.scope == "extended"
        assert options.extend == {}
        assert options.allow_dangerous_handlers is False
        assert options.enable_heading_inline is True
        assert options.disable_block is False

    def test_parse_config_defaults(self) -> None:
        config = ParseConfig()
        assert config.tables_enabled is False
        assert config.strikethrough_enabled is False
        assert config.attributes_enabled is True
        assert config.attribute_options == AttributeOptions()

    def test_frozen(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.tables_enabled = True  # type: ignore[misc]


class TestAttributeOptionsFromDict:
    """AttributeOptions.from_dict."""

    def test_all_options(self) -> None:
        options = AttributeOptions.from_dict(
            {
                "scope": "global",
                "extend": {"image": ["loading"], "*": ("x",)},
                "allow_dangerous_handlers": True,
                "enable_heading_inline": False,
                "disable_block": True,
            }
        )
        assert options.scope == "global"
        assert options.extend == {"image": ("loading",), "*": ("x",)}
        assert options.allow_dangerous_handlers
        assert not options.enable_heading_inline
        assert options.disable_block

    def test_unknown_keys_ignored(self) -> None:
        assert AttributeOptions.from_dict({"nope": 1}) == AttributeOptions()

    def test_scope_must_be_string(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            AttributeOptions.from_dict({"scope": 3})
        assert exc_info.value.option == "scope"

    @pytest.mark.parametrize(
        "extend",
        [["image"], {"image": "loading"}, {"image": [1]}, {"image": 5}],
    )
    def test_bad_extend(self, extend: object) -> None:
        with pytest.raises(ConfigError, match="extend"):
            AttributeOptions.from_dict({"extend": extend})

    def test_extend_none_entry(self) -> None:
        options = AttributeOptions.from_dict({"extend": {"image": None}})
        assert options.extend == {"image": ()}


class TestParseConfigFromDict:
    """ParseConfig.from_dict."""

    def test_nested_options(self) -> None:
        config = ParseConfig.from_dict(
            {
                "tables_enabled": True,
                "attribute_options": {"scope": "permissive"},
                "unknown_key": "ignored",
            }
        )
        assert config.tables_enabled
        assert config.attribute_options.scope == "permissive"

    def test_options_instance_kept(self) -> None:
        options = AttributeOptions(scope="none")
        assert ParseConfig.from_dict({"attribute_options": options}).attribute_options is options

    def test_bad_options(self) -> None:
        with pytest.raises(ConfigError, match="attribute_options"):
            ParseConfig.from_dict({"attribute_options": "permissive"})


class TestContext:
    """ContextVar helpers."""

    def test_set_and_reset(self) -> None:
        default = get_parse_config()
        custom = ParseConfig(tables_enabled=True)
        set_parse_config(custom)
        try:
            assert get_parse_config() is custom
        finally:
            reset_parse_config()
        assert get_parse_config() == default

    def test_context_manager_restores_on_error(self) -> None:
        before = get_parse_config()
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(strikethrough_enabled=True)):
                assert get_parse_config().strikethrough_enabled
                raise RuntimeError("boom")
        assert get_parse_config() is before

    def test_threads_are_isolated(self) -> None:
        seen: list[bool] = []
        ready = threading.Event()

        def worker() -> None:
            ready.wait()
            seen.append(get_parse_config().tables_enabled)

        thread = threading.Thread(target=worker)
        thread.start()
        with parse_config_context(ParseConfig(tables_enabled=True)):
            ready.set()
            thread.join()
        assert seen == [False]

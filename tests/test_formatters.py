"""Tests for the error formatter registry."""

from drupal_check.formatters import (
    DEFAULT_FORMATTERS,
    FormatterHandle,
    FormatterRegistry,
    canonical_format_name,
    default_registry,
)


class TestCanonicalFormatName:

    def test_json_alias(self):
        assert canonical_format_name("json") == "prettyJson"

    def test_other_names_unchanged(self):
        for name in ("table", "junit", "prettyJson", "checkstyle", "nope"):
            assert canonical_format_name(name) == name


class TestFormatterRegistry:
    """Test suite for FormatterRegistry."""

    def test_json_and_pretty_json_resolve_to_same_handle(self):
        """The json alias and prettyJson share one handle."""
        registry = default_registry()
        assert registry.get(canonical_format_name("json")) is registry.get("prettyJson")

    def test_names_strip_service_prefix(self):
        """Listing names drops the errorFormatter. prefix."""
        registry = FormatterRegistry(["table", "errorFormatter.junit"])

        assert registry.service_ids() == ["errorFormatter.table", "errorFormatter.junit"]
        assert registry.names() == ["table", "junit"]

    def test_register_is_idempotent(self):
        registry = FormatterRegistry()
        first = registry.register("table")
        second = registry.register("table")

        assert first is second
        assert len(registry) == 1

    def test_lookup_miss(self):
        registry = default_registry()
        assert registry.get("xml") is None
        assert not registry.has("xml")

    def test_default_registry_contents(self):
        registry = default_registry()
        assert registry.names() == list(DEFAULT_FORMATTERS)
        for name in ("table", "prettyJson", "junit"):
            assert registry.has(name)

    def test_handle_service_id(self):
        assert FormatterHandle("table").service_id == "errorFormatter.table"

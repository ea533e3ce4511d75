"""Tests for in-source option parsing and comment hint overlays."""

from __future__ import annotations

from i18next_keyscan.comments import parse_comment_hints
from i18next_keyscan.keys import ParsedOptions
from i18next_keyscan.options import (
    options_from_call_arguments,
    options_from_object,
    options_from_trans_attributes,
    resolve_options,
    static_string,
)
from i18next_keyscan.syntax.nodes import ArrayExpression

from tests.utils.tree_helpers import attr, comment, ident, jsx, lit, obj


class TestCallOptions:
    """Test cases for options passed to ``t()``."""

    def test_no_options(self) -> None:
        """A bare key has default options."""
        assert options_from_call_arguments([lit("key")]) == ParsedOptions()

    def test_options_object(self) -> None:
        """count, context, ns and defaultValue are all recognized."""
        options = options_from_call_arguments(
            [lit("key"), obj(count=ident("n"), context="male", ns="common", defaultValue="Hi")]
        )

        assert options == ParsedOptions(
            contexts=("male",), has_count=True, ns="common", default_value="Hi"
        )

    def test_dynamic_context(self) -> None:
        """A context that is not statically known is still a context."""
        options = options_from_object(obj(context=ident("gender")))

        assert options.contexts is True

    def test_default_value_as_second_argument(self) -> None:
        """``t(key, 'default', {options})`` is supported."""
        options = options_from_call_arguments(
            [lit("key"), lit("Default text"), obj(count=1)]
        )

        assert options.default_value == "Default text"
        assert options.has_count is True

    def test_unevaluable_option_values_are_left_unset(self) -> None:
        """Dynamic ns and defaultValue never raise."""
        options = options_from_object(obj(ns=ident("ns"), defaultValue=ident("text")))

        assert options.ns is None
        assert options.default_value is None

    def test_static_string_takes_first_array_element(self) -> None:
        """Namespace arrays use their first entry."""
        assert static_string(ArrayExpression([lit("common"), lit("extra")])) == "common"
        assert static_string(ArrayExpression([])) is None


class TestTransOptions:
    """Test cases for options read from ``<Trans>`` attributes."""

    def test_trans_attributes(self) -> None:
        """count, context, ns and defaults attributes are read."""
        element = jsx(
            "Trans",
            attrs=[
                attr("count", ident("n")),
                attr("context", "female"),
                attr("ns", "profile"),
                attr("defaults", "Hello"),
            ],
        )

        assert options_from_trans_attributes(element) == ParsedOptions(
            contexts=("female",), has_count=True, ns="profile", default_value="Hello"
        )

    def test_context_from_t_options(self) -> None:
        """``tOptions={{ context }}`` sets the context too."""
        element = jsx("Trans", attrs=[attr("tOptions", obj(context=ident("gender")))])

        assert options_from_trans_attributes(element).contexts is True


class TestResolveOptions:
    """Test cases for overlaying comment hints."""

    def test_hint_replaces_whole_field(self) -> None:
        """Hinted fields replace in-source values; others are kept."""
        hints = parse_comment_hints(
            [
                comment(" i18next-extract-mark-context-next-line male,female", 1),
                comment(" i18next-extract-mark-plural-next-line disable", 1),
            ]
        )
        in_source = ParsedOptions(contexts=("other",), has_count=True, ns="common")

        resolved = resolve_options(in_source, ident("t", line=2), hints)

        assert resolved == ParsedOptions(
            contexts=("male", "female"), has_count=False, ns="common"
        )

    def test_no_hint_keeps_options(self) -> None:
        """Without hints the in-source options are returned unchanged."""
        in_source = ParsedOptions(ns="common")

        assert resolve_options(in_source, ident("t", line=2), []) is in_source

"""Tests for the hook, render prop, HOC, instance and bare ``t`` extractors."""

from __future__ import annotations

import pytest

from i18next_keyscan.comments import parse_comment_hints
from i18next_keyscan.config.schema import KeyScanConfig
from i18next_keyscan.extractors import (
    EXTRACTORS_PRIORITIES,
    extractors_for,
    get_priority,
)
from i18next_keyscan.extractors.i18next_instance import extract_i18next_instance
from i18next_keyscan.extractors.t_function import extract_t_function
from i18next_keyscan.extractors.translation_render_prop import (
    extract_translation_render_prop,
)
from i18next_keyscan.extractors.use_translation_hook import (
    extract_use_translation_hook,
)
from i18next_keyscan.extractors.with_translation_hoc import (
    extract_with_translation_hoc,
)
from i18next_keyscan.syntax.nodes import (
    ArrayExpression,
    ArrayPattern,
    BinaryExpression,
    CallExpression,
    FunctionDef,
    Opaque,
)
from i18next_keyscan.utils.core.exceptions import (
    ExtractionError,
    PartialExtractionError,
)

from tests.utils.tree_helpers import (
    analyzed,
    arrow,
    attr,
    call,
    class_def,
    comment,
    const,
    expr,
    function_def,
    ident,
    import_from,
    jsx,
    lit,
    member,
    method,
    obj,
    object_pattern,
    returns,
    stmt,
    this_props,
)


class TestRegistry:
    """Test cases for extractor priorities and dispatch."""

    def test_priority_order(self) -> None:
        """Extractors are ranked from most to least specific."""
        assert EXTRACTORS_PRIORITIES == (
            "extract_trans_component",
            "extract_use_translation_hook",
            "extract_translation_render_prop",
            "extract_with_translation_hoc",
            "extract_i18next_instance",
            "extract_t_function",
        )
        assert get_priority("extract_trans_component") < get_priority("extract_t_function")

    def test_unknown_extractor(self) -> None:
        """Unregistered names are rejected."""
        with pytest.raises(ValueError, match="Unknown extractor"):
            _ = get_priority("extract_nothing")

    def test_dispatch_by_node_type(self) -> None:
        """Each node type reaches only the extractors that inspect it."""
        call_names = [info.name for info in extractors_for(call("t", "k"))]
        element_names = [info.name for info in extractors_for(jsx("p"))]
        class_names = [info.name for info in extractors_for(class_def("C"))]

        assert call_names == [
            "extract_use_translation_hook",
            "extract_i18next_instance",
            "extract_t_function",
        ]
        assert element_names == [
            "extract_trans_component",
            "extract_translation_render_prop",
        ]
        assert class_names == ["extract_with_translation_hoc"]
        assert extractors_for(ident("x")) == []


class TestUseTranslationHook:
    """Test cases for ``useTranslation`` bindings."""

    def test_destructured_t(self, base_config: KeyScanConfig) -> None:
        """``const { t } = useTranslation('common')`` binds its namespace to t calls."""
        hook = call("useTranslation", "common", line=2)
        title = call("t", "title", line=3)
        items = call("t", "items", obj(count=ident("n")), line=4)
        _ = analyzed(
            import_from("react-i18next", named=["useTranslation"]),
            const(object_pattern("t"), hook, line=2),
            stmt(title),
            stmt(items),
        )

        keys = extract_use_translation_hook(hook, base_config)

        assert [k.key for k in keys] == ["title", "items"]
        assert all(k.parsed_options.ns == "common" for k in keys)
        assert keys[1].parsed_options.has_count
        assert keys[0].source_nodes == (title, hook)

    def test_array_and_aliased_bindings(self, base_config: KeyScanConfig) -> None:
        """``[t]`` and ``{ t: translate }`` forms are followed too."""
        array_hook = call("useTranslation", line=1)
        alias_hook = call("useTranslation", line=3)
        _ = analyzed(
            import_from("react-i18next", named=["useTranslation"]),
            const(ArrayPattern([ident("t")]), array_hook, line=1),
            stmt(call("t", "from.array", line=2)),
            const(object_pattern(("t", "translate")), alias_hook, line=3),
            stmt(call("translate", "from.alias", line=4)),
        )

        assert [k.key for k in extract_use_translation_hook(array_hook, base_config)] == [
            "from.array"
        ]
        assert [k.key for k in extract_use_translation_hook(alias_hook, base_config)] == [
            "from.alias"
        ]

    def test_member_calls_on_result(self, base_config: KeyScanConfig) -> None:
        """``const i18n = useTranslation(); i18n.t(...)`` is followed."""
        hook = call("useTranslation", line=1)
        _ = analyzed(
            import_from("react-i18next", named=["useTranslation"]),
            const("translation", hook, line=1),
            stmt(call(member("translation", "t"), "via.member", line=2)),
        )

        assert [k.key for k in extract_use_translation_hook(hook, base_config)] == [
            "via.member"
        ]

    def test_key_prefix(self, base_config: KeyScanConfig) -> None:
        """keyPrefix is prepended after any namespace written in the key."""
        hook = call("useTranslation", "common", obj(keyPrefix="home"), line=1)
        _ = analyzed(
            import_from("react-i18next", named=["useTranslation"]),
            const(object_pattern("t"), hook, line=1),
            stmt(call("t", "title", line=2)),
            stmt(call("t", "other:intro", line=3)),
        )

        keys = extract_use_translation_hook(hook, base_config)

        assert [k.key for k in keys] == ["home.title", "other:home.intro"]

    def test_unbound_or_foreign_hook(self, base_config: KeyScanConfig) -> None:
        """Unbound calls and hooks from other modules are ignored."""
        unbound = call("useTranslation", line=1)
        foreign = call("useTranslation", line=3)
        _ = analyzed(
            import_from("react-i18next", named=["useTranslation"]),
            stmt(unbound),
            function_def(
                "Widget",
                [],
                [
                    const("useTranslation", call("makeHook"), line=2),
                    const(object_pattern("t"), foreign, line=3),
                    stmt(call("t", "shadowed", line=4)),
                ],
            ),
        )

        assert extract_use_translation_hook(unbound, base_config) == []
        assert extract_use_translation_hook(foreign, base_config) == []

    def test_custom_hook(self) -> None:
        """Configured hooks behave like useTranslation."""
        config = KeyScanConfig(custom_use_translation_hooks=[("./i18n", "useT")])
        hook = call("useT", line=1)
        _ = analyzed(
            import_from("./i18n", named=["useT"]),
            const(object_pattern("t"), hook, line=1),
            stmt(call("t", "custom", line=2)),
        )

        assert [k.key for k in extract_use_translation_hook(hook, config)] == ["custom"]

    def test_failing_site_keeps_siblings(self, base_config: KeyScanConfig) -> None:
        """One unevaluable t call does not lose the other keys of the hook."""
        hook = call("useTranslation", line=1)
        dynamic = call("t", ident("key", line=3), line=3)
        _ = analyzed(
            import_from("react-i18next", named=["useTranslation"]),
            const(object_pattern("t"), hook, line=1),
            stmt(call("t", "before", line=2)),
            stmt(dynamic),
            stmt(call("t", "after", line=4)),
        )

        with pytest.raises(PartialExtractionError) as info:
            _ = extract_use_translation_hook(hook, base_config)

        assert [k.key for k in info.value.keys] == ["before", "after"]
        assert len(info.value.errors) == 1
        assert info.value.errors[0].node is dynamic

    def test_disabled_sites_are_skipped(self, base_config: KeyScanConfig) -> None:
        """A disable hint on a t call skips only that call."""
        hook = call("useTranslation", line=1)
        _ = analyzed(
            import_from("react-i18next", named=["useTranslation"]),
            const(object_pattern("t"), hook, line=1),
            stmt(call("t", ident("dynamic", line=3), line=3)),
            stmt(call("t", "kept", line=4)),
        )
        hints = parse_comment_hints([comment(" i18next-extract-disable-line", 3)])

        assert [k.key for k in extract_use_translation_hook(hook, base_config, hints)] == [
            "kept"
        ]


class TestTranslationRenderProp:
    """Test cases for the ``<Translation>`` render prop."""

    def test_render_function_calls(self, base_config: KeyScanConfig) -> None:
        """Calls of the render function's first parameter are extracted."""
        hello = call("t", "hello", line=2)
        element = jsx(
            "Translation",
            expr(arrow(["t"], hello, line=2), line=2),
            attrs=[attr("ns", "common")],
            line=1,
        )
        _ = analyzed(
            import_from("react-i18next", named=["Translation"]),
            stmt(element),
        )

        (key,) = extract_translation_render_prop(element, base_config)

        assert key.key == "hello"
        assert key.parsed_options.ns == "common"
        assert key.source_nodes == (hello, element)

    def test_foreign_translation_component(self, base_config: KeyScanConfig) -> None:
        """A Translation component from elsewhere is ignored."""
        element = jsx("Translation", expr(arrow(["t"], call("t", "x"))))
        _ = analyzed(import_from("./Translation", default="Translation"), stmt(element))

        assert extract_translation_render_prop(element, base_config) == []

    def test_non_element_node(self, base_config: KeyScanConfig) -> None:
        """Other node types yield nothing."""
        assert extract_translation_render_prop(call("t", "x"), base_config) == []

    def test_disabled_by_comment(self, base_config: KeyScanConfig) -> None:
        """A line hint skips one call; a next-line hint skips the whole element."""
        element = jsx(
            "Translation",
            expr(
                arrow(
                    ["t"],
                    [
                        stmt(call("t", ident("dynamic", line=3), line=3)),
                        returns(call("t", "kept", line=4)),
                    ],
                    line=2,
                ),
                line=2,
            ),
            line=2,
        )
        _ = analyzed(
            import_from("react-i18next", named=["Translation"]),
            stmt(element),
        )
        line_hints = parse_comment_hints([comment(" i18next-extract-disable-line", 3)])
        next_line_hints = parse_comment_hints(
            [comment(" i18next-extract-disable-next-line", 1)]
        )

        assert [
            k.key for k in extract_translation_render_prop(element, base_config, line_hints)
        ] == ["kept"]
        assert extract_translation_render_prop(element, base_config, next_line_hints) == []


class TestWithTranslationHoc:
    """Test cases for components wrapped by ``withTranslation``."""

    def test_class_component(self, base_config: KeyScanConfig) -> None:
        """``this.props.t`` and ``const { t } = this.props`` are both followed."""
        direct = call(member(this_props(line=3), "t", line=3), "subtitle", line=3)
        destructured = call("t", "title", line=5)
        component = class_def(
            "Header",
            [
                method(
                    "render",
                    [
                        stmt(direct),
                        const(object_pattern("t"), this_props(line=4), line=4),
                        returns(destructured),
                    ],
                    line=2,
                )
            ],
            line=1,
        )
        hoc = call("withTranslation", "common", line=7)
        _ = analyzed(
            import_from("react-i18next", named=["withTranslation"]),
            component,
            stmt(call(hoc, ident("Header", line=7), line=7)),
        )

        keys = extract_with_translation_hoc(component, base_config)

        assert [k.key for k in keys] == ["subtitle", "title"]
        assert all(k.parsed_options.ns == "common" for k in keys)
        assert keys[0].source_nodes == (direct, component, hoc)

    def test_function_component_with_props(self, base_config: KeyScanConfig) -> None:
        """``props.t(...)`` in a function component is followed."""
        component = function_def(
            "Footer", ["props"], [returns(call(member("props", "t"), "footer", line=2))]
        )
        _ = analyzed(
            import_from("react-i18next", named=["withTranslation"]),
            component,
            stmt(call(call("withTranslation", line=4), ident("Footer", line=4), line=4)),
        )

        (key,) = extract_with_translation_hoc(component, base_config)

        assert key.key == "footer"
        assert key.parsed_options.ns is None

    def test_arrow_component_with_destructured_param(
        self, base_config: KeyScanConfig
    ) -> None:
        """``const Nav = ({ t }) => ...`` wrapped later is followed."""
        component = arrow([object_pattern("t")], call("t", "nav", line=1), line=1)
        _ = analyzed(
            import_from("react-i18next", named=["withTranslation"]),
            const("Nav", component, line=1),
            stmt(call(call("withTranslation", line=2), ident("Nav", line=2), line=2)),
        )

        (key,) = extract_with_translation_hoc(component, base_config)

        assert key.key == "nav"

    def test_inline_component(self, base_config: KeyScanConfig) -> None:
        """A component written directly inside the HOC call is followed."""
        component = FunctionDef(
            None,
            [object_pattern("t")],
            call("t", "inline", line=1),
            is_arrow=True,
            line=1,
        )
        _ = analyzed(
            import_from("react-i18next", named=["withTranslation"]),
            stmt(call(call("withTranslation", "ns1", line=1), component, line=1)),
        )

        (key,) = extract_with_translation_hoc(component, base_config)

        assert (key.key, key.parsed_options.ns) == ("inline", "ns1")

    def test_unwrapped_component(self, base_config: KeyScanConfig) -> None:
        """Components never passed to withTranslation are ignored."""
        component = function_def(
            "Plain", ["props"], [returns(call(member("props", "t"), "plain"))]
        )
        _ = analyzed(
            import_from("react-i18next", named=["withTranslation"]),
            component,
        )

        assert extract_with_translation_hoc(component, base_config) == []

    def test_foreign_hoc(self, base_config: KeyScanConfig) -> None:
        """A withTranslation that is not react-i18next's is ignored."""
        component = function_def(
            "Card", ["props"], [returns(call(member("props", "t"), "card"))]
        )
        _ = analyzed(
            import_from("./hoc", named=["withTranslation"]),
            component,
            stmt(call(call("withTranslation"), ident("Card"))),
        )

        assert extract_with_translation_hoc(component, base_config) == []

    def test_disabled_by_comment(self, base_config: KeyScanConfig) -> None:
        """A line hint skips one call; a next-line hint skips the whole component."""
        component = function_def(
            "Card",
            ["props"],
            [
                stmt(call(member("props", "t", line=3), "card.title", line=3)),
                returns(call(member("props", "t", line=4), "card.body", line=4)),
            ],
            line=2,
        )
        _ = analyzed(
            import_from("react-i18next", named=["withTranslation"]),
            component,
            stmt(call(call("withTranslation", line=6), ident("Card", line=6), line=6)),
        )
        line_hints = parse_comment_hints([comment(" i18next-extract-disable-line", 3)])
        next_line_hints = parse_comment_hints(
            [comment(" i18next-extract-disable-next-line", 1)]
        )

        assert [
            k.key for k in extract_with_translation_hoc(component, base_config, line_hints)
        ] == ["card.body"]
        assert extract_with_translation_hoc(component, base_config, next_line_hints) == []

    def test_dispatch_rejects_other_nodes(self, base_config: KeyScanConfig) -> None:
        """Only class and function definitions are inspected."""
        assert extract_with_translation_hoc(jsx("div"), base_config) == []
        assert extract_with_translation_hoc(call("t", "x"), base_config) == []


class TestI18nextInstance:
    """Test cases for calls on the i18next instance."""

    def test_default_import(self, base_config: KeyScanConfig) -> None:
        """``i18next.t(...)`` on the imported module is extracted."""
        site = call("i18next.t", "errors.network", line=2)
        _ = analyzed(import_from("i18next", default="i18next"), stmt(site))

        (key,) = extract_i18next_instance(site, base_config)

        assert key.key == "errors.network"
        assert key.extractor_name == "extract_i18next_instance"

    def test_created_instance(self, base_config: KeyScanConfig) -> None:
        """Instances from ``createInstance()`` are recognized."""
        site = call("i18n.t", "errors.timeout", line=3)
        _ = analyzed(
            import_from("i18next", default="i18next"),
            const("i18n", call("i18next.createInstance"), line=2),
            stmt(site),
        )

        assert [k.key for k in extract_i18next_instance(site, base_config)] == [
            "errors.timeout"
        ]

    def test_named_t_import(self, base_config: KeyScanConfig) -> None:
        """``import { t } from 'i18next'`` is recognized."""
        site = call("t", "errors.unknown", line=2)
        _ = analyzed(import_from("i18next", named=["t"]), stmt(site))

        assert [k.key for k in extract_i18next_instance(site, base_config)] == [
            "errors.unknown"
        ]

    def test_other_objects_are_ignored(self, base_config: KeyScanConfig) -> None:
        """Objects not bound to i18next, including shadowing params, are ignored."""
        foreign = call("client.t", "x", line=2)
        shadowed = call("i18next.t", "y", line=4)
        _ = analyzed(
            import_from("i18next", default="i18next"),
            import_from("./client", default="client", line=1),
            stmt(foreign),
            function_def("f", ["i18next"], [stmt(shadowed)], line=3),
        )

        assert extract_i18next_instance(foreign, base_config) == []
        assert extract_i18next_instance(shadowed, base_config) == []

    def test_configured_modules(self) -> None:
        """Extra i18next modules can be configured."""
        config = KeyScanConfig(i18next_modules=["i18next", "./i18n"])
        site = call("i18n.t", "custom", line=2)
        _ = analyzed(import_from("./i18n", default="i18n"), stmt(site))

        assert [k.key for k in extract_i18next_instance(site, config)] == ["custom"]

    def test_disabled_by_comment(self, base_config: KeyScanConfig) -> None:
        """Line and next-line hints skip the call, even with a dynamic key."""
        site = call("i18next.t", ident("code", line=3), line=3)
        _ = analyzed(import_from("i18next", default="i18next"), stmt(site))

        for hint in (
            comment(" i18next-extract-disable-line", 3),
            comment(" i18next-extract-disable-next-line", 2),
        ):
            hints = parse_comment_hints([hint])
            assert extract_i18next_instance(site, base_config, hints) == []


class TestTFunction:
    """Test cases for bare translation function calls."""

    def test_bare_and_member_calls(self, base_config: KeyScanConfig) -> None:
        """``t(...)`` and ``x.t(...)`` are matched by name alone."""
        bare = call("t", "bare")
        on_member = call("props.t", "member", "Default text")

        (bare_key,) = extract_t_function(bare, base_config)
        (member_key,) = extract_t_function(on_member, base_config)

        assert bare_key.key == "bare"
        assert member_key.key == "member"
        assert member_key.parsed_options.default_value == "Default text"

    def test_configured_names(self) -> None:
        """Only configured names match."""
        config = KeyScanConfig(t_function_names=["translate"])

        assert [k.key for k in extract_t_function(call("translate", "a"), config)] == ["a"]
        assert extract_t_function(call("t", "b"), config) == []

    def test_key_must_be_evaluable(self, base_config: KeyScanConfig) -> None:
        """Dynamic and missing keys are extraction errors."""
        with pytest.raises(ExtractionError, match="Couldn't evaluate i18next key"):
            _ = extract_t_function(call("t", ident("key"), line=9), base_config)
        with pytest.raises(ExtractionError, match="without a key"):
            _ = extract_t_function(call("t"), base_config)

    def test_loop_counter_key_is_an_error(self, base_config: KeyScanConfig) -> None:
        """``for (let i = 0; i < 3; i++) t('step_' + i)`` is not read as ``step_0``."""
        site = call("t", BinaryExpression("+", lit("step_"), ident("i", line=2)), line=2)
        _ = analyzed(
            Opaque(
                "ForStatement",
                [
                    const("i", lit(0), line=1, kind="let"),
                    BinaryExpression("<", ident("i", line=1), lit(3)),
                    Opaque("UpdateExpression", [ident("i", line=1)], line=1),
                    stmt(site),
                ],
                creates_scope=True,
                line=1,
            )
        )

        with pytest.raises(ExtractionError, match="Couldn't evaluate i18next key"):
            _ = extract_t_function(site, base_config)

    def test_disabled_by_comment(self, base_config: KeyScanConfig) -> None:
        """Line and next-line hints skip the call, even with a dynamic key."""
        site = call("t", ident("key", line=5), line=5)

        for hint in (
            comment(" i18next-extract-disable-line", 5),
            comment(" i18next-extract-disable-next-line", 4),
        ):
            hints = parse_comment_hints([hint])
            assert extract_t_function(site, base_config, hints) == []

        other_line = parse_comment_hints([comment(" i18next-extract-disable-line", 4)])
        with pytest.raises(ExtractionError):
            _ = extract_t_function(site, base_config, other_line)

    def test_fallback_key_array(self, base_config: KeyScanConfig) -> None:
        """An array of fallback keys extracts its first key."""
        site = CallExpression(
            ident("t"), [ArrayExpression([lit("primary"), lit("fallback")])]
        )

        (key,) = extract_t_function(site, base_config)

        assert key.key == "primary"

    def test_other_nodes(self, base_config: KeyScanConfig) -> None:
        """Non-call nodes and other callees yield nothing."""
        assert extract_t_function(jsx("t"), base_config) == []
        assert extract_t_function(call("translate", "x"), base_config) == []

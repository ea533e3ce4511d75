"""
Extracted keys and their derivation into concrete translation keys.

An ``ExtractedKey`` is one usage site found by an extractor. ``derive_keys``
expands it, for one locale, into the ``TranslationKey`` entries a
translation file must contain once contexts and plural forms are applied.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from .config.schema import KeyScanConfig
from .plurals import plural_suffixes
from .syntax.nodes import Node

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ParsedOptions:
    """
    i18next options of one usage site.

    ``contexts`` is False (no context), True (a context whose value is not
    statically known) or the tuple of statically known context values.
    """

    contexts: bool | tuple[str, ...] = False
    has_count: bool = False
    ns: str | None = None
    default_value: str | None = None

    def merged(self, **overrides: object) -> ParsedOptions:
        """Copy with whole fields replaced; unknown names are ignored."""
        known = {k: v for k, v in overrides.items() if k in _OPTION_FIELDS}
        return replace(self, **known)  # pyright: ignore[reportArgumentType]


_OPTION_FIELDS = frozenset({"contexts", "has_count", "ns", "default_value"})


@dataclass(frozen=True)
class ExtractedKey:
    """
    A key found at one usage site.

    ``source_nodes`` starts with the node identifying the site (the ``t()``
    call, the ``<Trans>`` element), followed by the nodes that led to it.
    """

    key: str
    parsed_options: ParsedOptions
    source_nodes: tuple[Node, ...]
    extractor_name: str

    def __post_init__(self) -> None:
        if not self.source_nodes:
            raise ValueError(f"Extracted key {self.key!r} has no source node")

    @property
    def site(self) -> Node:
        return self.source_nodes[0]

    @property
    def line(self) -> int:
        return self.site.line


@dataclass(frozen=True)
class TranslationKey:
    """One concrete key a locale file must contain."""

    namespace: str
    key: str
    key_path: tuple[str, ...]
    locale: str
    default_value: str | None
    context: str | None = None
    plural_category: str | None = None
    is_derived: bool = False
    extracted_key: ExtractedKey | None = field(default=None, compare=False, repr=False)


def split_namespace(
    key: str, ns: str | None, config: KeyScanConfig
) -> tuple[str, str]:
    """
    Split ``ns:key`` into namespace and key.

    A namespace written in the key wins over the ``ns`` option, which wins
    over the configured default namespace.
    """
    sep = config.ns_separator
    if sep and sep in key:
        namespace, _, rest = key.partition(sep)
        if namespace and rest:
            return namespace, rest
    return ns or config.default_ns, key


def _default_value(
    extracted: ExtractedKey, key: str, derived: bool, config: KeyScanConfig
) -> str | None:
    in_source = extracted.parsed_options.default_value
    if (
        in_source is not None
        and config.use_i18next_default_value
        and (not derived or config.use_i18next_default_value_for_derived_keys)
    ):
        return in_source
    if config.key_as_default_value and (
        not derived or config.key_as_default_value_for_derived_keys
    ):
        return key
    return config.default_value


@dataclass(frozen=True)
class _Variant:
    key: str
    context: str | None = None
    plural_category: str | None = None
    derived: bool = False


def derive_keys(
    extracted: ExtractedKey, locale: str, config: KeyScanConfig
) -> tuple[TranslationKey, ...]:
    """
    Expand one extracted key into the translation keys ``locale`` needs.

    Contexts and plural forms combine as a cartesian product, contexts
    first. The result depends only on the arguments.
    """
    options = extracted.parsed_options
    namespace, base_key = split_namespace(extracted.key, options.ns, config)
    variants = [_Variant(base_key)]

    if options.contexts is not False:
        contexts: Sequence[str] = (
            options.contexts
            if isinstance(options.contexts, tuple)
            else config.default_contexts
        )
        variants = [
            _Variant(
                key=v.key + config.context_separator + context if context else v.key,
                context=context or None,
                derived=v.derived or bool(context),
            )
            for context in contexts
            for v in variants
        ]

    if options.has_count:
        suffixes = plural_suffixes(locale, config)
        variants = [
            _Variant(
                key=v.key + suffix,
                context=v.context,
                plural_category=category,
                derived=v.derived or bool(suffix),
            )
            for v in variants
            for category, suffix in suffixes
        ]

    key_sep = config.key_separator
    return tuple(
        TranslationKey(
            namespace=namespace,
            key=v.key,
            key_path=tuple(v.key.split(key_sep)) if key_sep else (v.key,),
            locale=locale,
            default_value=_default_value(extracted, v.key, v.derived, config),
            context=v.context,
            plural_category=v.plural_category,
            is_derived=v.derived,
            extracted_key=extracted,
        )
        for v in variants
    )


def derive_all(
    extracted_keys: Sequence[ExtractedKey], locale: str, config: KeyScanConfig
) -> list[TranslationKey]:
    """Derive every extracted key for one locale, preserving order."""
    derived: list[TranslationKey] = []
    for extracted in extracted_keys:
        derived.extend(derive_keys(extracted, locale, config))
    logger.debug(
        f"Derived {len(derived)} keys for locale {locale} "
        f"from {len(extracted_keys)} usage sites"
    )
    return derived

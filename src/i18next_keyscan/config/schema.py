"""Configuration schema for i18next-keyscan using nested Pydantic models."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class CommentHintKeywords(BaseModel):
    """Keywords recognized inside source comments."""

    model_config = ConfigDict(frozen=True)

    disable_line: str = Field(
        default="i18next-extract-disable-line",
        description="Skip every usage site on the comment's own line(s)",
        min_length=1,
    )
    disable_next_line: str = Field(
        default="i18next-extract-disable-next-line",
        description="Skip every usage site on the line after the comment",
        min_length=1,
    )
    disable_section_start: str = Field(
        default="i18next-extract-disable",
        description="Skip usage sites until the matching enable comment",
        min_length=1,
    )
    disable_section_stop: str = Field(
        default="i18next-extract-enable",
        description="End of a disabled section",
        min_length=1,
    )
    default_value: str = Field(
        default="i18next-extract-mark-default-value",
        description="Prefix of the default value override hints (-line, -next-line)",
        min_length=1,
    )
    namespace: str = Field(
        default="i18next-extract-mark-ns",
        description="Prefix of the namespace hints (-line, -next-line, -start, -stop)",
        min_length=1,
    )
    context: str = Field(
        default="i18next-extract-mark-context",
        description="Prefix of the context hints (-line, -next-line, -start, -stop)",
        min_length=1,
    )
    plural: str = Field(
        default="i18next-extract-mark-plural",
        description="Prefix of the plural hints (-line, -next-line, -start, -stop)",
        min_length=1,
    )


# (module, exported name)
ImportRef = tuple[str, str]


class KeyScanConfig(BaseModel):
    """Complete extraction configuration."""

    model_config = ConfigDict(frozen=True)

    locales: list[str] = Field(
        default_factory=lambda: ["en"],
        description="Locales to derive translation keys for",
        min_length=1,
    )
    default_ns: str = Field(
        default="translation",
        description="Namespace used when a key names none",
        min_length=1,
    )

    # Key structure
    ns_separator: str | None = Field(
        default=":",
        description="Separator between namespace and key; None disables namespaces in keys",
    )
    key_separator: str | None = Field(
        default=".",
        description="Separator between nested key segments; None keeps keys flat",
    )
    plural_separator: str = Field(default="_", description="Separator before plural suffixes")
    context_separator: str = Field(default="_", description="Separator before context values")

    # Derivation
    default_contexts: list[str] = Field(
        default_factory=lambda: [""],
        description=(
            "Contexts emitted for a usage whose context is not statically known; "
            "'' stands for the key without context"
        ),
    )
    compatibility_json: Literal["v3", "v4"] = Field(
        default="v4",
        description="Plural suffix convention: v4 uses CLDR categories, v3 uses _plural/_N",
    )
    plural_rules: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Per-locale override of the CLDR plural categories",
    )

    # Default values
    default_value: str | None = Field(
        default="",
        description="Default value for keys without one",
    )
    use_i18next_default_value: bool = Field(
        default=True,
        description="Use defaultValue/defaults found in source for base keys",
    )
    use_i18next_default_value_for_derived_keys: bool = Field(
        default=False,
        description="Also use in-source default values for plural/context keys",
    )
    key_as_default_value: bool = Field(
        default=False,
        description="Use the key itself as default value for base keys",
    )
    key_as_default_value_for_derived_keys: bool = Field(
        default=True,
        description="When key_as_default_value is on, apply it to derived keys too",
    )

    # Recognized APIs
    t_function_names: list[str] = Field(
        default_factory=lambda: ["t"],
        description="Conventional names of bare translation functions",
    )
    i18next_modules: list[str] = Field(
        default_factory=lambda: ["i18next"],
        description="Modules whose default/namespace export is an i18next instance",
    )
    custom_trans_components: list[ImportRef] = Field(
        default_factory=list,
        description="Extra (module, export) pairs treated like react-i18next Trans",
    )
    custom_use_translation_hooks: list[ImportRef] = Field(
        default_factory=list,
        description="Extra (module, export) pairs treated like useTranslation",
    )

    # Trans component
    trans_keep_basic_html_nodes_for: list[str] = Field(
        default_factory=lambda: ["br", "strong", "i", "p"],
        description="Attribute-less tags kept verbatim in Trans keys",
    )
    trans_max_depth: Annotated[int, Field(ge=1, le=200)] = Field(
        default=64,
        description="Deepest markup nesting the Trans formatter will follow",
    )

    comment_hints: CommentHintKeywords = Field(default_factory=CommentHintKeywords)

    @field_validator("locales")
    @classmethod
    def validate_locales(cls, v: list[str]) -> list[str]:
        """Reject blank and duplicated locale codes."""
        cleaned = [locale.strip() for locale in v]
        if any(not locale for locale in cleaned):
            raise ValueError("Locale codes must not be blank")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError("Locale codes must be unique")
        return cleaned

    @field_validator("ns_separator", "key_separator")
    @classmethod
    def validate_separator(cls, v: str | None) -> str | None:
        """Treat an empty separator as disabled."""
        return v or None

    @field_validator("plural_rules")
    @classmethod
    def validate_plural_rules(cls, v: dict[str, list[str]]) -> dict[str, list[str]]:
        """Each overridden locale needs at least one plural category."""
        for locale, categories in v.items():
            if not categories:
                raise ValueError(f"Plural rule override for {locale!r} is empty")
        return v

    @model_validator(mode="after")
    def validate_default_contexts(self) -> "KeyScanConfig":
        """Duplicated contexts would derive duplicated keys."""
        if len(set(self.default_contexts)) != len(self.default_contexts):
            raise ValueError("default_contexts must not contain duplicates")
        return self

    def trans_components(self) -> list[ImportRef]:
        return [("react-i18next", "Trans"), *self.custom_trans_components]

    def use_translation_hooks(self) -> list[ImportRef]:
        return [("react-i18next", "useTranslation"), *self.custom_use_translation_hooks]

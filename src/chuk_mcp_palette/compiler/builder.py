"""
Token Tree Builder - compiles a palette plus theme config to token collections.

Two families of collections come out:

    palette (single mode)   --gray-0 ... --rose-1000   primitives
    theme (light + dark)    mode_name
                            ground, ground1, ground2   elevation tiers
                            on/ground                  chosen foreground
                            stark, on/stark            max-contrast ramp
                            black, white               utilities
                            primary, danger, ...       intents
                            gray, red, ...             hues, by name

Intent and hue shades alias palette primitives; in dark mode the alias
target is mirrored around the middle of the ramp (0↔1000, 50↔950, ...).
Ground, stark, black and white never mirror.

Groups whose name starts with the exclusion prefix are dropped before
anything downstream sees them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from chuk_mcp_palette.compiler.paths import (
    code_syntax,
    is_excluded,
    join,
    key_from_path,
    shade_path,
)
from chuk_mcp_palette.constants import (
    LEGACY_SHADE_GROUP,
    PALETTE_MODE,
    GroundRef,
    Mode,
    OnGroundRef,
    Scope,
)
from chuk_mcp_palette.core.alpha import AlphaSet
from chuk_mcp_palette.core.contrast import BLACK_HEX, WHITE_HEX, foreground_hex
from chuk_mcp_palette.core.oklch import css_color_to_hex
from chuk_mcp_palette.models.config import ThemeConfig
from chuk_mcp_palette.models.palette import HueSet, Palette
from chuk_mcp_palette.models.tokens import (
    Alias,
    ColorLiteral,
    StringValue,
    Token,
    TokenCollection,
    TokenKey,
    TokenValue,
)

logger = logging.getLogger(__name__)

PALETTE_COLLECTION = "palette"
THEME_COLLECTION = "theme"
THEME_MODES: tuple[Mode, ...] = (Mode.LIGHT, Mode.DARK)

# Shown when a reference points at a color the palette doesn't have
MISSING_HEX = "#000000"

ALL_SCOPES = (Scope.ALL_SCOPES.value,)


def _other(mode: Mode) -> Mode:
    return Mode.DARK if mode is Mode.LIGHT else Mode.LIGHT


class TokenTreeBuilder:
    """
    Builds token collections from a palette and a theme config.

    The builder is stateless between calls; build_palette() and
    build_theme() can be called any number of times and always return
    fresh collections.
    """

    def __init__(
        self,
        palette: Palette,
        config: ThemeConfig,
        shade_order: Sequence[str] | None = None,
    ):
        """
        Initialize the builder.

        Args:
            palette: Generated palette
            config: Theme configuration
            shade_order: Shade labels in ramp order (defaults to the palette's)
        """
        self.palette = palette
        self.config = config
        self.shade_order = list(shade_order) if shade_order is not None else palette.shade_labels
        self.naming = config.naming
        self.shade_groups = (self.naming.shade_group_name, LEGACY_SHADE_GROUP)

    # ------------------------------------------------------------------
    # Palette collection
    # ------------------------------------------------------------------

    def primitive_name(self, hue: str, shade: str) -> str:
        """Flat primitive name (``--blue-500``)."""
        return f"{self.naming.raw_marker}{hue}-{shade}"

    def build_palette(self) -> TokenCollection:
        """
        Build the single-mode palette collection.

        One token per (hue, shade), plus configured per-shade alphas.
        """
        scopes = tuple(self.config.palette_scopes.as_list())
        tokens: list[Token] = []

        prefix = self.config.exclusion_prefix
        for hue_set in self.palette.hue_sets:
            # Primitive names carry the marker first, so path filtering can't see the hue
            if prefix and hue_set.label.startswith(prefix):
                logger.debug("Excluded hue '%s' from the palette collection", hue_set.label)
                continue
            for color in hue_set.colors:
                name = self.primitive_name(hue_set.label, color.shade_label)
                literal = self._literal(color.hex_for(self.config.use_p3))
                tokens.append(
                    Token(
                        path=(name,),
                        key=TokenKey((hue_set.label,), color.shade_label),
                        values={PALETTE_MODE: literal},
                        scopes=scopes,
                    )
                )

                alphas = self.config.alphas.for_shade(
                    self.config.alphas.primitive_shades, color.shade_label
                )
                for alpha in alphas:
                    tokens.append(
                        Token(
                            path=(name, str(alpha)),
                            key=TokenKey((hue_set.label,), color.shade_label, alpha),
                            values={PALETTE_MODE: literal.with_alpha(alpha)},
                            scopes=scopes,
                        )
                    )

        return TokenCollection(
            name=PALETTE_COLLECTION,
            modes=(PALETTE_MODE,),
            variables=tuple(self._filter(tokens)),
        )

    # ------------------------------------------------------------------
    # Theme collection
    # ------------------------------------------------------------------

    def build_theme(self) -> TokenCollection:
        """
        Build the light/dark theme collection.

        Returns:
            TokenCollection with modes ('light', 'dark')
        """
        tokens: list[Token] = []
        tokens.extend(self._mode_name_tokens())
        tokens.extend(self._ground_tokens())
        tokens.extend(self._on_ground_tokens())
        tokens.extend(self._stark_tokens())
        tokens.extend(self._black_white_tokens())

        alphas = self.config.alphas
        reserved = self.reserved_groups()
        for intent, hue_label in self.config.intents.items():
            if intent in reserved:
                logger.warning("Intent '%s' collides with a fixed theme group; skipped", intent)
                continue
            hue_set = self.palette.find_hue(hue_label)
            if hue_set is None:
                logger.warning("Intent '%s' maps to unknown hue '%s'; skipped", intent, hue_label)
                continue
            tokens.extend(
                self._hue_group_tokens(
                    intent,
                    hue_set,
                    root_alphas=alphas.semantic_default,
                    on_root_alphas=alphas.on_semantic_default,
                    shade_alphas=alphas.semantic_shades,
                    on_shade_alphas=alphas.on_semantic_shades,
                )
            )

        for hue_set in self.palette.hue_sets:
            if hue_set.label in self.config.intents:
                logger.warning("Hue '%s' shadows an intent of the same name; skipped", hue_set.label)
                continue
            if hue_set.label in reserved:
                logger.warning("Hue '%s' collides with a fixed theme group; skipped", hue_set.label)
                continue
            tokens.extend(
                self._hue_group_tokens(
                    hue_set.label,
                    hue_set,
                    root_alphas=alphas.primitive_default,
                    on_root_alphas=alphas.on_primitive_default,
                    shade_alphas=alphas.primitive_shades,
                    on_shade_alphas=alphas.on_primitive_shades,
                )
            )

        return TokenCollection(
            name=THEME_COLLECTION,
            modes=tuple(m.value for m in THEME_MODES),
            variables=tuple(self._filter(tokens)),
        )

    def reserved_groups(self) -> frozenset[str]:
        """Top-level theme group names that intents and hues can't take."""
        naming = self.naming
        names = {"mode_name", "stark", "black", "white", *naming.elevation_names}
        names.add(naming.foreground_path("stark")[0])
        names.update(naming.foreground_path(n)[0] for n in naming.elevation_names)
        return frozenset(names)

    def reversed_shade(self, shade: str, mode: Mode) -> str:
        """
        Shade whose color a theme shade shows in a mode.

        Dark mode mirrors around the middle of the ramp when enabled;
        unknown shades map to themselves.
        """
        if mode is not Mode.DARK or not self.config.reverse_in_dark:
            return shade
        if shade not in self.shade_order:
            return shade
        index = self.shade_order.index(shade)
        return self.shade_order[len(self.shade_order) - 1 - index]

    def _mode_name_tokens(self) -> list[Token]:
        path = ("mode_name",)
        return [
            Token(
                path=path,
                key=TokenKey(path),
                values={m.value: StringValue(m.value) for m in THEME_MODES},
                token_type="string",
            )
        ]

    def _ground_color(self, index: int, mode: Mode) -> tuple[str, Alias | None]:
        """Resolve a ground tier to (hex, alias-or-None)."""
        tier = self.config.ground.tiers(mode)[index]

        if tier.ref is GroundRef.CUSTOM and tier.custom:
            hex_value = css_color_to_hex(tier.custom, p3=self.config.use_p3)
            if hex_value:
                return hex_value, None
            logger.warning("Unparseable custom ground '%s'; using primitive", tier.custom)

        if tier.ref is GroundRef.THEME:
            neutral = self.config.intents.get("neutral")
            if neutral is not None:
                # The neutral shade is itself mirrored in dark mode; undo that
                source = self.reversed_shade(tier.shade, mode)
                alias = Alias(shade_path(("neutral",), self.naming.shade_group_name, source))
                return self._palette_hex(neutral, tier.shade), alias

        hue = self.config.ground.hue
        alias = Alias((self.primitive_name(hue, tier.shade),))
        return self._palette_hex(hue, tier.shade), alias

    def _ground_tokens(self) -> list[Token]:
        tokens: list[Token] = []
        alphas = self.config.alphas.ground

        for index, name in enumerate(self.naming.elevation_names):
            resolved = {mode: self._ground_color(index, mode) for mode in THEME_MODES}

            tokens.append(
                self._theme_token(
                    (name,),
                    lambda mode, r=resolved: r[mode][1] or self._literal(r[mode][0]),
                )
            )
            for alpha in alphas:

                def value(mode: Mode, r=resolved, a=alpha) -> TokenValue:
                    hex_value, alias = r[mode]
                    if alias is not None and a == 100:
                        return alias
                    return self._literal(hex_value, a)

                tokens.append(self._theme_token((name, str(alpha)), value))

        return tokens

    def _on_ground_color(self, mode: Mode) -> tuple[str, Alias | None]:
        """Resolve the on-ground foreground to (hex, alias-or-None)."""
        setting = self.config.on_ground.for_mode(mode)
        ref = setting.ref_type

        if ref is OnGroundRef.PRIMITIVE:
            shade = setting.shade or ("1000" if mode is Mode.LIGHT else "0")
            color = self.palette.color(setting.hue, shade)
            if color is not None:
                alias = Alias((self.primitive_name(setting.hue, shade),))
                return color.hex_for(self.config.use_p3), alias
            logger.warning("On-ground primitive %s/%s not in palette; deriving", setting.hue, shade)
        elif ref is OnGroundRef.BLACK:
            return BLACK_HEX, None
        elif ref is OnGroundRef.WHITE:
            return WHITE_HEX, None
        elif ref is OnGroundRef.CUSTOM and setting.custom:
            hex_value = css_color_to_hex(setting.custom, p3=self.config.use_p3)
            if hex_value:
                return hex_value, None
            logger.warning("Unparseable custom on-ground '%s'; deriving", setting.custom)

        ground_hex, _ = self._ground_color(0, mode)
        return foreground_hex(ground_hex, self.config.on_color_threshold), None

    def _on_ground_tokens(self) -> list[Token]:
        path = self.naming.foreground_path(self.naming.elevation_names[0])
        resolved = {mode: self._on_ground_color(mode) for mode in THEME_MODES}

        tokens = [
            self._theme_token(
                path,
                lambda mode: resolved[mode][1] or self._literal(resolved[mode][0]),
            )
        ]
        for alpha in self.config.alphas.on_ground:
            tokens.append(
                self._theme_token(
                    join(path, str(alpha)),
                    lambda mode, a=alpha: self._literal(resolved[mode][0], a),
                )
            )
        return tokens

    def _stark_hex(self, label: str, mode: Mode) -> str | None:
        shade = self.config.stark.find(label)
        if shade is None:
            return None
        return css_color_to_hex(shade.value(mode), p3=self.config.use_p3)

    def _stark_default(self, mode: Mode) -> str | None:
        """Default stark shade for a mode, falling back to the last step."""
        stark = self.config.stark
        default = stark.default_shade(mode)
        if stark.find(default) is not None:
            return default
        return stark.shades[-1].label if stark.shades else None

    def _stark_group_tokens(self, group: tuple[str, ...], alphas: AlphaSet, inverse: bool) -> list[Token]:
        """Stark or on-stark: shade ramp, default-shade alphas, root alias."""
        stark = self.config.stark
        shade_group = self.naming.shade_group_name
        tokens: list[Token] = []

        if not stark.shades:
            return tokens

        def source(mode: Mode) -> Mode:
            return _other(mode) if inverse else mode

        tokens.append(
            self._theme_token(
                group,
                lambda mode: Alias(shade_path(group, shade_group, self._stark_default(mode) or "")),
            )
        )

        for alpha in alphas:

            def alpha_value(mode: Mode, a=alpha) -> TokenValue:
                hex_value = self._stark_hex(self._stark_default(mode) or "", source(mode))
                return self._literal(hex_value or MISSING_HEX, a)

            tokens.append(self._theme_token(join(group, str(alpha)), alpha_value))

        for shade in stark.shades:
            tokens.append(
                self._theme_token(
                    shade_path(group, shade_group, shade.label),
                    lambda mode, s=shade: self._literal(
                        css_color_to_hex(s.value(source(mode)), p3=self.config.use_p3)
                        or MISSING_HEX
                    ),
                )
            )

        return tokens

    def _stark_tokens(self) -> list[Token]:
        alphas = self.config.alphas
        return [
            *self._stark_group_tokens(("stark",), alphas.stark, inverse=False),
            *self._stark_group_tokens(self.naming.foreground_path("stark"), alphas.on_stark, inverse=True),
        ]

    def _black_white_tokens(self) -> list[Token]:
        tokens: list[Token] = []
        for name, hex_value in (("black", BLACK_HEX), ("white", WHITE_HEX)):
            tokens.append(self._theme_token((name,), lambda mode, h=hex_value: self._literal(h)))
            for alpha in self.config.alphas.black_white:
                tokens.append(
                    self._theme_token(
                        (name, str(alpha)),
                        lambda mode, h=hex_value, a=alpha: self._literal(h, a),
                    )
                )
        return tokens

    def _hue_group_tokens(
        self,
        name: str,
        hue_set: HueSet,
        *,
        root_alphas: AlphaSet,
        on_root_alphas: AlphaSet,
        shade_alphas: dict[str, AlphaSet],
        on_shade_alphas: dict[str, AlphaSet],
    ) -> list[Token]:
        """
        Tokens for one intent or hue group and its foreground group.

        Layout (for name=primary):
            primary                  → {primary.shade.<default>}
            primary/<a>              default shade at alpha a (a != 100)
            primary/shade/<s>        → {--blue-<s'>}  (s' mirrored in dark)
            primary/shade/<s>/<a>    per-shade alpha
            on/primary/<a>           foreground of default shade at alpha a
            on/primary/shade/<s>     black or white
            on/primary/shade/<s>/<a> per-shade foreground alpha
        """
        group = (name,)
        on_group = self.naming.foreground_path(name)
        shade_group = self.naming.shade_group_name
        default = self.config.default_shade
        threshold = self.config.on_color_threshold
        tokens: list[Token] = []

        def hex_at(shade: str, mode: Mode) -> str:
            return self._palette_hex(hue_set.label, self.reversed_shade(shade, mode))

        has_default = hue_set.color(default) is not None
        if has_default:
            tokens.append(
                self._theme_token(group, lambda mode: Alias(shade_path(group, shade_group, default)))
            )
            for alpha in root_alphas.without(100):
                tokens.append(
                    self._theme_token(
                        (name, str(alpha)),
                        lambda mode, a=alpha: self._literal(hex_at(default, mode), a),
                    )
                )

        for color in hue_set.colors:
            shade = color.shade_label
            path = shade_path(group, shade_group, shade)
            tokens.append(
                self._theme_token(
                    path,
                    lambda mode, s=shade: Alias(
                        (self.primitive_name(hue_set.label, self.reversed_shade(s, mode)),)
                    ),
                )
            )
            for alpha in shade_alphas.get(shade, AlphaSet()):
                tokens.append(
                    self._theme_token(
                        join(path, str(alpha)),
                        lambda mode, s=shade, a=alpha: self._literal(hex_at(s, mode), a),
                    )
                )

        if has_default:
            for alpha in on_root_alphas:
                tokens.append(
                    self._theme_token(
                        join(on_group, str(alpha)),
                        lambda mode, a=alpha: self._literal(
                            foreground_hex(hex_at(default, mode), threshold), a
                        ),
                    )
                )

        for color in hue_set.colors:
            shade = color.shade_label
            path = shade_path(on_group, shade_group, shade)
            tokens.append(
                self._theme_token(
                    path,
                    lambda mode, s=shade: self._literal(foreground_hex(hex_at(s, mode), threshold)),
                )
            )
            for alpha in on_shade_alphas.get(shade, AlphaSet()):
                tokens.append(
                    self._theme_token(
                        join(path, str(alpha)),
                        lambda mode, s=shade, a=alpha: self._literal(
                            foreground_hex(hex_at(s, mode), threshold), a
                        ),
                    )
                )

        return tokens

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _palette_hex(self, hue: str, shade: str) -> str:
        color = self.palette.color(hue, shade)
        if color is None:
            return MISSING_HEX
        return color.hex_for(self.config.use_p3)

    def _literal(self, hex_value: str, alpha: int = 100) -> ColorLiteral:
        return ColorLiteral(
            hex=hex_value.upper(),
            alpha=alpha / 100,
            color_space="display-p3" if self.config.use_p3 else "srgb",
        )

    def _theme_token(
        self,
        path: tuple[str, ...],
        value: Callable[[Mode], TokenValue],
    ) -> Token:
        return Token(
            path=path,
            key=key_from_path(path, self.shade_groups),
            values={mode.value: value(mode) for mode in THEME_MODES},
            scopes=ALL_SCOPES,
            code_syntax=code_syntax(path, self.naming),
        )

    def _filter(self, tokens: list[Token]) -> list[Token]:
        """Drop tokens under excluded groups."""
        prefix = self.config.exclusion_prefix
        kept = [t for t in tokens if not is_excluded(t.path, prefix)]
        if len(kept) != len(tokens):
            logger.debug("Excluded %d tokens with prefix %r", len(tokens) - len(kept), prefix)
        return kept


def build_palette_collection(palette: Palette, config: ThemeConfig) -> TokenCollection:
    """Build the palette collection."""
    return TokenTreeBuilder(palette, config).build_palette()


def build_theme_collection(palette: Palette, config: ThemeConfig) -> TokenCollection:
    """Build the theme collection."""
    return TokenTreeBuilder(palette, config).build_theme()

from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the sortable table engine.

These are the typed, frozen configuration objects injected into the engine
components. The loader in sortable_table/config/loader.py maps YAML onto them;
every field has a default reproducing the historical table behavior, so the
engine works without any configuration file.
"""

__all__ = [
    "DEFAULT_ARTICLES",
    "DEFAULT_BANDS",
    "DEFAULT_FOLDING",
    "BandRule",
    "EngineConfig",
    "MarkupConfig",
    "NormalizerConfig",
    "PainterConfig",
]


DEFAULT_FOLDING: dict[str, str] = {
    "é": "e", "è": "e", "ê": "e", "ë": "e",
    "á": "a", "à": "a", "â": "a", "ä": "a",
    "í": "i", "ì": "i", "î": "i", "ï": "i",
    "ú": "u", "ù": "u", "û": "u", "ü": "u",
    "ô": "o", "ö": "o",
    "ÿ": "y",
    "ç": "c",
    "ñ": "n",
    "œ": "oe",
    "æ": "ae",
}

DEFAULT_ARTICLES: tuple[str, ...] = ("d'", "de ", "le ", "les ", "la ", "l'")

# Spaces (regular, no-break, narrow no-break) and multiplication/division glyphs
DEFAULT_NUMERIC_NOISE = " \u00a0\u202fx\u00d7/"


@dataclass(frozen=True)
class NormalizerConfig:
    """Locale tables for key normalization.

    folding maps one lower-case character to its replacement (accented letter
    to base letter, ligature to its expansion). articles are the elidable
    leading words, matched after lower-casing, longest first.
    """
    folding: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_FOLDING))
    articles: tuple[str, ...] = DEFAULT_ARTICLES
    numeric_noise: str = DEFAULT_NUMERIC_NOISE


@dataclass(frozen=True)
class BandRule:
    """A periodic class: assigned when counter % modulus == remainder."""
    css_class: str
    modulus: int
    remainder: int

    def matches(self, counter: int) -> bool:
        return counter % self.modulus == self.remainder


# The first visible row is painted "even": the bundled stylesheet relies on it.
DEFAULT_BANDS: tuple[BandRule, ...] = (
    BandRule("even", 2, 1),
    BandRule("odd", 2, 0),
    BandRule("mod1", 5, 1),
    BandRule("mod3", 5, 3),
    BandRule("mod5", 5, 0),
    BandRule("mod10", 10, 0),
)


@dataclass(frozen=True)
class PainterConfig:
    bands: tuple[BandRule, ...] = DEFAULT_BANDS

    @property
    def band_classes(self) -> set[str]:
        return {b.css_class for b in self.bands}


@dataclass(frozen=True)
class MarkupConfig:
    """Class names and markers used by the HTML presentation adapter."""
    table_class: str = "sortable"
    exclusion_classes: tuple[str, ...] = ("unsort", "nosort")
    sortable_class: str = "sorting"
    asc_class: str = "asc"
    desc_class: str = "desc"
    literal_attributes: tuple[str, ...] = ("sort", "data-sort")


@dataclass(frozen=True)
class EngineConfig:
    """Root configuration object."""
    normalizer: NormalizerConfig = field(default_factory=NormalizerConfig)
    painter: PainterConfig = field(default_factory=PainterConfig)
    markup: MarkupConfig = field(default_factory=MarkupConfig)

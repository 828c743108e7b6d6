"""Baked-in translation tables and locale classification."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

DEFAULT_LOCALE = "en-US"

TRANSLATION_CATEGORIES: tuple[str, ...] = ("presets", "actions", "labels")

DAY_FIRST_LOCALES: tuple[str, ...] = (
    "pt-BR",
    "pt-PT",
    "en-GB",
    "en-AU",
    "fr-FR",
    "de-DE",
    "es-ES",
    "it-IT",
    "nl-NL",
    "sv-SE",
    "da-DK",
    "nb-NO",
)


def _freeze(table: dict[str, dict[str, str]]) -> Mapping[str, Mapping[str, str]]:
    return MappingProxyType({key: MappingProxyType(dict(value)) for key, value in table.items()})


_PT_PRESETS = {
    "today": "Hoje",
    "yesterday": "Ontem",
    "last7": "Últimos 7 dias",
    "last14": "Últimos 14 dias",
    "last30": "Últimos 30 dias",
    "thisWeek": "Esta Semana",
    "lastWeek": "Semana Passada",
    "thisMonth": "Este Mês",
    "lastMonth": "Mês Passado",
}

LOCALE_TRANSLATIONS: Mapping[str, Mapping[str, Mapping[str, str]]] = MappingProxyType(
    {
        "en-US": _freeze(
            {
                "presets": {
                    "today": "Today",
                    "yesterday": "Yesterday",
                    "last7": "Last 7 days",
                    "last14": "Last 14 days",
                    "last30": "Last 30 days",
                    "thisWeek": "This Week",
                    "lastWeek": "Last Week",
                    "thisMonth": "This Month",
                    "lastMonth": "Last Month",
                },
                "actions": {"update": "Update", "compare": "Compare", "cancel": "Cancel"},
                "labels": {"selectPlaceholder": "Select..."},
            }
        ),
        "pt-BR": _freeze(
            {
                "presets": _PT_PRESETS,
                "actions": {"update": "Atualizar", "compare": "Comparar", "cancel": "Cancelar"},
                "labels": {"selectPlaceholder": "Selecionar..."},
            }
        ),
        "pt": _freeze(
            {
                "presets": _PT_PRESETS,
                "actions": {"update": "Actualizar", "compare": "Comparar", "cancel": "Cancelar"},
                "labels": {"selectPlaceholder": "Seleccionar..."},
            }
        ),
        "es-ES": _freeze(
            {
                "presets": {
                    "today": "Hoy",
                    "yesterday": "Ayer",
                    "last7": "Últimos 7 días",
                    "last14": "Últimos 14 días",
                    "last30": "Últimos 30 días",
                    "thisWeek": "Esta Semana",
                    "lastWeek": "Semana Pasada",
                    "thisMonth": "Este Mes",
                    "lastMonth": "Mes Pasado",
                },
                "actions": {"update": "Actualizar", "compare": "Comparar", "cancel": "Cancelar"},
                "labels": {"selectPlaceholder": "Seleccionar..."},
            }
        ),
    }
)


@dataclass(frozen=True)
class Translations:
    presets: Mapping[str, str]
    actions: Mapping[str, str]
    labels: Mapping[str, str]

    def preset_label(self, name: str) -> str:
        return self.presets.get(name, name)


def get_translations(
    locale: str = DEFAULT_LOCALE,
    overrides: Mapping[str, Mapping[str, Any]] | None = None,
) -> Translations:
    """Merge ``overrides`` over the locale table one category at a time.

    Supplying a single key in a category keeps the sibling keys from the
    locale table. Unknown locales fall back to ``en-US``.
    """
    base = LOCALE_TRANSLATIONS.get(locale) or LOCALE_TRANSLATIONS[DEFAULT_LOCALE]
    overrides = overrides or {}
    merged: dict[str, Mapping[str, str]] = {}
    for category in TRANSLATION_CATEGORIES:
        values = dict(base[category])
        values.update({key: str(value) for key, value in (overrides.get(category) or {}).items()})
        merged[category] = MappingProxyType(values)
    return Translations(**merged)


def uses_day_month_year(locale: str) -> bool:
    if locale == DEFAULT_LOCALE:
        return False
    return any(locale.startswith(known.split("-")[0]) for known in DAY_FIRST_LOCALES)

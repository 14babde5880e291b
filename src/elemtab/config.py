from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from elemtab.table.layout import Convention

DEFAULT_LOOKUP_URL = "https://en.wikipedia.org/wiki/%n"


def _as_names(value) -> frozenset[str]:
    if value is None:
        return frozenset()
    if isinstance(value, str):
        value = value.split(",")
    return frozenset(str(item).strip() for item in value if str(item).strip())


@dataclass(frozen=True)
class TableConfig:
    """Display options for one table session. Out-of-range numbers are clamped."""

    element_width: int = 2
    separation: int = 1
    indentation: int = 2
    convention: Convention = Convention.CONVENTIONAL
    scheme: str = "group"
    epsilon: float = 0.005
    excluded_properties: frozenset[str] = field(default_factory=frozenset)
    theme: str = "Fluent Light"
    lookup_url: str = DEFAULT_LOOKUP_URL

    def __post_init__(self) -> None:
        object.__setattr__(self, "element_width", max(2, int(self.element_width)))
        object.__setattr__(self, "separation", max(0, int(self.separation)))
        object.__setattr__(self, "indentation", max(0, int(self.indentation)))
        object.__setattr__(self, "convention", Convention.parse(self.convention))
        object.__setattr__(self, "scheme", str(self.scheme).strip().lower())
        object.__setattr__(self, "epsilon", max(0.0, float(self.epsilon)))
        object.__setattr__(self, "excluded_properties", _as_names(self.excluded_properties))
        object.__setattr__(self, "theme", str(self.theme))
        object.__setattr__(self, "lookup_url", str(self.lookup_url))

    def with_option(self, option: str, value) -> TableConfig:
        name = option_name(option)
        return dataclasses.replace(self, **{name: value})


OPTION_NAMES: tuple[str, ...] = tuple(f.name for f in dataclasses.fields(TableConfig))


def option_name(option: str) -> str:
    name = str(option).strip().replace("-", "_")
    if name not in OPTION_NAMES:
        raise KeyError(f"Unknown option: {option!r}")
    return name


def load_config(path: str | Path, base: TableConfig | None = None) -> TableConfig:
    data = yaml.safe_load(Path(path).read_text(encoding="utf-8"))
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Configuration must be a mapping: {path}")
    config = base or TableConfig()
    for key, value in data.items():
        config = config.with_option(key, value)
    return config

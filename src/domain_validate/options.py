from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

_OPTION_ALIASES = {
    "allow_underscore": "allow_underscore",
    "domain_allow_underscore": "allow_underscore",
    "allow_single_label": "allow_single_label",
    "domain_allow_single_label": "allow_single_label",
    "private_tld": "private_tld",
    "domain_private_tld": "private_tld",
}


@dataclass(frozen=True)
class ValidatorOptions:
    """
    Immutable validation policy shared by every check made with it.

    ``private_tld`` accepts a mapping (its keys are used), a set/list/tuple of
    lower-case TLD strings, or a compiled regular expression. Anything else is
    kept but never matches.
    """

    allow_underscore: bool = False
    allow_single_label: bool = False
    private_tld: Any = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "allow_underscore", bool(self.allow_underscore))
        object.__setattr__(self, "allow_single_label", bool(self.allow_single_label))
        object.__setattr__(self, "private_tld", _freeze_private_tld(self.private_tld))

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> ValidatorOptions:
        kwargs: dict[str, Any] = {}
        for key, value in raw.items():
            name = _OPTION_ALIASES.get(str(key))
            if name is None:
                continue
            kwargs[name] = value
        return cls(**kwargs)


def resolve_options(value: ValidatorOptions | Mapping[str, Any] | None) -> ValidatorOptions:
    if value is None:
        return DEFAULT_OPTIONS
    if isinstance(value, ValidatorOptions):
        return value
    if isinstance(value, Mapping):
        return ValidatorOptions.from_mapping(value)
    raise TypeError(f"options must be ValidatorOptions or a mapping, not {type(value).__name__}")


def _freeze_private_tld(value: Any) -> Any:
    if isinstance(value, Mapping):
        return frozenset(key for key in value if isinstance(key, str))
    if isinstance(value, (set, frozenset, list, tuple)):
        return frozenset(item for item in value if isinstance(item, str))
    return value


DEFAULT_OPTIONS = ValidatorOptions()

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .options import ValidatorOptions, resolve_options
from .tld import TldTable
from .validation import validate_domain, validate_hostname, validate_label

OptionsLike = ValidatorOptions | Mapping[str, Any] | None


class DomainValidator:
    """
    Holds a validation policy so checks can be made as methods.

        v = DomainValidator(allow_single_label=True, private_tld={"internal"})
        v.is_domain("build.internal")   # -> "build.internal"

    Options passed to a method apply to that call only.
    """

    def __init__(
        self,
        options: OptionsLike = None,
        *,
        tld_table: TldTable | None = None,
        **option_kwargs: Any,
    ) -> None:
        if option_kwargs:
            merged: dict[str, Any] = {}
            if isinstance(options, ValidatorOptions):
                merged.update(
                    allow_underscore=options.allow_underscore,
                    allow_single_label=options.allow_single_label,
                    private_tld=options.private_tld,
                )
            elif options is not None:
                merged.update(options)
            merged.update(option_kwargs)
            options = merged
        self.options = resolve_options(options)
        self.tld_table = tld_table

    def __repr__(self) -> str:
        return f"DomainValidator(options={self.options!r}, tld_table={self.tld_table!r})"

    def is_domain(self, value: object, options: OptionsLike = None) -> str | None:
        return validate_domain(value, self._options_for(options), self.tld_table)

    def is_hostname(self, value: object, options: OptionsLike = None) -> str | None:
        return validate_hostname(value, self._options_for(options))

    def is_domain_label(self, value: object, options: OptionsLike = None) -> str | None:
        return validate_label(value, self._options_for(options))

    def _options_for(self, options: OptionsLike) -> ValidatorOptions:
        return self.options if options is None else resolve_options(options)


def is_domain(value: object, options: OptionsLike = None) -> str | None:
    """Return the domain unchanged if well-formed with a known TLD, else None."""
    return validate_domain(value, resolve_options(options))


def is_hostname(value: object, options: OptionsLike = None) -> str | None:
    """Return the hostname unchanged if well-formed, else None."""
    return validate_hostname(value, resolve_options(options))


def is_domain_label(value: object, options: OptionsLike = None) -> str | None:
    """Return the label unchanged if well-formed, else None."""
    return validate_label(value, resolve_options(options))

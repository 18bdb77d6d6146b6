from __future__ import annotations

import re

from .options import DEFAULT_OPTIONS, ValidatorOptions
from .tld import TldTable, tld_is_valid

MAX_LABEL_LENGTH = 63
MAX_NAME_LENGTH = 255

# ASCII classes only: \d and \w would admit Unicode digits and letters.
_LABEL_RE = re.compile(r"[0-9A-Za-z](?:[0-9A-Za-z-]*[0-9A-Za-z])?")
_LABEL_UNDERSCORE_RE = re.compile(r"[0-9A-Za-z_](?:[0-9A-Za-z_-]*[0-9A-Za-z_])?")


def validate_label(value: object, options: ValidatorOptions = DEFAULT_OPTIONS) -> str | None:
    """
    Return ``value`` unchanged if it is a well-formed domain label, else None.

    A label is 1-63 ASCII letters, digits and interior hyphens. With
    ``allow_underscore`` the underscore is accepted in any position.
    """
    if not isinstance(value, str):
        return None
    if "\n" in value or "." in value:
        return None
    if not 0 < len(value) <= MAX_LABEL_LENGTH:
        return None
    pattern = _LABEL_UNDERSCORE_RE if options.allow_underscore else _LABEL_RE
    if pattern.fullmatch(value) is None:
        return None
    return value


def validate_domain(
    value: object,
    options: ValidatorOptions = DEFAULT_OPTIONS,
    table: TldTable | None = None,
) -> str | None:
    """
    Return ``value`` unchanged if it is a well-formed domain name, else None.

    Every label must pass :func:`validate_label`, at least two labels are
    required unless ``allow_single_label`` is set, and the last label must be
    a known TLD (built-in table, ``table`` when given, or ``private_tld``).
    A trailing dot is not accepted.
    """
    labels = _split_labels(value, options)
    if labels is None:
        return None
    if not options.allow_single_label and len(labels) < 2:
        return None
    if not tld_is_valid(labels[-1], options, table):
        return None
    return ".".join(labels)


def validate_hostname(value: object, options: ValidatorOptions = DEFAULT_OPTIONS) -> str | None:
    """Like :func:`validate_domain` but without the label-count and TLD checks."""
    labels = _split_labels(value, options)
    if labels is None:
        return None
    return ".".join(labels)


def _split_labels(value: object, options: ValidatorOptions) -> list[str] | None:
    if not isinstance(value, str):
        return None
    if not 0 < len(value) <= MAX_NAME_LENGTH:
        return None

    # Empty components from leading, trailing or doubled dots fail as labels.
    labels: list[str] = []
    for part in value.split("."):
        label = validate_label(part, options)
        if label is None:
            return None
        labels.append(label)
    return labels

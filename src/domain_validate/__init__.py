"""Syntactic validation of DNS domain names, hostnames and labels."""

from .options import ValidatorOptions
from .tld import TldTable, load_tld_table, tld_exists, tld_is_valid
from .validator import DomainValidator, is_domain, is_domain_label, is_hostname

__all__ = [
    "DomainValidator",
    "TldTable",
    "ValidatorOptions",
    "is_domain",
    "is_domain_label",
    "is_hostname",
    "load_tld_table",
    "tld_exists",
    "tld_is_valid",
]

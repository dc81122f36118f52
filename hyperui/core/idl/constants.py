"""
Names shared by the IDL parser and composer.

Extension keys:
  - x-dependencies     array of IDL expressions (Requires / OnlyOne)
  - x-property-groups  mapping of group name -> Group expression
"""

from types import MappingProxyType
from typing import Final

DEPENDENCIES_EXTENSION: Final = "x-dependencies"
PROPERTY_GROUPS_EXTENSION: Final = "x-property-groups"

REQUIRES_KEYWORD: Final = "IF"
REQUIRES_CONSEQUENT_KEYWORD: Final = "THEN"
VALUE_OPERATOR: Final = "=="
ONLY_ONE_KEYWORD: Final = "OnlyOne"
GROUP_KEYWORD: Final = "Group"

# Property keys in a Requires expression stop at whitespace, "=" and ";"
KEY_TOKEN_PATTERN: Final = r"[^\s=;]+"

TERMINATOR: Final = ";"
LIST_OPEN: Final = "("
LIST_CLOSE: Final = ")"
LIST_SEPARATOR: Final = ","
LIST_JOINER: Final = ", "

STRING_QUOTE: Final = "'"
QUOTE_CHARS: Final = ("'", '"')

BOOLEAN_LITERALS: Final = MappingProxyType({"true": True, "false": False})

# Minimum number of keys per list expression
MIN_ONLY_ONE_KEYS: Final = 2
MIN_GROUP_KEYS: Final = 1

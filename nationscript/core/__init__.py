"""Core assembly engine: assemblers, converters, field paths and the reader.

WHY: The core package is the stable heart of the library. It knows
nothing about HTTP or about any particular response shape; it only turns
a stream of markup events into products as configured.

HOW: assembler.py holds the state machine and its list variants,
fields.py the dotted path type, converters.py the text converters, and
reader.py the bridge from lxml's push parser to an assembler tree.

RULES:
- No I/O in this package apart from what the caller feeds the reader
- Shape-specific field names never appear here
"""

from nationscript.core.assembler import (
    Assembler,
    FilteredListAssembler,
    ListAssembler,
)
from nationscript.core.converters import (
    convert_boolean,
    convert_choice,
    convert_list,
    convert_null_if_zero,
    convert_number,
)
from nationscript.core.fields import FieldPath
from nationscript.core.reader import MarkupReader, assemble

__all__ = [
    "Assembler",
    "ListAssembler",
    "FilteredListAssembler",
    "FieldPath",
    "MarkupReader",
    "assemble",
    "convert_boolean",
    "convert_choice",
    "convert_list",
    "convert_null_if_zero",
    "convert_number",
]

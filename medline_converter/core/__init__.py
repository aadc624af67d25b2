"""Core codec modules: record shapes, tables, parser and emitter.

WHY: The core package is the stable heart of the converter: the
translation tables that drive both directions, the line parser, and
the emitter that writes records back out.

HOW: ir.py defines the shapes, tables.py the field/type translations,
sources.py reduces inputs to text, parser.py rebuilds records from
text, emitter.py drives formatting and writes to a destination,
schema.py validates records received as JSON.

RULES:
- Tables are read-only after import
- Parsing and formatting never share mutable state
"""

"""Built-in style rules. Importing this package registers them on the default registry."""

from jsstyle.rules import braces, equality, implicit_globals, indent, naming, quotes, semicolons

__all__ = ["braces", "equality", "implicit_globals", "indent", "naming", "quotes", "semicolons"]

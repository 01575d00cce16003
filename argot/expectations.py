r"""
Argot expectation declarations and normalization.

Overview
- Expectation: the canonical, immutable form of one declared argument.
  • names: ordered, unique, trimmed aliases; the first one is the primary name.
  • description: trimmed text or None.
  • default: any value, or Unset when no default was declared.
  • convertor: callable applied to the resolved raw (or default) value.

- expect(declaration): normalize a loose declaration (an Expectation or a mapping
  with "name"/"default"/"description"/"convertor" keys) into an Expectation.

Normalization rules (applied once, on construction)
- A string name is split on whitespace runs and/or a comma optionally surrounded by
  whitespace, so "port, p", "port p" and "port,p" all become ("port", "p").
- An iterable of names is trimmed element by element and never re-split.
- Empty aliases are dropped either way, so "port,,p" and ["port", "", "p"] both
  become ("port", "p"); a declaration left with no alias is rejected.
- Repeated aliases inside one declaration collapse to their first occurrence.
- Empty descriptions (after trimming) are treated as absent.
- Unset and None both mean “no default”; 0, False and "" are real defaults.
- A missing convertor becomes the identity function.

Quick example:
    >>> port = Expectation("port, p", default=8080, convertor=int)
    >>> port.names
    ('port', 'p')
    >>> port.convertor("80")
    80
"""
import re
from collections.abc import Iterable, Mapping
from typing import final

from .utils import *


def identity(value, /):
    """Default convertor: return the value unchanged."""
    return value


def _sanitize_names(metadata, /):
    """
    Internal: split, trim and deduplicate the declared aliases.

    Raises
    - TypeError: when the name is neither a string nor an iterable of strings.
    - ValueError: when no alias is left after trimming.
    """
    name = metadata["names"]

    if isinstance(name, str):
        fragments = [fragment for fragment in re.split(r"\s*,\s*|\s+", name.strip()) if fragment]
    elif isinstance(name, Iterable):
        fragments = []
        for fragment in name:
            if not isinstance(fragment, str):
                raise TypeError("expectation names must be strings")
            if fragment := fragment.strip():
                fragments.append(fragment)
    else:
        raise TypeError("expectation 'name' must be a string or an iterable of strings")

    if not fragments:
        raise ValueError("expectation must specify at least one name")

    # dict keeps insertion order, so this is an ordered set
    metadata["names"] = tuple(dict.fromkeys(fragments))


def _sanitize_description(metadata, /):
    if not isinstance(description := metadata["description"], str | None | Unset):
        raise TypeError("expectation 'description' must be a string")
    metadata["description"] = (description.strip() or None) if description else None


def _sanitize_default(metadata, /):
    # an explicit None cannot be told apart from an undeclared default
    if metadata["default"] is None:
        metadata["default"] = Unset


def _sanitize_convertor(metadata, /):
    if (convertor := metadata["convertor"]) is Unset:
        metadata["convertor"] = identity
    elif not callable(convertor):
        raise TypeError("expectation 'convertor' must be callable")


@final
class Expectation:
    """
    Canonical, immutable declaration of one expected argument.

    Construction normalizes the loose declaration (see module docs); afterwards
    every field is exposed through a read-only property.
    """

    __introspectable__ = (
        "names",
        "description",
        "default",
        "convertor",
    )

    __slots__ = tuple("_" + name for name in __introspectable__)

    def __new__(cls, name, /, default=Unset, description=Unset, convertor=Unset):
        """
        Construct an Expectation from a loose declaration.

        Parameters
        - name: str | Iterable[str]
          Aliases of the argument, e.g. "port,p" or ["port", "p"].
        - default: Any
          Value used when no alias is present on the command line. Unset and
          None both declare no default: has_default() is False and the help
          shows no default line.
        - description: Unset | str | None
          Help text; may span several lines.
        - convertor: Unset | Callable
          Transform from the untyped raw value to the target type. It also
          receives the default, or None when there is neither a raw value nor
          a default.
        """
        metadata = {
            "names": name,
            "description": description,
            "default": default,
            "convertor": convertor,
        }
        _sanitize_names(metadata)
        _sanitize_description(metadata)
        _sanitize_default(metadata)
        _sanitize_convertor(metadata)

        self = super().__new__(cls)
        for field, value in metadata.items():
            object.__setattr__(self, "_" + field, value)
        return self

    names = view("names")
    description = view("description")

    @property
    def default(self):
        """The declared default, or Unset when none was declared (returned as-is, never copied)."""
        return self._default

    @property
    def convertor(self):
        return self._convertor

    @property
    def primary(self):
        """The first alias, used as the display name."""
        return self._names[0]

    def has_default(self):
        return self._default is not Unset

    def __contains__(self, name):
        return name in self._names

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Expectation' is not an acceptable base type")

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __delattr__(self, name, /):
        raise AttributeError(f"{type(self).__name__!r} object is read-only")

    def __rich_repr__(self):
        for name in self.__introspectable__:
            yield name, getattr(self, name)

    def __repr__(self):
        return "expectation(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())


def expect(declaration, /):
    """
    Normalize one loose declaration into an Expectation.

    Accepts
    - an Expectation (returned unchanged),
    - a mapping with a required "name" key and optional "default",
      "description" and "convertor" keys.

    Raises
    - TypeError: for any other object, or for unknown mapping keys.
    """
    if isinstance(declaration, Expectation):
        return declaration
    if isinstance(declaration, Mapping):
        if "name" not in declaration:
            raise TypeError("expectation declaration must have a 'name'")
        if unknown := set(declaration) - {"name", "default", "description", "convertor"}:
            raise TypeError("unknown expectation keys: %s" % ", ".join(map(repr, sorted(unknown))))
        declaration = dict(declaration)
        return Expectation(declaration.pop("name"), **declaration)
    raise TypeError("expectation must be an Expectation or a mapping")


__all__ = (
    "Expectation",
    "expect",
    "identity",
)

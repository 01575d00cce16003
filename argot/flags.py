r"""
Argot raw flag source.

Turns a process's raw command-line tokens into a flat mapping of flag name to
untyped value. The resolution layer (argot.arguments) only ever reads this
mapping; it never re-tokenizes.

Token forms
- "--name=value"      → {"name": value}
- "--name value"      → {"name": value}      (next token does not start with '-')
- "--name true|false" → {"name": bool}
- "--name"            → {"name": True}
- "--no-name"         → {"name": False}
- "-abc"              → {"a": True, "b": True, "c": True}
- "-abc value"        → {"a": True, "b": True, "c": value}
- "-n5" / "-n=5"      → {"n": 5}
- anything else       → appended to the "_" list
- "--"                → every following token is appended to "_" verbatim

Values
- numeric-looking strings (decimal, float, exponent, 0x-hex) become int/float.
- a key seen more than once accumulates a list, in order of appearance; a
  boolean value is simply overwritten.

Quick example:
    >>> parse(["serve", "--port=8080", "-v"])
    {'_': ['serve'], 'port': 8080, 'v': True}
"""
import re
import shlex
import sys
from collections.abc import Iterable

from .utils import *

_NUMBER = re.compile(r"[-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?")
_HEXADECIMAL = re.compile(r"0[xX][0-9a-fA-F]+")


def isnumber(value, /):
    """
    Tell whether a raw value looks like a number.
    """
    if isinstance(value, int | float) and not isinstance(value, bool):
        return True
    if not isinstance(value, str):
        return False
    return bool(_NUMBER.fullmatch(value) or _HEXADECIMAL.fullmatch(value))


def number(value, /):
    """
    Convert a numeric-looking string into an int (integral literals, hex) or a float.
    """
    if not isinstance(value, str):
        return value
    if _HEXADECIMAL.fullmatch(value):
        return int(value, 16)
    if re.fullmatch(r"[-+]?\d+", value):
        return int(value)
    return float(value)


def _store(namespace, key, value):
    """
    Internal: record one flag value, coercing numbers and accumulating repeats.
    """
    if isnumber(value):
        value = number(value)

    previous = namespace.get(key, Unset)
    if previous is Unset or isinstance(previous, bool):
        namespace[key] = value
    elif isinstance(previous, list):
        previous.append(value)
    else:
        namespace[key] = [previous, value]


def _consume_short(namespace, token, tokens, index):
    """
    Internal: handle a "-abc" style token; returns the index of the last consumed token.
    """
    letters = token[1:-1]
    broken = False

    for position, letter in enumerate(letters):
        rest = token[position + 2:]

        if rest == "-":
            _store(namespace, letter, rest)
            continue
        if re.match(r"[A-Za-z]", letter) and "=" in rest:
            _store(namespace, letter, rest.split("=", 1)[1])
            broken = True
            break
        if re.match(r"[A-Za-z]", letter) and re.search(r"-?\d+(\.\d*)?(e-?\d+)?$", rest):
            _store(namespace, letter, rest)
            broken = True
            break
        if position + 1 < len(letters) and re.match(r"\W", letters[position + 1]):
            _store(namespace, letter, rest)
            broken = True
            break
        _store(namespace, letter, True)

    key = token[-1]
    if broken or key == "-":
        return index

    try:
        following = tokens[index + 1]
    except IndexError:
        following = None

    if following and not re.match(r"(-|--)[^-]", following) and not re.fullmatch(r"true|false", following):
        _store(namespace, key, following)
        return index + 1
    if following and re.fullmatch(r"true|false", following):
        _store(namespace, key, following == "true")
        return index + 1
    _store(namespace, key, True)
    return index


def parse(tokens, /):
    """
    Parse raw command-line tokens into a raw flag mapping.

    Parameters
    - tokens: Iterable[str]
      Already split tokens (e.g., sys.argv[1:]).

    Returns
    - dict[str, Any]: flag name → untyped value, plus "_" → list of positionals.

    Raises
    - TypeError: when a token is not a string.
    """
    tokens = list(tokens)
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("parse() argument must be an iterable of strings")

    # everything after a bare "--" is positional, verbatim
    try:
        separator = tokens.index("--")
    except ValueError:
        rest = []
    else:
        tokens, rest = tokens[:separator], tokens[separator + 1:]

    namespace = {"_": []}
    index = 0

    while index < len(tokens):
        token = tokens[index]

        if match := re.fullmatch(r"--([^=]+)=(.*)", token, re.DOTALL):
            _store(namespace, match[1], match[2])
        elif match := re.fullmatch(r"--no-(.+)", token, re.DOTALL):
            _store(namespace, match[1], False)
        elif match := re.fullmatch(r"--(.+)", token, re.DOTALL):
            key = match[1]
            following = tokens[index + 1] if index + 1 < len(tokens) else None
            if following is not None and not following.startswith("-") and not re.fullmatch(r"true|false", following):
                _store(namespace, key, following)
                index += 1
            elif following is not None and re.fullmatch(r"true|false", following):
                _store(namespace, key, following == "true")
                index += 1
            else:
                _store(namespace, key, True)
        elif re.match(r"-[^-]+", token):
            index = _consume_short(namespace, token, tokens, index)
        else:
            namespace["_"].append(number(token) if isnumber(token) else token)

        index += 1

    namespace["_"].extend(rest)
    return namespace


def tokenize(prompt=Unset, /):
    """
    Normalize a prompt into a list of raw tokens.

    Parameters
    - prompt:
      • Unset: read tokens from sys.argv[1:].
      • str: shell-like string; split via shlex.split.
      • Iterable[str]: pre-tokenized sequence, used as-is.

    Raises
    - TypeError: when prompt is not Unset/str/Iterable[str], or when an
      iterable contains a non-string element.
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("tokenize() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("tokenize() argument must be a string or an iterable of strings")


__all__ = (
    "parse",
    "tokenize",
    "isnumber",
    "number",
)

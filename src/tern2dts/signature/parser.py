"""
Recursive-descent parser for Tern type expressions.

The parser accepts the source grammar (``fn(a: number) -> +Color``,
``[string]``, ``Promise[:t=T]``, ``{string: T}``, ``?``) as well as the
declaration syntax it is translated into (``(a: T) => R``, ``T[]``,
``Promise<T>``, ``{[key: string]: T}``). Reading both is what makes
translation idempotent.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from tern2dts.signature.types import (
    ArrayType,
    Atom,
    FunctionType,
    GenericType,
    Literal,
    MapType,
    ObjectType,
    Param,
    PromiseType,
    RawType,
    Ref,
    Signature,
    SignatureForm,
    TypeExpression,
    UnionType,
)

_TOKEN_RE = re.compile(
    r"""
    \s*(?:
        (?P<arrow>->|=>)
      | (?P<string>"[^"]*"|'[^']*')
      | (?P<ident>[A-Za-z_$0-9][\w$]*(?:\.[A-Za-z_$][\w$]*)*)
      | (?P<punct>[()\[\]{}<>,:|?+=.])
    )
    """,
    re.VERBOSE,
)

_DECLARATION_RE = re.compile(
    r"^(?P<static>static\s+)?(?P<name>[A-Za-z_$][\w$]*)\s*(?P<sep>\(|\??:)"
)


class TypeSyntaxError(ValueError):
    """Raised internally when a type string does not follow the grammar."""


@dataclass
class _Token:
    kind: str
    text: str


def tokenize(text: str) -> List[_Token]:
    tokens = []
    pos = 0
    text = text.rstrip()
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if not match or match.end() == pos:
            raise TypeSyntaxError(f"Unexpected character {text[pos:].strip()[:1]!r}")
        kind = match.lastgroup
        tokens.append(_Token(kind, match.group(kind)))
        pos = match.end()
    return tokens


class TypeParser:
    """Parses one type string into a :data:`TypeExpression` tree."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.tokens = tokenize(text)
        self.pos = 0

    # ----- token helpers -----

    def _peek(self, offset: int = 0) -> Optional[_Token]:
        index = self.pos + offset
        if index < len(self.tokens):
            return self.tokens[index]
        return None

    def _at(self, text: str, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.text == text

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise TypeSyntaxError("Unexpected end of type expression")
        self.pos += 1
        return token

    def _expect(self, text: str) -> _Token:
        token = self._next()
        if token.text != text:
            raise TypeSyntaxError(f"Expected {text!r}, found {token.text!r}")
        return token

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    # ----- grammar -----

    def parse(self) -> TypeExpression:
        if not self.tokens:
            return Atom("?")
        node = self.parse_type()
        if not self.at_end():
            raise TypeSyntaxError(f"Trailing input at {self._peek().text!r}")
        return node

    def parse_type(self) -> TypeExpression:
        members = [self.parse_postfix()]
        while self._at("|"):
            self._next()
            members.append(self.parse_postfix())
        if len(members) == 1:
            return members[0]
        return UnionType(members)

    def parse_postfix(self) -> TypeExpression:
        node = self.parse_primary()
        while self._at("[") and self._at("]", 1):
            self.pos += 2
            node = ArrayType(node)
        return node

    def parse_primary(self) -> TypeExpression:
        token = self._next()

        if token.kind == "ident" and token.text == "fn" and self._at("("):
            self._next()
            params = self.parse_params(")")
            returns = None
            if self._at("->"):
                self._next()
                returns = self.parse_type()
            return FunctionType(params, returns)

        if token.text == "(":
            arrow = self._try_arrow_function()
            if arrow is not None:
                return arrow
            inner = self.parse_type()
            self._expect(")")
            return inner

        if token.text == "[":
            element = self.parse_type()
            self._expect("]")
            return ArrayType(element)

        if token.text == "{":
            return self._parse_braces()

        if token.text == "+":
            name = self._next()
            if name.kind != "ident":
                raise TypeSyntaxError("Expected a name after '+'")
            return Ref(name.text)

        if token.text == "?":
            return Atom("?")

        if token.kind == "string":
            return Literal('"' + token.text[1:-1] + '"')

        if token.kind == "ident":
            return self._parse_named(token.text)

        raise TypeSyntaxError(f"Unexpected token {token.text!r}")

    def parse_params(self, close: str) -> List[Param]:
        params: List[Param] = []
        if self._at(close):
            self._next()
            return params
        while True:
            params.append(self._parse_param())
            token = self._next()
            if token.text == close:
                return params
            if token.text != ",":
                raise TypeSyntaxError(f"Expected ',' or {close!r}, found {token.text!r}")

    def _parse_param(self) -> Param:
        first = self._peek()
        if first is not None and first.kind in ("ident", "string"):
            if self._at(":", 1):
                self.pos += 2
                return Param(_unquote(first.text), self.parse_type())
            if self._at("?", 1) and self._at(":", 2):
                self.pos += 3
                return Param(_unquote(first.text), self.parse_type(), optional=True)
        return Param(None, self.parse_type())

    def _parse_named(self, name: str) -> TypeExpression:
        # Promise[:t=T] and friends
        if self._at("[") and self._at(":", 1):
            self.pos += 2
            self._next()  # type variable name
            self._expect("=")
            arg = self.parse_type()
            self._expect("]")
            if name == "Promise":
                return PromiseType(arg)
            return GenericType(name, [arg])
        if self._at("<"):
            self._next()
            args = [self.parse_type()]
            while self._at(","):
                self._next()
                args.append(self.parse_type())
            self._expect(">")
            if name == "Promise" and len(args) == 1:
                return PromiseType(args[0])
            return GenericType(name, args)
        if name == "Promise":
            return PromiseType(None)
        return Atom(name)

    def _parse_braces(self) -> TypeExpression:
        # {[key: string]: T}
        if self._at("["):
            self._next()
            self._next()
            self._expect(":")
            self._next()
            self._expect("]")
            self._expect(":")
            value = self.parse_type()
            self._expect("}")
            return MapType(value, indexed=True)
        fields = self.parse_params("}")
        if len(fields) == 1 and fields[0].name == "string" and not fields[0].optional:
            return MapType(fields[0].type)
        return ObjectType(fields)

    def _try_arrow_function(self) -> Optional[FunctionType]:
        start = self.pos
        try:
            params = self.parse_params(")")
            if not self._at("=>"):
                raise TypeSyntaxError("not an arrow function")
            self._next()
            return FunctionType(params, self.parse_type(), arrow=True)
        except TypeSyntaxError:
            self.pos = start
            return None


def _unquote(text: str) -> str:
    if len(text) >= 2 and text[0] == text[-1] and text[0] in "\"'":
        return text[1:-1]
    return text


def parse_type(text: str) -> TypeExpression:
    """
    Parse a type string, degrading to :class:`RawType` on malformed input.

    Args:
        text: Type expression in source or declaration syntax

    Returns:
        Parsed tree; never raises
    """
    try:
        return TypeParser(text or "").parse()
    except TypeSyntaxError:
        return RawType(text.strip())


def parse_declaration(text: str) -> Optional[Tuple[Signature, bool]]:
    """
    Recognise text that is already a translated member declaration.

    Handles ``name: T``, ``static name(a: T): R`` and ``constructor(a: T)``.

    Args:
        text: Candidate declaration text

    Returns:
        Tuple of (signature, has explicit return), or None when the text is a
        plain type expression
    """
    text = (text or "").strip()
    match = _DECLARATION_RE.match(text)
    if not match or match.group("name") == "fn":
        return None
    name = match.group("name")
    is_static = bool(match.group("static"))
    rest = text[match.end():]
    if match.group("sep") != "(":
        # a property whose type degraded to raw text keeps that text as its type
        return Signature(name, parse_type(rest), SignatureForm.PROPERTY, is_static), True
    try:
        parser = TypeParser(rest)
        params = parser.parse_params(")")
        returns = None
        if parser._at(":"):
            parser._next()
            returns = parser.parse_type()
        if not parser.at_end():
            return None
    except TypeSyntaxError:
        return None
    form = SignatureForm.CONSTRUCTOR if name == "constructor" else SignatureForm.METHOD
    signature = Signature(name, FunctionType(params, returns), form, is_static)
    return signature, returns is not None

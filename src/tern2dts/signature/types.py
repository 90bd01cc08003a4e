"""
Type expression tree for Tern style type strings.

A parsed type string is a tree of the small dataclasses below. Rendering is
faithful to the tree: source-only constructs (``+Name`` references,
``fn(...) -> T`` callbacks, the ``bool`` keyword) render in source syntax until
a rewrite rule replaces them, so every rule in
:mod:`tern2dts.signature.rules` has an observable effect on its own.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Callable, Iterator, List, Optional, Tuple, Union


@dataclass
class Atom:
    """Named type such as ``number`` or ``Color``."""
    name: str


@dataclass
class Ref:
    """Instance reference ``+Name`` from the source grammar."""
    name: str


@dataclass
class Literal:
    """String literal type, stored with its quotes."""
    value: str


@dataclass
class Param:
    """Function parameter. ``name`` is None for anonymous source parameters."""
    name: Optional[str]
    type: "TypeExpression"
    optional: bool = False


@dataclass
class FunctionType:
    """Function type. ``returns`` is None when the source omits the arrow."""
    params: List[Param] = field(default_factory=list)
    returns: Optional["TypeExpression"] = None
    arrow: bool = False


@dataclass
class ArrayType:
    element: "TypeExpression"


@dataclass
class PromiseType:
    """``Promise[:t=T]`` / ``Promise<T>``; ``result`` is None for a bare Promise."""
    result: Optional["TypeExpression"] = None


@dataclass
class GenericType:
    name: str
    args: List["TypeExpression"] = field(default_factory=list)


@dataclass
class MapType:
    """String-keyed map. ``indexed`` selects ``{[key: string]: T}`` over ``{string: T}``."""
    value: "TypeExpression"
    indexed: bool = False


@dataclass
class ObjectType:
    fields: List[Param] = field(default_factory=list)


@dataclass
class UnionType:
    members: List["TypeExpression"] = field(default_factory=list)


@dataclass
class RawType:
    """Fragment the parser could not understand, re-emitted verbatim."""
    text: str


TypeExpression = Union[
    Atom, Ref, Literal, FunctionType, ArrayType, PromiseType,
    GenericType, MapType, ObjectType, UnionType, RawType,
]


class SignatureForm(Enum):
    """Shape of a translated member signature."""
    PROPERTY = "property"
    METHOD = "method"
    CONSTRUCTOR = "constructor"


@dataclass
class Signature:
    """A member declaration: its name, form and type tree."""
    name: str
    type: TypeExpression
    form: Optional[SignatureForm] = None
    is_static: bool = False
    inferred_return: bool = False

    @property
    def function(self) -> Optional[FunctionType]:
        """The root function type of call-form signatures."""
        if isinstance(self.type, FunctionType):
            return self.type
        return None

    @property
    def has_parameter_list(self) -> bool:
        return self.form in (SignatureForm.METHOD, SignatureForm.CONSTRUCTOR)

    def render(self, prefix: Optional[str] = None) -> str:
        """
        Render the signature as declaration text.

        Args:
            prefix: Token placed before the name. Defaults to ``"static "``
                for static members; pass ``""`` to drop it.

        Returns:
            Declaration text without a trailing newline
        """
        if prefix is None:
            prefix = "static " if self.is_static else ""
        func = self.function
        if self.form == SignatureForm.CONSTRUCTOR and func is not None:
            return f"constructor({render_params(func.params)})"
        if self.form == SignatureForm.METHOD and func is not None:
            text = f"{prefix}{self.name}({render_params(func.params)})"
            if func.returns is not None:
                text += f": {render_type(func.returns)}"
            return text
        return f"{prefix}{self.name}: {render_type(self.type)}"

    def copy(self, **changes) -> "Signature":
        return replace(self, **changes)


def render_params(params: List[Param]) -> str:
    parts = []
    for param in params:
        type_text = render_type(param.type)
        if param.name is None:
            parts.append(type_text)
        else:
            marker = "?" if param.optional else ""
            parts.append(f"{param.name}{marker}: {type_text}")
    return ", ".join(parts)


def render_type(node: TypeExpression) -> str:
    """Render a type tree as text."""
    if isinstance(node, Atom):
        return node.name
    if isinstance(node, Ref):
        return f"+{node.name}"
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, FunctionType):
        params = render_params(node.params)
        if node.arrow:
            returns = render_type(node.returns) if node.returns is not None else "void"
            return f"({params}) => {returns}"
        if node.returns is None:
            return f"fn({params})"
        return f"fn({params}) -> {render_type(node.returns)}"
    if isinstance(node, ArrayType):
        inner = render_type(node.element)
        if isinstance(node.element, (UnionType, FunctionType)):
            inner = f"({inner})"
        return f"{inner}[]"
    if isinstance(node, PromiseType):
        if node.result is None:
            return "Promise"
        return f"Promise<{render_type(node.result)}>"
    if isinstance(node, GenericType):
        return f"{node.name}<{', '.join(render_type(a) for a in node.args)}>"
    if isinstance(node, MapType):
        if node.indexed:
            return f"{{[key: string]: {render_type(node.value)}}}"
        return f"{{string: {render_type(node.value)}}}"
    if isinstance(node, ObjectType):
        return "{" + render_params(node.fields) + "}"
    if isinstance(node, UnionType):
        return " | ".join(render_type(m) for m in node.members)
    if isinstance(node, RawType):
        return node.text
    return str(node)


def map_type(
    node: TypeExpression,
    fn: Callable[[TypeExpression], TypeExpression],
) -> TypeExpression:
    """
    Rebuild a tree bottom-up, applying ``fn`` to every node after its children.

    The input tree is never mutated.
    """
    if isinstance(node, FunctionType):
        node = replace(
            node,
            params=[replace(p, type=map_type(p.type, fn)) for p in node.params],
            returns=map_type(node.returns, fn) if node.returns is not None else None,
        )
    elif isinstance(node, ArrayType):
        node = replace(node, element=map_type(node.element, fn))
    elif isinstance(node, PromiseType) and node.result is not None:
        node = replace(node, result=map_type(node.result, fn))
    elif isinstance(node, GenericType):
        node = replace(node, args=[map_type(a, fn) for a in node.args])
    elif isinstance(node, MapType):
        node = replace(node, value=map_type(node.value, fn))
    elif isinstance(node, ObjectType):
        node = replace(
            node, fields=[replace(f, type=map_type(f.type, fn)) for f in node.fields]
        )
    elif isinstance(node, UnionType):
        node = replace(node, members=[map_type(m, fn) for m in node.members])
    return fn(node)


def walk_type(node: TypeExpression) -> Iterator[TypeExpression]:
    """Yield every node of a tree in pre-order."""
    yield node
    if isinstance(node, FunctionType):
        for param in node.params:
            yield from walk_type(param.type)
        if node.returns is not None:
            yield from walk_type(node.returns)
    elif isinstance(node, ArrayType):
        yield from walk_type(node.element)
    elif isinstance(node, PromiseType) and node.result is not None:
        yield from walk_type(node.result)
    elif isinstance(node, GenericType):
        for arg in node.args:
            yield from walk_type(arg)
    elif isinstance(node, MapType):
        yield from walk_type(node.value)
    elif isinstance(node, ObjectType):
        for f in node.fields:
            yield from walk_type(f.type)
    elif isinstance(node, UnionType):
        for member in node.members:
            yield from walk_type(member)


def replace_first(
    node: TypeExpression,
    predicate: Callable[[TypeExpression], bool],
    replacement: TypeExpression,
) -> Tuple[TypeExpression, bool]:
    """
    Replace the first node (pre-order) matching ``predicate``.

    Returns:
        Tuple of (new tree, whether a node was replaced)
    """
    if predicate(node):
        return replacement, True
    if isinstance(node, FunctionType):
        params = list(node.params)
        for i, param in enumerate(params):
            new, done = replace_first(param.type, predicate, replacement)
            if done:
                params[i] = replace(param, type=new)
                return replace(node, params=params), True
        if node.returns is not None:
            new, done = replace_first(node.returns, predicate, replacement)
            if done:
                return replace(node, returns=new), True
        return node, False
    if isinstance(node, ArrayType):
        new, done = replace_first(node.element, predicate, replacement)
        return (replace(node, element=new), True) if done else (node, False)
    if isinstance(node, PromiseType) and node.result is not None:
        new, done = replace_first(node.result, predicate, replacement)
        return (replace(node, result=new), True) if done else (node, False)
    if isinstance(node, MapType):
        new, done = replace_first(node.value, predicate, replacement)
        return (replace(node, value=new), True) if done else (node, False)
    if isinstance(node, (GenericType, UnionType)):
        items = list(node.args if isinstance(node, GenericType) else node.members)
        for i, item in enumerate(items):
            new, done = replace_first(item, predicate, replacement)
            if done:
                items[i] = new
                if isinstance(node, GenericType):
                    return replace(node, args=items), True
                return replace(node, members=items), True
        return node, False
    if isinstance(node, ObjectType):
        fields_ = list(node.fields)
        for i, f in enumerate(fields_):
            new, done = replace_first(f.type, predicate, replacement)
            if done:
                fields_[i] = replace(f, type=new)
                return replace(node, fields=fields_), True
        return node, False
    return node, False

"""
Ordered rewrite rules turning a parsed Tern type into a declaration signature.

Each rule is a pure function ``(Signature, TranslationContext) -> Signature``
and assumes the rules before it already ran. :data:`RULES` fixes the order.
"""

from dataclasses import dataclass, field, replace
from typing import Callable, List, Optional, Tuple

from tern2dts.signature.types import (
    Atom,
    FunctionType,
    PromiseType,
    Ref,
    Signature,
    SignatureForm,
    TypeExpression,
    map_type,
)


@dataclass
class TranslationContext:
    """Per-call information the rules may consult."""
    name: str
    owner: Optional[str] = None
    is_static: bool = False
    may_be_constructor: bool = False
    ignore_void_return: List[str] = field(default_factory=list)
    string_return_overrides: List[str] = field(default_factory=list)

    def is_void_ignored(self) -> bool:
        """Match the name against ``name``, ``Owner.name``, ``*`` and ``Owner.*`` entries."""
        for entry in self.ignore_void_return:
            if "." in entry:
                owner, member = entry.split(".", 1)
                if owner != self.owner:
                    continue
            else:
                member = entry
            if member in ("*", self.name):
                return True
        return False


Rule = Callable[[Signature, TranslationContext], Signature]


def strip_instance_markers(sig: Signature, ctx: TranslationContext) -> Signature:
    """``+Name`` → ``Name``."""
    def strip(node: TypeExpression) -> TypeExpression:
        if isinstance(node, Ref):
            return Atom(node.name)
        return node
    return sig.copy(type=map_type(sig.type, strip))


def classify_property(sig: Signature, ctx: TranslationContext) -> Signature:
    """Anything that is not a function type is a ``name: T`` property."""
    if sig.form is None and not isinstance(sig.type, FunctionType):
        return sig.copy(form=SignatureForm.PROPERTY)
    return sig


def infer_void_return(sig: Signature, ctx: TranslationContext) -> Signature:
    """Functions without a return arrow return ``void``."""
    def fill(node: TypeExpression) -> TypeExpression:
        if isinstance(node, FunctionType) and node.returns is None:
            return replace(node, returns=Atom("void"))
        return node

    root = sig.function
    if root is None:
        return sig
    # nested callbacks always get void; the root honours the ignore list
    params = [replace(p, type=map_type(p.type, fill)) for p in root.params]
    root = replace(root, params=params)
    inferred = False
    if (
        root.returns is None
        and sig.form in (None, SignatureForm.METHOD)
        and not ctx.is_void_ignored()
    ):
        root = replace(root, returns=Atom("void"))
        inferred = True
    return sig.copy(type=root, inferred_return=sig.inferred_return or inferred)


def name_anonymous_parameters(sig: Signature, ctx: TranslationContext) -> Signature:
    """Anonymous arguments get positional names ``arg0``, ``arg1``, ..."""
    def name(node: TypeExpression) -> TypeExpression:
        if isinstance(node, FunctionType) and any(p.name is None for p in node.params):
            params = [
                p if p.name is not None else replace(p, name=f"arg{i}")
                for i, p in enumerate(node.params)
            ]
            return replace(node, params=params)
        return node
    return sig.copy(type=map_type(sig.type, name))


def arrow_callbacks(sig: Signature, ctx: TranslationContext) -> Signature:
    """Function types below the root render as ``(a: T) => R``."""
    def arrow(node: TypeExpression) -> TypeExpression:
        if isinstance(node, FunctionType) and not node.arrow:
            return replace(node, arrow=True)
        return node

    root = sig.function
    if root is None:
        return sig.copy(type=map_type(sig.type, arrow))
    params = [replace(p, type=map_type(p.type, arrow)) for p in root.params]
    returns = map_type(root.returns, arrow) if root.returns is not None else None
    if sig.form == SignatureForm.PROPERTY:
        return sig.copy(type=replace(root, params=params, returns=returns, arrow=True))
    return sig.copy(type=replace(root, params=params, returns=returns))


def select_call_form(sig: Signature, ctx: TranslationContext) -> Signature:
    """
    Pick ``name(``, ``static name(`` or ``constructor(`` for function types.

    A constructor is chosen only when the caller allows it and the return type
    names the owner itself (or was never written down).
    """
    root = sig.function
    if root is None or sig.form is not None:
        return sig
    owner = ctx.owner or ctx.name
    returns_self = isinstance(root.returns, Atom) and root.returns.name == owner
    if ctx.may_be_constructor and (returns_self or sig.inferred_return):
        return sig.copy(form=SignatureForm.CONSTRUCTOR, is_static=False)
    return sig.copy(form=SignatureForm.METHOD, is_static=sig.is_static or ctx.is_static)


def drop_constructor_return(sig: Signature, ctx: TranslationContext) -> Signature:
    """Constructors carry no return type."""
    root = sig.function
    if sig.form == SignatureForm.CONSTRUCTOR and root is not None and root.returns is not None:
        return sig.copy(type=replace(root, returns=None))
    return sig


def normalize_keywords(sig: Signature, ctx: TranslationContext) -> Signature:
    """``bool`` → ``boolean``, ``?`` → ``any``, bare ``Promise`` → ``Promise<void>``."""
    def normalize(node: TypeExpression) -> TypeExpression:
        if isinstance(node, Atom):
            if node.name == "bool":
                return Atom("boolean")
            if node.name == "?":
                return Atom("any")
        if isinstance(node, PromiseType) and node.result is None:
            return PromiseType(Atom("void"))
        return node
    return sig.copy(type=map_type(sig.type, normalize))


def correct_string_returns(sig: Signature, ctx: TranslationContext) -> Signature:
    """Enumerated functions whose inferred ``void`` is really ``string``."""
    root = sig.function
    if root is None or not sig.inferred_return or sig.form != SignatureForm.METHOD:
        return sig
    qualified = f"{ctx.owner}.{ctx.name}" if ctx.owner else ctx.name
    if qualified in ctx.string_return_overrides:
        return sig.copy(type=replace(root, returns=Atom("string")))
    return sig


RULES: List[Tuple[str, Rule]] = [
    ("strip_instance_markers", strip_instance_markers),
    ("classify_property", classify_property),
    ("infer_void_return", infer_void_return),
    ("name_anonymous_parameters", name_anonymous_parameters),
    ("arrow_callbacks", arrow_callbacks),
    ("select_call_form", select_call_form),
    ("drop_constructor_return", drop_constructor_return),
    ("normalize_keywords", normalize_keywords),
    ("correct_string_returns", correct_string_returns),
]

"""
Kinetic-law formulas as sympy expression trees.

Rate laws arrive either as libsbml math trees (converted node by node in
``sbml_reporter.ingest.sbml``) or as infix strings in SBML Level 3
formula syntax (hand-written JSON models). Both end up as sympy
expressions, which each backend prints in its own formula syntax.

Name resolution is shared by both routes:
- built-in functions map to their sympy counterparts
- relational and logical functions (``gt``, ``and``, ...) map to sympy
  relations and boolean operators, ``piecewise`` to ``Piecewise``
- any other called name is a user-defined function, ``Function(name)``
- any other identifier is a plain ``Symbol``, even Python keywords
"""

from __future__ import annotations

import keyword
import re
from typing import Callable, Sequence

import sympy as sp

from sbml_reporter.exceptions import ModelReadError


# Function names of the L3 formula syntax and their sympy counterparts
FUNCTIONS: dict[str, Callable] = {
    "exp": sp.exp,
    "ln": sp.log,
    "log": sp.log,
    "log10": lambda x: sp.log(x, 10),
    "sqrt": sp.sqrt,
    "pow": sp.Pow,
    "power": sp.Pow,
    "root": lambda n, x: sp.root(x, n),
    "abs": sp.Abs,
    "floor": sp.floor,
    "ceil": sp.ceiling,
    "ceiling": sp.ceiling,
    "factorial": sp.factorial,
    "max": sp.Max,
    "min": sp.Min,
    "sin": sp.sin,
    "cos": sp.cos,
    "tan": sp.tan,
    "sec": sp.sec,
    "csc": sp.csc,
    "cot": sp.cot,
    "sinh": sp.sinh,
    "cosh": sp.cosh,
    "tanh": sp.tanh,
    "arcsin": sp.asin,
    "arccos": sp.acos,
    "arctan": sp.atan,
    "arcsinh": sp.asinh,
    "arccosh": sp.acosh,
    "arctanh": sp.atanh,
    "arcsec": sp.asec,
    "arccsc": sp.acsc,
    "arccot": sp.acot,
    "sech": sp.sech,
    "csch": sp.csch,
    "coth": sp.coth,
    "asin": sp.asin,
    "acos": sp.acos,
    "atan": sp.atan,
}

# n-ary comparisons: gt(a, b, c) means a > b > c
RELATIONS = {
    "eq": sp.Eq,
    "neq": sp.Ne,
    "gt": sp.StrictGreaterThan,
    "lt": sp.StrictLessThan,
    "geq": sp.GreaterThan,
    "leq": sp.LessThan,
}

LOGIC = {
    "and": sp.And,
    "or": sp.Or,
    "xor": sp.Xor,
    "not": sp.Not,
    "implies": sp.Implies,
}

CONSTANTS = {
    "pi": sp.pi,
    "exponentiale": sp.E,
    "infinity": sp.oo,
    "INF": sp.oo,
    "true": sp.true,
    "false": sp.false,
}

# Identifiers, but not the exponent of a number such as 1e-3
IDENTIFIER_PATTERN = re.compile(r"(?<![\w.])[A-Za-z_]\w*")
CALL_PATTERN = re.compile(r"(?<![\w.])([A-Za-z_]\w*)\s*\(")

# Prefix for identifiers Python would read as keywords
RENAMED_PREFIX = "__sbml_"


def piecewise(*args: sp.Basic) -> sp.Basic:
    """Build ``Piecewise`` from SBML's flat (value, condition, ..., otherwise) list."""
    pieces = [(args[i], args[i + 1]) for i in range(0, len(args) - 1, 2)]
    if len(args) % 2:
        pieces.append((args[-1], True))
    return sp.Piecewise(*pieces)


def _relation(relation: type, args: Sequence[sp.Basic]) -> sp.Basic:
    if len(args) == 2:
        return relation(*args)
    return sp.And(*(relation(a, b) for a, b in zip(args, args[1:])))


def call_function(name: str, args: Sequence[sp.Basic]) -> sp.Basic:
    """Apply the function called ``name`` in SBML math to ``args``."""
    if name in FUNCTIONS:
        return FUNCTIONS[name](*args)
    if name == "piecewise":
        return piecewise(*args)
    if name in RELATIONS:
        return _relation(RELATIONS[name], args)
    if name in LOGIC:
        return LOGIC[name](*args)
    return sp.Function(name)(*args)


def _safe_name(name: str) -> str:
    return RENAMED_PREFIX + name if keyword.iskeyword(name) else name


def parse_formula(text: str) -> sp.Expr:
    """Parse an infix rate-law formula into a sympy expression.

    Every identifier that is not a known function or constant becomes a
    plain Symbol, so SBML ids such as ``E``, ``I``, ``S`` or ``lambda``
    keep their meaning instead of turning into sympy built-ins. Called
    names follow ``call_function``.

    Args:
        text: Formula such as ``"kf * A * B - kr * C"``, ``"Vm * S^2"`` or
            ``"piecewise(k, gt(S, 0), 0)"``

    Returns:
        sympy expression tree

    Raises:
        ModelReadError: If the formula cannot be parsed
    """
    called = set(CALL_PATTERN.findall(text))
    namespace = {}
    for name in set(IDENTIFIER_PATTERN.findall(text)):
        if name in called:
            value = lambda *args, _name=name: call_function(_name, args)
        elif name in CONSTANTS:
            value = CONSTANTS[name]
        else:
            value = sp.Symbol(name)
        namespace[_safe_name(name)] = value

    source = IDENTIFIER_PATTERN.sub(lambda m: _safe_name(m.group(0)), text)
    try:
        return sp.sympify(source.replace("^", "**"), locals=namespace)
    except (sp.SympifyError, SyntaxError, TypeError, ValueError) as e:
        raise ModelReadError("kinetic law", [f"cannot parse formula '{text}': {e}"]) from e

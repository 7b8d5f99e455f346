"""Translation of npm/bower range expressions into the target constraint grammar.

The range is cleaned, split into a delimiter-preserving token stream, then
walked left to right by a small state machine. The state carries a pending
modifier (tilde, caret, leading ``=``, or a partial hyphen upper bound) and a
pending comparator (``<`` or ``>``) from the structural tokens to the next
version atom. Each token kind has its own transition function returning the
next state and the rewritten token.

Examples::

    ^1.2.3          -> >=1.2.3,<2.0.0
    1.2.3 - 2.3.4   -> >=1.2.3,<=2.3.4
    1.0.0 - 1.3.x   -> >=1.0.0,<1.4.0
    ~> 1.2.3        -> ~1.2.3,>1.2.3
    >=1.0 <1.1 || >=1.2 -> >=1.0,<1.1|>=1.2
"""

import re
from enum import StrEnum, unique
from typing import NamedTuple

from pydantic import BaseModel, ConfigDict

from assetver._utils.string_utils import WILDCARD_CHARS, has_wildcard, is_numeric, leading_int, replace_chars
from assetver.converter.caret import expand_caret_range
from assetver.converter.version import convert_version, replace_alias

HYPHEN_MARKER = " - "

_TOKEN_PATTERN = re.compile(r"( - |<|>|=|\|\||\ |,|~|\^)")
_VERSION_PREFIX_PATTERN = re.compile(r"[vV](\d+)")
_TIGHT_OPERATORS: tuple[str, ...] = ("<", ">", "=", "~", "^", "||", "&&")


@unique
class PendingModifier(StrEnum):
    TILDE = "~"
    CARET = "^"
    EQUAL_AT_START = "EQUAL"
    # The right side of a hyphen range is partial (``1.3.x``, ``2``) and must be bumped.
    PARTIAL_UPPER_BOUND = ",<~"


@unique
class PendingComparator(StrEnum):
    LT = "<"
    GT = ">"


@unique
class TokenKind(StrEnum):
    HYPHEN = "hyphen"
    STRUCTURAL = "structural"
    TILDE = "tilde"
    CONSUMED_MODIFIER = "consumed_modifier"
    AND = "and"
    OR = "or"
    ATOM = "atom"


class TranslationState(BaseModel):
    """Context threaded from structural tokens to the next version atom."""

    model_config = ConfigDict(frozen=True)

    pending_modifier: PendingModifier | None = None
    pending_comparator: PendingComparator | None = None

    @property
    def tilde_absorbs_comparator(self) -> bool:
        return self.pending_modifier == PendingModifier.TILDE and self.pending_comparator is not None


class TokenStep(NamedTuple):
    state: TranslationState
    token: str


class HyphenStep(NamedTuple):
    state: TranslationState
    lower_bound: str
    token: str


def convert_range(range_expr: str) -> str:
    """Convert an npm/bower range expression into the target constraint grammar.

    Unrecognized input passes through token by token; nothing is rejected here.

    Args:
        range_expr: The source range, e.g. ``^1.2.3`` or ``>= 1.0 < 2.0 || 3.x``.

    Returns:
        The translated constraint, with ``,`` for AND and ``|`` for OR.
    """
    tokens = tokenize_range(clean_range(range_expr.lower()))
    state = TranslationState()
    seen_first = False

    for index, token in enumerate(tokens):
        at_start = False
        if not seen_first and token != "":
            seen_first = True
            at_start = True

        match classify_token(token, at_start=at_start):
            case TokenKind.HYPHEN:
                next_token = tokens[index + 1] if index + 1 < len(tokens) else ""
                hyphen_step = on_hyphen(state, tokens[index - 1], next_token)
                tokens[index - 1] = hyphen_step.lower_bound
                state, tokens[index] = hyphen_step.state, hyphen_step.token
            case TokenKind.STRUCTURAL:
                state, tokens[index] = on_structural(state, token)
            case TokenKind.TILDE:
                state, tokens[index] = on_tilde(state, token)
            case TokenKind.CONSUMED_MODIFIER:
                state, tokens[index] = on_consumed_modifier(state, token, at_start=at_start)
            case TokenKind.AND:
                state, tokens[index] = TokenStep(state, ",")
            case TokenKind.OR:
                state, tokens[index] = TokenStep(state, "|")
            case TokenKind.ATOM:
                next_token = tokens[index + 1] if index + 1 < len(tokens) else None
                state, tokens[index] = on_atom(state, token, index=index, next_token=next_token)

    return "".join(tokens)


def clean_range(range_expr: str) -> str:
    """Bind operators to their atom, drop ``v`` prefixes and turn ``&&`` into ``,``."""
    for operator in _TIGHT_OPERATORS:
        range_expr = range_expr.replace(f"{operator} ", operator)

    range_expr = _VERSION_PREFIX_PATTERN.sub(r"\1", range_expr)
    range_expr = range_expr.replace(" ||", "||")
    return range_expr.replace(" &&", ",").replace("&&", ",")


def tokenize_range(range_expr: str) -> list[str]:
    """Split a cleaned range on its structural tokens, keeping them in the stream.

    Atoms and delimiters alternate; two adjacent delimiters are separated by an
    empty atom (``">=1"`` -> ``["", ">", "", "=", "1"]``).
    """
    return _TOKEN_PATTERN.split(range_expr)


def classify_token(token: str, at_start: bool = False) -> TokenKind:
    """Tell which transition handles a token. A leading ``=`` is a consumed modifier."""
    if token == HYPHEN_MARKER:
        return TokenKind.HYPHEN
    if token == "=" and at_start:
        return TokenKind.CONSUMED_MODIFIER
    if token in {"", "<", ">", "=", ","}:
        return TokenKind.STRUCTURAL
    if token == "~":
        return TokenKind.TILDE
    if token == "^":
        return TokenKind.CONSUMED_MODIFIER
    if token == " ":
        return TokenKind.AND
    if token == "||":
        return TokenKind.OR
    return TokenKind.ATOM


def on_hyphen(state: TranslationState, previous_atom: str, next_token: str) -> HyphenStep:
    """``A - B``: the left atom becomes ``>=A``; ``B`` is inclusive when fully specified."""
    lower_bound = ">=" + replace_chars(previous_atom, WILDCARD_CHARS, "0")
    if "." in next_token and not has_wildcard(next_token):
        return HyphenStep(state, lower_bound, ",<=")
    return HyphenStep(state.model_copy(update={"pending_modifier": PendingModifier.PARTIAL_UPPER_BOUND}), lower_bound, ",<")


def on_structural(state: TranslationState, token: str) -> TokenStep:
    """Empty atoms, comparators, ``=`` and ``,``. A tilde swallows the explicit comparator."""
    if token in {"<", ">"}:
        state = state.model_copy(update={"pending_comparator": PendingComparator(token)})
    if state.tilde_absorbs_comparator:
        return TokenStep(state, "")
    return TokenStep(state, token)


def on_tilde(state: TranslationState, token: str) -> TokenStep:
    return TokenStep(state.model_copy(update={"pending_modifier": PendingModifier.TILDE}), token)


def on_consumed_modifier(state: TranslationState, token: str, at_start: bool = False) -> TokenStep:
    """``^`` and a leading ``=`` only set the modifier; they are not emitted."""
    modifier = PendingModifier.EQUAL_AT_START if token == "=" and at_start else PendingModifier.CARET
    return TokenStep(state.model_copy(update={"pending_modifier": modifier}), "")


def on_atom(state: TranslationState, atom: str, index: int, next_token: str | None) -> TokenStep:
    """Rewrite a version atom according to the pending modifier and comparator."""
    if state.pending_modifier == PendingModifier.CARET:
        return TokenStep(state.model_copy(update={"pending_modifier": None}), expand_caret_range(atom))

    if state.pending_modifier == PendingModifier.PARTIAL_UPPER_BOUND:
        atom = bump_partial_upper_bound(atom)
    elif state.pending_modifier is None and index == 0 and "." not in atom and is_numeric(atom):
        # A lone major number at the start of a range means ~N, unless it opens a hyphen range.
        if next_token not in {HYPHEN_MARKER, "-"}:
            atom = f"~{atom}"
    elif state.pending_modifier == PendingModifier.TILDE:
        atom = replace_chars(atom, WILDCARD_CHARS, "0")

    return finalize_atom(state, atom)


def bump_partial_upper_bound(atom: str) -> str:
    """Exclusive upper bound of a partial hyphen right side: ``1.3.x`` -> ``1.4.0``, ``2`` -> ``3.0``."""
    if "." not in atom:
        atom += ".x"
    components = atom.split(".")
    change = len(components) - 2
    components[change] = str(leading_int(components[change]) + 1)
    return replace_chars(".".join(components), WILDCARD_CHARS, "0")


def finalize_atom(state: TranslationState, atom: str) -> TokenStep:
    """Normalize the atom, resolve wildcards against the pending comparator and reset the state."""
    converted = convert_version(atom)
    comparator = state.pending_comparator
    if comparator is not None:
        converted = replace_alias(converted, comparator)
        if state.pending_modifier == PendingModifier.TILDE:
            converted += f",{comparator}{converted}"
    return TokenStep(TranslationState(), converted)

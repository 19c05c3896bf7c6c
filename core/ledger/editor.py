"""
Journal line editor

Reducer backing the interactive "line editor" of the journal entry form.

State is an immutable ordered tuple of lines. Transitions:
- AppendLine: add a blank line (no validation)
- RemoveLine(index): refused when it would leave fewer than 2 lines
- SetLineField(index, field, value): edit account/description/debit/credit

Every transition recomputes the live balance status so the caller can show
it before submit. The status is informational only; `JournalEntryValidator`
stays the single authority for persistence.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal
from typing import Any, Union

from core.ledger.models import JournalEntry, JournalLine
from core.ledger.types import BALANCE_TOLERANCE, MIN_JOURNAL_LINES, ErrorKind
from core.ledger.validator import ValidationFailure
from core.utils.money import ZERO, round_money, to_decimal

EDITABLE_FIELDS = ("account", "description", "debit", "credit")


class LineEditorError(Exception):
    """Invalid editor transition (bad index or unknown field)"""

    pass


@dataclass(frozen=True)
class BalanceStatus:
    """Live totals of the lines being edited"""

    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool

    @property
    def difference(self) -> Decimal:
        """Signed debit - credit difference"""
        return self.total_debit - self.total_credit


@dataclass(frozen=True)
class EditorState:
    """Line editor state

    Attributes:
        lines: ordered lines being edited
        status: totals recomputed after the last transition
        failure: why the last transition was refused (None if it applied)
    """

    lines: tuple[JournalLine, ...]
    status: BalanceStatus
    failure: ValidationFailure | None = None


# -------------------------------------------------------------------------
# Actions
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class AppendLine:
    pass


@dataclass(frozen=True)
class RemoveLine:
    index: int


@dataclass(frozen=True)
class SetLineField:
    index: int
    field: str
    value: Any


EditorAction = Union[AppendLine, RemoveLine, SetLineField]


# -------------------------------------------------------------------------
# Transitions
# -------------------------------------------------------------------------

def compute_balance_status(
    lines: tuple[JournalLine, ...],
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> BalanceStatus:
    """Totals and balanced flag for a set of lines"""
    total_debit = sum((line.debit for line in lines), ZERO)
    total_credit = sum((line.credit for line in lines), ZERO)
    is_balanced = abs(round_money(total_debit) - round_money(total_credit)) <= tolerance
    return BalanceStatus(
        total_debit=total_debit,
        total_credit=total_credit,
        is_balanced=is_balanced,
    )


def _with_lines(lines: tuple[JournalLine, ...], tolerance: Decimal) -> EditorState:
    return EditorState(lines=lines, status=compute_balance_status(lines, tolerance))


def initial_state(
    line_count: int = MIN_JOURNAL_LINES,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> EditorState:
    """Blank form state (two empty lines by default)"""
    lines = tuple(JournalLine(account_id=None) for _ in range(line_count))
    return _with_lines(lines, tolerance)


def state_from_entry(
    entry: JournalEntry,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> EditorState:
    """Editor state for an existing entry (edit mode)"""
    return _with_lines(tuple(entry.lines), tolerance)


def append_line(
    state: EditorState,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> EditorState:
    """Add a blank line at the end"""
    return _with_lines(state.lines + (JournalLine(account_id=None),), tolerance)


def remove_line(
    state: EditorState,
    index: int,
    min_lines: int = MIN_JOURNAL_LINES,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> EditorState:
    """Remove the line at `index`

    When removal would leave fewer than `min_lines` lines the lines are kept
    as they are and the returned state carries a TooFewLines failure.

    Raises:
        LineEditorError: index out of range
    """
    _check_index(state, index)

    if len(state.lines) <= min_lines:
        return replace(
            _with_lines(state.lines, tolerance),
            failure=ValidationFailure(
                kind=ErrorKind.TOO_FEW_LINES,
                message=f"A journal entry must have at least {min_lines} lines",
                line_index=index,
            ),
        )

    lines = state.lines[:index] + state.lines[index + 1:]
    return _with_lines(lines, tolerance)


def set_line_field(
    state: EditorState,
    index: int,
    field: str,
    value: Any,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> EditorState:
    """Change one field of one line

    Blank amounts count as 0. A non-numeric amount leaves the lines
    unchanged and returns an InvalidAmount failure.

    Raises:
        LineEditorError: index out of range or unknown field
    """
    _check_index(state, index)
    if field not in EDITABLE_FIELDS:
        raise LineEditorError(f"Unknown line field: {field}")

    line = state.lines[index]

    if field == "account":
        updated = replace(line, account_id=str(value) if value else None)
    elif field == "description":
        updated = replace(line, description=str(value or ""))
    else:
        try:
            amount = to_decimal(value)
        except ValueError as e:
            return replace(
                _with_lines(state.lines, tolerance),
                failure=ValidationFailure(
                    kind=ErrorKind.INVALID_AMOUNT,
                    message=f"Line {index + 1}: {e}",
                    field=field,
                    line_index=index,
                ),
            )
        updated = replace(line, **{field: amount})

    lines = state.lines[:index] + (updated,) + state.lines[index + 1:]
    return _with_lines(lines, tolerance)


def reduce(
    state: EditorState,
    action: EditorAction,
    min_lines: int = MIN_JOURNAL_LINES,
    tolerance: Decimal = BALANCE_TOLERANCE,
) -> EditorState:
    """Apply one action to the editor state

    Raises:
        LineEditorError: unsupported action or invalid transition
    """
    if isinstance(action, AppendLine):
        return append_line(state, tolerance)
    if isinstance(action, RemoveLine):
        return remove_line(state, action.index, min_lines, tolerance)
    if isinstance(action, SetLineField):
        return set_line_field(state, action.index, action.field, action.value, tolerance)
    raise LineEditorError(f"Unsupported editor action: {action!r}")


def to_candidate(
    state: EditorState,
    entry_date: date | None,
    description: str,
    reference: str = "",
    entry_id: str | None = None,
) -> JournalEntry:
    """Build the candidate entry handed to the validator"""
    return JournalEntry(
        entry_date=entry_date,
        description=description,
        lines=state.lines,
        reference=reference,
        id=entry_id,
    )


def _check_index(state: EditorState, index: int) -> None:
    if not 0 <= index < len(state.lines):
        raise LineEditorError(
            f"Line index {index} out of range (0..{len(state.lines) - 1})"
        )

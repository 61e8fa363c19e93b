"""
================================================================================
Flow Outcomes
================================================================================

Explicit result types for multi-step UI flows.

Instead of "catch and log" on best-effort steps, each step reports what
actually happened so tests can tell a flow that worked apart from one where
every fallback silently did nothing:

    - SelectionOutcome: matched / fallback used / no match
    - NavigationOutcome: navigated / settled after timeout / failed / skipped
    - FlowState: per-invocation state trace of the address flow

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class SuggestionNotMatchedError(Exception):
    """Raised in strict mode when no suggestion could be selected."""
    pass


class OutcomeMissingError(Exception):
    """Raised when no outcome text is found after a selection."""
    pass


class SelectionOutcome(str, Enum):
    """Result of trying to pick an autocomplete suggestion."""
    MATCHED = "matched"
    FALLBACK_USED = "fallback_used"
    NO_MATCH = "no_match"


class NavigationOutcome(str, Enum):
    """Result of waiting for navigation after a click."""
    NAVIGATED = "navigated"
    # Navigation wait timed out, page treated as already settled
    SETTLED = "settled"
    # Navigation started by the click failed (e.g. net::ERR_ABORTED)
    FAILED = "failed"
    # Nothing was clicked, so nothing to wait for
    SKIPPED = "skipped"


class FlowState(str, Enum):
    """States of a single address selection invocation."""
    IDLE = "idle"
    SEARCHING = "searching"
    AWAITING_SUGGESTIONS = "awaiting_suggestions"
    MATCHED = "matched"
    UNMATCHED = "unmatched"
    AWAITING_OUTCOME = "awaiting_outcome"
    RESOLVED = "resolved"
    EMPTY = "empty"
    ELEMENT_NOT_FOUND = "element_not_found"


TERMINAL_STATES = frozenset({
    FlowState.RESOLVED,
    FlowState.EMPTY,
    FlowState.UNMATCHED,
    FlowState.ELEMENT_NOT_FOUND,
})


@dataclass
class AddressSelectionResult:
    """
    What happened during one address selection.

    Attributes:
        address: Address text that was typed
        selection: Suggestion matching outcome
        navigation: Navigation outcome after the click
        suggestions_visible: Whether the suggestion surface rendered in time
        suggestion_text: Text of the clicked suggestion row (if any)
        outcome_text: Normalised outcome message (set once read)
        states: Ordered state transitions, starting at IDLE
    """
    address: str
    selection: SelectionOutcome = SelectionOutcome.NO_MATCH
    navigation: NavigationOutcome = NavigationOutcome.SKIPPED
    suggestions_visible: bool = False
    suggestion_text: Optional[str] = None
    outcome_text: Optional[str] = None
    states: List[FlowState] = field(default_factory=lambda: [FlowState.IDLE])

    @property
    def state(self) -> FlowState:
        """Current (last recorded) state."""
        return self.states[-1]

    @property
    def succeeded(self) -> bool:
        """True when a suggestion was clicked (exact or fallback)."""
        return self.selection in (SelectionOutcome.MATCHED, SelectionOutcome.FALLBACK_USED)

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES


__all__ = [
    "SuggestionNotMatchedError",
    "OutcomeMissingError",
    "SelectionOutcome",
    "NavigationOutcome",
    "FlowState",
    "TERMINAL_STATES",
    "AddressSelectionResult",
]

"""
SPLPv1 session - per-connection validator state.

Each Session owns its own phase and pending request, so independent
connections can be validated side by side with one Session each. The
transition logic itself is the pure step() function; Session applies its
result, keeps a bounded history and exact coverage counters.

Usage Example:
-------------
    session = Session()
    session.validate(Message(direction=Direction.A_TO_B, text="CONNECT"))
    session.validate(Message(direction=Direction.B_TO_A, text="CONNECT_OK"))
    assert session.phase is Phase.CONNECTED
"""
from __future__ import annotations

from collections import Counter, deque
from datetime import datetime
from typing import Any, Deque, Dict, Optional

import structlog

from splp.config import settings
from splp.engine.state_machine import INITIAL_PHASE, step
from splp.models import GrammarOptions, Message, PendingCommand, Phase, Verdict
from splp.plugins.splpv1 import state_model

logger = structlog.get_logger()


class Session:
    """
    Validates one side's view of an SPLPv1 session.

    Args:
        options: Grammar compatibility switches (defaults come from settings)
        history_size: Max transition records kept (defaults come from settings)
    """

    def __init__(
        self,
        options: Optional[GrammarOptions] = None,
        history_size: Optional[int] = None,
    ):
        self.options = options or GrammarOptions.from_settings(settings)
        self.state_model = state_model

        self._phase: Phase = INITIAL_PHASE
        self._pending: Optional[PendingCommand] = None

        self.history: Deque[Dict[str, Any]] = deque(
            maxlen=history_size if history_size is not None else settings.history_size
        )
        # Exact coverage counts; history above is trimmed to history_size
        self._states_entered: Counter = Counter()
        self._edges_taken: Counter = Counter()
        self.validations = 0
        self.violations = 0

        logger.debug(
            "session_created",
            initial_state=self._phase.value,
            options=self.options.model_dump(),
        )

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def pending_command(self) -> Optional[PendingCommand]:
        return self._pending

    def validate(self, message: Message) -> Verdict:
        """
        Validate one message and advance (or reset) the session.

        Args:
            message: Message in transport order

        Returns:
            Verdict.VALID or Verdict.INVALID
        """
        old_phase = self._phase
        result = step(old_phase, self._pending, message, self.options)

        self._phase = result.phase
        self._pending = result.pending
        self.validations += 1

        record = {
            "from": old_phase.value,
            "to": result.phase.value,
            "direction": message.direction.value,
            "message_type": result.message_type,
            "success": result.is_valid,
            "reason": result.reason,
            "timestamp": datetime.utcnow().isoformat(),
        }
        self.history.append(record)

        if result.is_valid:
            self._states_entered[result.phase.value] += 1
            self._edges_taken[f"{old_phase.value}->{result.phase.value}"] += 1
            logger.debug(
                "state_transition",
                from_state=old_phase.value,
                to_state=result.phase.value,
                message_type=result.message_type,
            )
        else:
            self.violations += 1
            logger.info(
                "protocol_violation",
                phase=old_phase.value,
                direction=message.direction.value,
                reason=result.reason,
                details=result.violation.details if result.violation else None,
            )

        return result.verdict

    def reset(self) -> None:
        """Drop all session progress and return to the initial phase."""
        old_phase = self._phase
        self._phase = INITIAL_PHASE
        self._pending = None
        logger.info("session_reset", from_state=old_phase.value, to_state=self._phase.value)

    def get_state_coverage(self) -> Dict[str, int]:
        """
        Which states have been entered and how often.

        Returns:
            Dict mapping state name to visit count, current state included
        """
        visits = Counter(self._states_entered)
        visits[self._phase.value] += 1

        for state in self.state_model.get("states", []):
            visits.setdefault(state, 0)

        return dict(visits)

    def get_transition_coverage(self) -> Dict[str, int]:
        """
        Which transitions have been taken.

        Returns:
            Dict mapping "FROM->TO" to count
        """
        return dict(self._edges_taken)

    def get_coverage_stats(self) -> Dict[str, Any]:
        state_coverage = self.get_state_coverage()
        transition_coverage = self.get_transition_coverage()

        total_states = len(self.state_model.get("states", []))
        visited_states = sum(1 for count in state_coverage.values() if count > 0)

        # Several requests share CONNECTED->WAITING_DATA, so count distinct edges
        total_transitions = len({
            (t["from"], t["to"]) for t in self.state_model.get("transitions", [])
        })
        taken_transitions = len(transition_coverage)

        return {
            "current_state": self._phase.value,
            "pending_command": self._pending.value if self._pending else None,
            "state_coverage": state_coverage,
            "transition_coverage": transition_coverage,
            "states_visited": visited_states,
            "states_total": total_states,
            "state_coverage_pct": (visited_states / total_states * 100) if total_states > 0 else 0,
            "transitions_taken": taken_transitions,
            "transitions_total": total_transitions,
            "transition_coverage_pct": (taken_transitions / total_transitions * 100) if total_transitions > 0 else 0,
            "validations": self.validations,
            "violations": self.violations,
        }

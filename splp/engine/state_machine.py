"""
SPLPv1 state machine - pure transition function.

step() maps (phase, pending command, message) to the next phase, the next
pending command and a verdict. It never raises for a well-formed Message:
every grammar or direction failure becomes an INVALID verdict with the
phase forced back to INIT and the pending command cleared.

The transition table lives in splp.plugins.splpv1.state_model and is
indexed by phase once at import.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from splp.engine.grammar import check_b64_reply, check_data_reply, check_version_reply
from splp.exceptions import ProtocolViolation
from splp.models import Direction, GrammarOptions, Message, PendingCommand, Phase, Verdict
from splp.plugins.splpv1 import state_model


@dataclass(frozen=True)
class StepResult:
    """Outcome of feeding one message to the state machine"""

    phase: Phase
    pending: Optional[PendingCommand]
    verdict: Verdict
    reason: Optional[str] = None
    message_type: Optional[str] = None
    violation: Optional[ProtocolViolation] = None

    @property
    def is_valid(self) -> bool:
        return self.verdict is Verdict.VALID


def _index_transitions(model: dict) -> Dict[Phase, List[dict]]:
    index: Dict[Phase, List[dict]] = {phase: [] for phase in Phase}
    for transition in model.get("transitions", []):
        index[Phase(transition["from"])].append(transition)
    return index


TRANSITIONS_BY_PHASE = _index_transitions(state_model)
INITIAL_PHASE = Phase(state_model.get("initial_state", "INIT"))


def _check_direction(
    phase: Phase,
    transitions: List[dict],
    message: Message,
    options: GrammarOptions,
) -> None:
    if phase is Phase.WAITING_VERSION and options.lenient_version_direction:
        return
    expected = {Direction(t["direction"]) for t in transitions}
    if message.direction not in expected:
        raise ProtocolViolation(
            f"{message.direction.value} not allowed in {phase.value}", phase.value
        )


def _matches(
    transition: dict,
    message: Message,
    pending: Optional[PendingCommand],
    options: GrammarOptions,
) -> bool:
    """
    Check the message text against one transition.

    Literal transitions return False on mismatch so the next candidate can
    be tried; grammar transitions raise ProtocolViolation with the reason.
    """
    grammar = transition.get("grammar")
    if grammar is None:
        return message.text == transition["message_type"]

    if grammar == "version":
        check_version_reply(message.text, allow_empty=options.allow_empty_version)
    elif grammar == "data":
        if pending is None:
            raise ProtocolViolation("no pending request to answer")
        check_data_reply(
            message.text, pending.value, legacy_alphabet=options.legacy_data_alphabet
        )
    elif grammar == "base64":
        check_b64_reply(message.text)
    else:
        raise ProtocolViolation(f"unknown grammar {grammar!r}")
    return True


def _advance(
    phase: Phase,
    pending: Optional[PendingCommand],
    message: Message,
    options: GrammarOptions,
) -> StepResult:
    transitions = TRANSITIONS_BY_PHASE.get(phase, [])
    if not transitions:
        raise ProtocolViolation(f"no transitions defined for {phase.value}")

    _check_direction(phase, transitions, message, options)

    for transition in transitions:
        if not _matches(transition, message, pending, options):
            continue
        next_phase = Phase(transition["to"])
        next_pending = None
        if transition.get("pending"):
            next_pending = PendingCommand(transition["message_type"])
        return StepResult(
            phase=next_phase,
            pending=next_pending,
            verdict=Verdict.VALID,
            message_type=transition["message_type"],
        )

    raise ProtocolViolation(f"unexpected message in {phase.value}", phase.value)


def step(
    phase: Phase,
    pending: Optional[PendingCommand],
    message: Message,
    options: Optional[GrammarOptions] = None,
) -> StepResult:
    """
    Validate one message against the current phase.

    Args:
        phase: Current session phase
        pending: Request awaiting its data reply (only meaningful in WAITING_DATA)
        message: Message to validate
        options: Grammar compatibility switches (strict when None)

    Returns:
        StepResult with the next phase, pending command and verdict
    """
    options = options or GrammarOptions()
    try:
        return _advance(phase, pending, message, options)
    except ProtocolViolation as exc:
        # Grammar scanners do not know the phase they run in
        if exc.phase is None:
            exc.phase = phase.value
            exc.details["phase"] = phase.value
        return StepResult(
            phase=INITIAL_PHASE,
            pending=None,
            verdict=Verdict.INVALID,
            reason=exc.reason,
            violation=exc,
        )

"""
Resolves inbound webhook bodies into an explicit action request.

Two body shapes are accepted:

* strict: ``{"action": "...", "data": {...}}``; the action must be present and known.
* heuristic: ``{"args": {...}}`` or the fields themselves. The action is taken
  from the first matching rule in ``INFERENCE_RULES``; when nothing matches the
  request carries no action and the caller acknowledges it.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple
import enum


class Action(str, enum.Enum):
    """Supported webhook actions."""
    CREATE_JOB = "createJobDetails"
    GET_JOB = "getJob"
    RESCHEDULE = "reschedule"
    CANCELLATION = "cancellation"
    LOG_EMERGENCY = "logEmergency"
    COLLECT_INQUIRY = "collectInquiryDetails"


# Tool names configured on the voice-agent platform
ACTION_ALIASES = {
    "Reschedule_caller_information": Action.RESCHEDULE,
    "Cancellation_caller_Information": Action.CANCELLATION,
}


class ActionError(ValueError):
    """Raised when a strict request does not name a usable action."""


class MissingActionError(ActionError):
    def __init__(self):
        super().__init__("Action is required")


class UnknownActionError(ActionError):
    def __init__(self, action: str):
        self.action = action
        super().__init__(f"Unknown action: {action}")


@dataclass(frozen=True)
class ActionRequest:
    """An inbound request after resolution. ``rule`` names what decided the action."""
    action: Optional[Action]
    data: Dict[str, Any] = field(default_factory=dict)
    rule: str = "explicit"


def parse_action(name: Any) -> Optional[Action]:
    """Map an action identifier or alias to an Action, None if unrecognized."""
    if not isinstance(name, str):
        return None
    if name in ACTION_ALIASES:
        return ACTION_ALIASES[name]
    try:
        return Action(name)
    except ValueError:
        return None


def _present(*fields: str) -> Callable[[Mapping[str, Any]], bool]:
    return lambda data: all(data.get(f) for f in fields)


# Ordered: the first predicate that holds decides the action
INFERENCE_RULES: List[Tuple[str, Callable[[Mapping[str, Any]], bool], Action]] = [
    ("emergency_details", _present("emergency_details"), Action.LOG_EMERGENCY),
    ("inquiry_details", _present("inquiry_details"), Action.COLLECT_INQUIRY),
    ("name_and_service_type", _present("name", "service_type"), Action.CREATE_JOB),
]


def resolve_strict(body: Any) -> ActionRequest:
    """Resolve a ``{action, data}`` body, raising ActionError when the action is unusable."""
    body = body if isinstance(body, dict) else {}
    name = body.get("action")
    if not name:
        raise MissingActionError()

    action = parse_action(name)
    if action is None:
        raise UnknownActionError(str(name))

    data = body.get("data")
    return ActionRequest(action=action, data=data if isinstance(data, dict) else {})


def resolve_heuristic(body: Any, query_action: Optional[str] = None) -> ActionRequest:
    """Resolve a loosely shaped body; never raises."""
    body = body if isinstance(body, dict) else {}
    args = body.get("args")
    data = args if isinstance(args, dict) else body

    for candidate in (data.get("action"), body.get("action"), query_action):
        action = parse_action(candidate)
        if action is not None:
            return ActionRequest(action=action, data=data, rule="explicit")

    for rule, matches, action in INFERENCE_RULES:
        if matches(data):
            return ActionRequest(action=action, data=data, rule=rule)

    return ActionRequest(action=None, data=data, rule="unmatched")

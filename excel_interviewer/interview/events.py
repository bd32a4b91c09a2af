"""
Session lifecycle callbacks.

Hooks for callers that want to react to interview progress:
- on_question_passed(session_id, question_id)
- on_follow_up_needed(session_id, question_id, follow_ups)
- on_remedial_needed(session_id, question_id, follow_ups)
- on_session_completed(session_id)
"""
from dataclasses import dataclass, replace
from typing import Callable, List, Optional

from ..utils.logger import setup_logger

logger = setup_logger("session_events")

# Follow-up prompts handed to the follow-up/remedial callbacks
MAX_CALLBACK_FOLLOW_UPS = 2


@dataclass(frozen=True)
class SessionEventCallbacks:
    on_question_passed: Optional[Callable[[str, str], None]] = None
    on_follow_up_needed: Optional[Callable[[str, str, List[str]], None]] = None
    on_remedial_needed: Optional[Callable[[str, str, List[str]], None]] = None
    on_session_completed: Optional[Callable[[str], None]] = None

    def merged(self, **callbacks) -> "SessionEventCallbacks":
        """Return a copy with the given callbacks replaced; None values are ignored."""
        return replace(self, **{k: v for k, v in callbacks.items() if v is not None})

    def fire(self, event: str, *args) -> None:
        """
        Invoke the callback registered for `event`, if any.

        A failing callback is logged and does not interrupt the interview.
        """
        callback = getattr(self, event)
        logger.info(f"Session event {event}: {args[0] if args else ''}")
        if callback is None:
            return
        try:
            callback(*args)
        except Exception as e:
            logger.error(f"Error in {event} callback: {e}")

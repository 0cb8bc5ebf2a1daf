"""Assistant gateway factory.

Provides get_assistant() / set_assistant() to swap implementations:
- FakeAssistant for development and testing (default)
- DirectLineAssistant for a hosted bot, selected with ASSISTANT_ADAPTER=direct_line
"""

import os

from storefront.assistant.port import AssistantGateway

_current_assistant: AssistantGateway | None = None


def get_assistant() -> AssistantGateway:
    """Return the configured assistant adapter (singleton)."""
    global _current_assistant
    if _current_assistant is None:
        adapter = os.environ.get("ASSISTANT_ADAPTER", "fake")
        if adapter == "fake":
            from storefront.assistant.fake_adapter import FakeAssistant

            _current_assistant = FakeAssistant()
        elif adapter == "direct_line":
            from storefront.assistant.direct_line_adapter import DirectLineAssistant

            _current_assistant = DirectLineAssistant()
        else:
            raise ValueError(f"Unknown assistant adapter: {adapter}")
    return _current_assistant


def set_assistant(assistant: AssistantGateway) -> None:
    """Override the active assistant adapter (useful for tests)."""
    global _current_assistant
    _current_assistant = assistant


def reset_assistant() -> None:
    """Reset the assistant singleton."""
    global _current_assistant
    _current_assistant = None

"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state — no cross-user sharing.
State tracks ids returned by creation endpoints so follow-up operations can
reference them.
"""

from dataclasses import dataclass, field


@dataclass
class OrderState:
    """Tracks state for a single simulated order lifecycle."""

    order_id: str | None = None
    email: str | None = None
    current_status: str = "pending"
    tracking_number: str | None = None
    discount_codes: list[str] = field(default_factory=list)


@dataclass
class ChatState:
    """Tracks state for a single assistant conversation."""

    conversation_id: str | None = None
    token: str | None = None
    watermark: str | None = None
    messages_sent: int = 0

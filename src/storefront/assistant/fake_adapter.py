"""Fake assistant adapter — in-memory echo bot for development and testing.

Every user message gets an immediate bot reply echoing the text. Failure can
be switched on to exercise the unavailable-bot paths.
"""

from datetime import UTC, datetime
from uuid import uuid4

from storefront.assistant.port import DEFAULT_USER_ID, AssistantGateway, AssistantUnavailable

BOT_ID = "contoso-assistant"
TOKEN_TTL_SECONDS = 1800


class FakeAssistant(AssistantGateway):
    """Echo bot that keeps conversations in memory."""

    def __init__(self):
        self.should_succeed = True
        self.failure_reason = "Assistant unavailable"
        self._conversations: dict[str, dict] = {}

    def configure(self, should_succeed: bool = True, failure_reason: str = "Assistant unavailable"):
        """Configure the fake assistant behavior for testing."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def _check_available(self):
        if not self.should_succeed:
            raise AssistantUnavailable(self.failure_reason, status_code=503)

    def _conversation(self, conversation_id: str, token: str) -> dict:
        conversation = self._conversations.get(conversation_id)
        if conversation is None or conversation["token"] != token:
            raise AssistantUnavailable(f"Unknown conversation {conversation_id}", status_code=403)
        return conversation

    def _open(self) -> dict:
        conversation_id = f"conv-{uuid4().hex[:12]}"
        token = f"token-{uuid4().hex}"
        self._conversations[conversation_id] = {"token": token, "activities": []}
        return {"conversation_id": conversation_id, "token": token, "expires_in": TOKEN_TTL_SECONDS}

    def start_conversation(self) -> dict:
        self._check_available()
        return self._open()

    def send_message(self, conversation_id: str, token: str, text: str, user_id: str = DEFAULT_USER_ID) -> str:
        self._check_available()
        activities = self._conversation(conversation_id, token)["activities"]

        def _append(sender: dict, body: str) -> str:
            activity_id = f"{conversation_id}|{len(activities):07d}"
            activities.append(
                {
                    "type": "message",
                    "id": activity_id,
                    "from": sender,
                    "text": body,
                    "timestamp": datetime.now(UTC).isoformat(),
                }
            )
            return activity_id

        activity_id = _append({"id": user_id}, text)
        _append({"id": BOT_ID, "name": "Contoso Assistant"}, f"You said: {text}")
        return activity_id

    def poll_activities(self, conversation_id: str, token: str, watermark: str | None = None) -> dict:
        self._check_available()
        activities = self._conversation(conversation_id, token)["activities"]
        start = int(watermark) if watermark else 0
        return {"activities": activities[start:], "watermark": str(len(activities))}

    def generate_token(self) -> dict:
        self._check_available()
        return self._open()

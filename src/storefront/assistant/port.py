"""Assistant port — abstract interface to the conversational bot service.

The storefront relays chat traffic between the shopper and a hosted bot. The
bot is opaque: it is reached through conversations, activities and tokens,
and its failures surface as AssistantUnavailable.
"""

from abc import ABC, abstractmethod

DEFAULT_USER_ID = "contoso-user"


class AssistantUnavailable(Exception):
    """The bot service could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AssistantGateway(ABC):
    """Abstract interface for bot service adapters."""

    @abstractmethod
    def start_conversation(self) -> dict:
        """Open a new conversation.

        Returns:
            dict with keys: conversation_id, token, expires_in
        """
        ...

    @abstractmethod
    def send_message(self, conversation_id: str, token: str, text: str, user_id: str = DEFAULT_USER_ID) -> str:
        """Post a user message into a conversation.

        Returns:
            the id of the created activity
        """
        ...

    @abstractmethod
    def poll_activities(self, conversation_id: str, token: str, watermark: str | None = None) -> dict:
        """Fetch activities posted after `watermark`.

        Returns:
            dict with keys: activities (list), watermark
        """
        ...

    @abstractmethod
    def generate_token(self) -> dict:
        """Mint a short-lived token for a client-side connection.

        Returns:
            dict with keys: conversation_id, token, expires_in
        """
        ...

"""Direct Line adapter — Bot Framework Direct Line v3 over HTTP.

Conversations are opened with the Direct Line secret; subsequent calls use the
per-conversation token. When a Copilot Studio token endpoint is configured,
tokens are minted there instead of through Direct Line.
"""

import os

import httpx

from storefront.assistant.port import DEFAULT_USER_ID, AssistantGateway, AssistantUnavailable
from storefront.domain import logger

DEFAULT_BASE_URL = "https://directline.botframework.com"


class DirectLineAssistant(AssistantGateway):
    def __init__(
        self,
        base_url: str | None = None,
        secret: str | None = None,
        token_endpoint: str | None = None,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or os.environ.get("DIRECT_LINE_BASE_URL") or DEFAULT_BASE_URL).rstrip("/")
        self.secret = secret if secret is not None else os.environ.get("DIRECT_LINE_SECRET", "")
        self.token_endpoint = (
            token_endpoint if token_endpoint is not None else os.environ.get("COPILOT_TOKEN_ENDPOINT", "")
        )
        self._client = httpx.Client(timeout=timeout, transport=transport)

    def close(self) -> None:
        self._client.close()

    def _request(self, method: str, url: str, action: str, token: str | None = None, **kwargs) -> httpx.Response:
        headers = {"Content-Type": "application/json"}
        bearer = token or self.secret
        if bearer:
            headers["Authorization"] = f"Bearer {bearer}"
        try:
            resp = self._client.request(method, url, headers=headers, **kwargs)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("Direct Line request failed", action=action, status_code=exc.response.status_code)
            raise AssistantUnavailable(
                f"Failed to {action}: {exc.response.status_code}", status_code=exc.response.status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("Direct Line unreachable", action=action, error=str(exc))
            raise AssistantUnavailable(f"Failed to {action}: {exc}") from exc
        return resp

    def _directline(self, path: str) -> str:
        return f"{self.base_url}/v3/directline{path}"

    @staticmethod
    def _conversation(data: dict) -> dict:
        return {
            "conversation_id": data.get("conversationId"),
            "token": data.get("token"),
            "expires_in": data.get("expires_in"),
        }

    def start_conversation(self) -> dict:
        resp = self._request("POST", self._directline("/conversations"), "start conversation")
        return self._conversation(resp.json())

    def send_message(self, conversation_id: str, token: str, text: str, user_id: str = DEFAULT_USER_ID) -> str:
        resp = self._request(
            "POST",
            self._directline(f"/conversations/{conversation_id}/activities"),
            "send message",
            token=token,
            json={"type": "message", "from": {"id": user_id}, "text": text},
        )
        return resp.json().get("id")

    def poll_activities(self, conversation_id: str, token: str, watermark: str | None = None) -> dict:
        params = {"watermark": watermark} if watermark else None
        resp = self._request(
            "GET",
            self._directline(f"/conversations/{conversation_id}/activities"),
            "get activities",
            token=token,
            params=params,
        )
        data = resp.json()
        return {"activities": data.get("activities", []), "watermark": data.get("watermark")}

    def generate_token(self) -> dict:
        if self.token_endpoint:
            try:
                resp = self._client.get(self.token_endpoint)
                resp.raise_for_status()
            except httpx.HTTPError as exc:
                logger.error("Copilot Studio token request failed", error=str(exc))
                raise AssistantUnavailable(f"Failed to get Copilot Studio token: {exc}") from exc
            return self._conversation(resp.json())

        resp = self._request("POST", self._directline("/tokens/generate"), "generate token")
        return self._conversation(resp.json())

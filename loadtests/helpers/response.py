"""Turn storefront API error bodies into one-line Locust failure messages.

Shapes produced by the storefront:

- 422 request validation: {"detail": [{"loc": [...], "msg": "..."}]}
- 400/404 domain errors: {"error": "..."} or {"error": {"field": ["..."]}}
- 409 stock shortfall on checkout: {"error": "...", "sku", "available", "requested"}
- 404/409 replacement: {"success": false, "error": "..."}
- 502 assistant relay: {"error": "..."}
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from requests import Response

_MAX_DETAIL = 300


def _field_errors(errors: dict) -> str:
    parts = []
    for field, msgs in errors.items():
        text = "; ".join(map(str, msgs)) if isinstance(msgs, list) else str(msgs)
        parts.append(f"{field}: {text}")
    return " | ".join(parts)


def extract_error_detail(response: Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return (getattr(response, "text", "") or "")[:_MAX_DETAIL] or "(empty response body)"

    if not isinstance(body, dict):
        return str(body)[:_MAX_DETAIL]

    if isinstance(body.get("detail"), list):
        return " | ".join(
            f"{'.'.join(str(p) for p in err.get('loc', []))}: {err.get('msg', err)}" for err in body["detail"]
        )

    error = body.get("error")
    if isinstance(error, dict):
        return _field_errors(error)
    if error is None:
        return str(body)[:_MAX_DETAIL]

    if "sku" in body:
        return f"{body['sku']}: requested {body.get('requested')}, available {body.get('available')}"
    return str(error)


def is_stock_exhausted(response: Response) -> bool:
    """A 409 means the shared catalog ran out; expected under sustained load."""
    return response.status_code == 409

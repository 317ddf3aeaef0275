from __future__ import annotations

import json
from typing import Any

from fastapi import Request
from starlette.requests import ClientDisconnect

from paraphrase_api.core.errors import InvalidRequestError


async def read_json_body(request: Request) -> Any:
    try:
        return await request.json()
    except ClientDisconnect as exc:
        raise InvalidRequestError("Client disconnected", status_code=499) from exc
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise InvalidRequestError("Invalid JSON body") from exc

"""Watch event parser - decodes watch stream frames into WatchEvents."""

from __future__ import annotations

import json
from typing import Any

from pydantic import ValidationError

from kubik.constants.enums import WatchEventType
from kubik.controllers.base.errors import ProtocolError, WatchExpired
from kubik.models.core.resource import WatchEvent

_EXPIRED_STATUS_CODE = 410


class WatchEventParser:
    """Parses one JSON watch frame into a WatchEvent."""

    _EVENT_TYPES = {member.value for member in WatchEventType}

    def parse(self, frame: bytes | str) -> WatchEvent:
        """Parse a watch frame.

        Raises:
            WatchExpired: For an ERROR frame with status code 410 (Gone).
            ProtocolError: For undecodable frames, ERROR frames and unknown types.
        """
        try:
            payload: Any = json.loads(frame)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ProtocolError(f"Undecodable watch frame: {exc}") from exc
        if not isinstance(payload, dict):
            raise ProtocolError("Watch frame is not an object")

        event_type = payload.get("type")
        if event_type == "ERROR":
            status = payload.get("object")
            if not isinstance(status, dict):
                status = {}
            message = status.get("message") or "watch error"
            if status.get("code") == _EXPIRED_STATUS_CODE:
                raise WatchExpired(message)
            raise ProtocolError(f"Watch error: {message}")
        if event_type not in self._EVENT_TYPES:
            raise ProtocolError(f"Unknown watch event type: {event_type!r}")

        try:
            return WatchEvent.model_validate(payload)
        except ValidationError as exc:
            raise ProtocolError(f"Invalid watch event object: {exc}") from exc

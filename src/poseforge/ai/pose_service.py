"""Text-to-pose synthesis through a hosted Gemini model.

The model is asked for JSON with a ``body_pose`` array (axis-angle values
for the 22 body joints) and, optionally, an ``expression`` array. Any
failure along the way degrades to a neutral pose rather than an exception,
so callers can merge the result unconditionally.
"""

import json
import logging
import threading
from numbers import Real
from typing import Any, Mapping, Optional

from google import genai
from google.genai import types

from poseforge.constants import BODY_POSE_SIZE
from poseforge.core.config import AppConfig

logger = logging.getLogger(__name__)

PROMPT_TEMPLATE = (
    'Create an SMPL-X body pose for the action: "{prompt}". '
    "Return the pose as axis-angle values (radians) for 22 joints (66 floats). "
    "Format the output as JSON with the key 'body_pose'."
)

POSE_SCHEMA = types.Schema(
    type=types.Type.OBJECT,
    properties={
        "body_pose": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.NUMBER),
            description="66 axis-angle values for 22 joints",
        ),
        "expression": types.Schema(
            type=types.Type.ARRAY,
            items=types.Schema(type=types.Type.NUMBER),
            description="10 expression coefficients",
        ),
    },
    required=["body_pose"],
)


def fallback_pose() -> dict[str, list[float]]:
    """Neutral result returned whenever synthesis fails."""
    return {"body_pose": [0.0] * BODY_POSE_SIZE}


def _numeric_list(value: Any) -> Optional[list[float]]:
    if not isinstance(value, list):
        return None
    if not all(isinstance(v, Real) and not isinstance(v, bool) for v in value):
        return None
    return [float(v) for v in value]


def parse_pose_response(text: Optional[str]) -> dict[str, list[float]]:
    """Extract the pose fields from a model response body.

    Raises ``ValueError`` when the text is not a JSON object with a numeric
    ``body_pose`` array. A malformed ``expression`` is dropped with a
    warning; lengths are left for :meth:`PoseParameters.merge` to normalise.
    """
    if not text:
        raise ValueError("Empty response from model")
    data = json.loads(text)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    body_pose = _numeric_list(data.get("body_pose"))
    if body_pose is None:
        raise ValueError("Response has no numeric 'body_pose' array")
    result = {"body_pose": body_pose}

    if "expression" in data:
        expression = _numeric_list(data["expression"])
        if expression is None:
            logger.warning("Ignoring non-numeric 'expression' in model response")
        else:
            result["expression"] = expression
    return result


def result_to_partial(result: Mapping[str, Any]) -> dict[str, Any]:
    """Select the fields of a synthesis result that update the current state.

    ``body_pose`` always replaces the current pose; ``expression`` only
    when the model returned one.
    """
    partial: dict[str, Any] = {"body_pose": result.get("body_pose", fallback_pose()["body_pose"])}
    if result.get("expression") is not None:
        partial["expression"] = result["expression"]
    return partial


class PoseSynthesizer:
    """Turns a free-text action description into partial pose parameters.

    Parameters
    ----------
    config : AppConfig
        Supplies the API key, model id and request timeout.
    client : optional
        Pre-built ``genai.Client`` (or any object exposing
        ``models.generate_content``). Created lazily from *config* when
        omitted.
    """

    def __init__(self, config: AppConfig, client: Any = None):
        self.config = config
        self._client = client

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = genai.Client(
                api_key=self.config.api_key,
                http_options=types.HttpOptions(
                    timeout=int(self.config.request_timeout_s * 1000),
                ),
            )
        return self._client

    def synthesize(self, prompt: str) -> dict[str, list[float]]:
        """Request a pose for *prompt*.

        Never raises: any failure is logged and :func:`fallback_pose` is
        returned instead.
        """
        if self._client is None and not self.config.ai_enabled:
            logger.warning("No API key configured; returning neutral pose")
            return fallback_pose()

        logger.info("Requesting pose from %s: %r", self.config.model, prompt)
        try:
            response = self._get_client().models.generate_content(
                model=self.config.model,
                contents=PROMPT_TEMPLATE.format(prompt=prompt),
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=POSE_SCHEMA,
                ),
            )
            result = parse_pose_response(response.text)
        except Exception:
            logger.exception("Pose synthesis failed; returning neutral pose")
            return fallback_pose()

        logger.info("Pose synthesis completed (%d values)", len(result["body_pose"]))
        return result


class RequestTracker:
    """Hands out increasing sequence numbers; only the newest is current.

    Used to discard responses to requests that were superseded while they
    were in flight.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._latest = 0

    @property
    def latest(self) -> int:
        return self._latest

    def issue(self) -> int:
        with self._lock:
            self._latest += 1
            return self._latest

    def is_current(self, seq: int) -> bool:
        with self._lock:
            return seq == self._latest and seq > 0

"""Runtime configuration read from the environment."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from poseforge.constants import (
    API_KEY_ENV_VARS, DEFAULT_MODEL, DEFAULT_REQUEST_TIMEOUT_S,
    MODEL_ENV_VAR, TIMEOUT_ENV_VAR,
)


@dataclass(frozen=True)
class AppConfig:
    """Settings for the optional AI pose feature.

    ``api_key`` is the only secret; it is supplied out-of-band through the
    environment and never written anywhere.
    """
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    request_timeout_s: float = DEFAULT_REQUEST_TIMEOUT_S

    @property
    def ai_enabled(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        api_key = None
        for name in API_KEY_ENV_VARS:
            value = (env.get(name) or "").strip()
            if value:
                api_key = value
                break
        model = (env.get(MODEL_ENV_VAR) or "").strip() or DEFAULT_MODEL
        try:
            timeout = float(env.get(TIMEOUT_ENV_VAR) or DEFAULT_REQUEST_TIMEOUT_S)
        except ValueError:
            timeout = DEFAULT_REQUEST_TIMEOUT_S
        return cls(api_key=api_key, model=model, request_timeout_s=timeout)

    def with_overrides(self, model: Optional[str] = None) -> "AppConfig":
        if model:
            return replace(self, model=model)
        return self

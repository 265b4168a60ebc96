"""Engine tuning knobs."""

import os
from dataclasses import dataclass

DEFAULT_LOOKAHEAD_SECONDS = 1
DEFAULT_MAX_PULSE_SECONDS = 10.0


@dataclass
class EngineConfig:
    lookahead_seconds: int = DEFAULT_LOOKAHEAD_SECONDS  # segment shown this early before its start
    max_pulse_seconds: float = DEFAULT_MAX_PULSE_SECONDS  # cap on change highlighting

    @classmethod
    def from_env(cls) -> "EngineConfig":
        return cls(
            lookahead_seconds=int(os.getenv("VELOCUE_LOOKAHEAD_SECONDS", DEFAULT_LOOKAHEAD_SECONDS)),
            max_pulse_seconds=float(os.getenv("VELOCUE_MAX_PULSE_SECONDS", DEFAULT_MAX_PULSE_SECONDS)),
        )


DEFAULT_CONFIG = EngineConfig()

"""Analysis result - the two scalars handed back to callers."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AnalysisResult:
    """Tempo and key estimate for one sample buffer.

    A ``None`` field means the value could not be determined
    (silent, flat or too-short input).
    """

    tempo: Optional[float] = None  # BPM
    key: Optional[str] = None  # e.g. "C# minor"

    @property
    def has_result(self) -> bool:
        """True if at least one of tempo/key was determined."""
        return self.tempo is not None or self.key is not None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {"tempo": self.tempo, "key": self.key}

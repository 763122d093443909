"""Render analysis results for display and export."""

import json
from pathlib import Path
from typing import Optional, Tuple

from .core import AnalysisResult

PLACEHOLDER = "—"
NOT_AVAILABLE = "N/A"


def format_tempo(tempo: Optional[float]) -> Optional[str]:
    """Tempo with one decimal, or None when absent."""
    if not tempo:
        return None
    return f"{tempo:.1f}"


def display_fields(result: AnalysisResult) -> Tuple[str, str]:
    """BPM and key text, absent fields replaced by the placeholder."""
    bpm_text = format_tempo(result.tempo)
    key_text = result.key or None
    return bpm_text or PLACEHOLDER, key_text or PLACEHOLDER


def copy_text(result: AnalysisResult) -> Optional[str]:
    """
    Plain-text summary for the clipboard.

    Returns:
        "BPM: <bpm>\\nKey: <key>" with N/A for an absent field, or None
        if neither field is available
    """
    bpm_text = format_tempo(result.tempo)
    key_text = result.key or None
    if not bpm_text and not key_text:
        return None
    return f"BPM: {bpm_text or NOT_AVAILABLE}\nKey: {key_text or NOT_AVAILABLE}"


class ResultExporter:
    """Export analysis results as JSON."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def to_json(self, result: AnalysisResult, output_path: Optional[str] = None) -> str:
        """
        Serialize a result, optionally writing it to a file.

        Args:
            result: Analysis result
            output_path: Optional path to write the JSON document to

        Returns:
            The JSON document
        """
        document = json.dumps(result.to_dict(), indent=self.indent, ensure_ascii=False)
        if output_path is not None:
            # Ensure output directory exists
            Path(output_path).parent.mkdir(parents=True, exist_ok=True)
            Path(output_path).write_text(document + "\n", encoding="utf-8")
        return document

"""
Speech-to-Text Service for Voice Input.

Audio answers are accepted and validated, but not transcribed: a placeholder
string stands in for the transcript.
"""
from typing import Any, Dict, Optional

from ..utils.config import AUDIO_PLACEHOLDER_TEXT, MAX_AUDIO_BYTES
from ..utils.logger import setup_logger

logger = setup_logger("stt_service")


class AudioValidationError(ValueError):
    """Uploaded audio is missing, too large, or not audio."""


class STTService:
    """
    Speech-to-Text service for voice input.

    Validates uploads and returns a placeholder transcript.
    """

    def __init__(self, max_bytes: int = MAX_AUDIO_BYTES, placeholder: str = AUDIO_PLACEHOLDER_TEXT):
        """
        Initialize STT service.

        Args:
            max_bytes: Largest accepted upload
            placeholder: Text substituted for the transcript
        """
        self.max_bytes = max_bytes
        self.placeholder = placeholder
        logger.info("STTService initialized (placeholder transcription)")

    def validate(self, content: bytes, content_type: Optional[str]) -> None:
        """
        Check an uploaded audio payload.

        Raises:
            AudioValidationError: On empty, oversized or non-audio uploads
        """
        if not content:
            raise AudioValidationError("Audio file is empty")
        if len(content) > self.max_bytes:
            raise AudioValidationError(
                f"File too large. Maximum size is {self.max_bytes // (1024 * 1024)}MB."
            )
        if content_type and not content_type.startswith("audio/"):
            raise AudioValidationError("Invalid file type. Only audio files are allowed.")

    def speech_to_text(
        self,
        content: bytes,
        content_type: Optional[str] = None,
        filename: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Convert speech audio to text.

        Args:
            content: Raw audio bytes
            content_type: MIME type of the upload
            filename: Original filename (for logging)

        Returns:
            Dictionary with:
            - text: Transcribed text (placeholder)
            - placeholder: True, since no real transcription happens
            - bytes: Size of the upload
        """
        self.validate(content, content_type)
        logger.info(f"Received audio {filename or '<unnamed>'} ({len(content)} bytes), using placeholder transcript")
        return {
            "text": self.placeholder,
            "placeholder": True,
            "bytes": len(content)
        }

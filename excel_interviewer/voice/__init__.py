"""
Voice services for the interview system.

Includes:
- Speech-to-Text (STT): voice input for answers (placeholder transcription)
"""

from .stt_service import STTService, AudioValidationError

__all__ = [
    'STTService',
    'AudioValidationError'
]

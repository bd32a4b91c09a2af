"""
Configuration settings for the Excel Mock Interviewer.
"""
import os

# LLM (scoring/generation oracle) configuration
# No key means no oracle: evaluation and generation use their local fallbacks.
GROQ_API_KEY = os.environ.get("GROQ_API_KEY")
GROQ_MODEL_NAME = os.environ.get("GROQ_MODEL_NAME", "meta-llama/llama-4-scout-17b-16e-instruct")
GROQ_TEMPERATURE = float(os.environ.get("GROQ_TEMPERATURE", 0.1))
GROQ_MAX_TOKENS = int(os.environ.get("GROQ_MAX_TOKENS", 1024))

# Bounded wait for every oracle call (seconds) and transient-failure retries
ORACLE_TIMEOUT_SECONDS = float(os.environ.get("ORACLE_TIMEOUT_SECONDS", 10))
ORACLE_MAX_RETRIES = int(os.environ.get("ORACLE_MAX_RETRIES", 2))

# Scoring configuration
PASS_THRESHOLD = int(os.environ.get("PASS_THRESHOLD", 60))  # score needed to pass a question
SHORT_CIRCUIT_THRESHOLD = int(os.environ.get("SHORT_CIRCUIT_THRESHOLD", 85))  # skip the oracle at or above this
KEYWORD_WEIGHT = 0.6
DOMAIN_TERM_WEIGHT = 0.3
NUMERIC_WEIGHT = 0.1
MAX_FOLLOW_UPS = 3

# Session configuration
MAX_ATTEMPTS_PER_QUESTION = int(os.environ.get("MAX_ATTEMPTS_PER_QUESTION", 3))
SESSION_MAX_AGE_HOURS = float(os.environ.get("SESSION_MAX_AGE_HOURS", 24))
DEFAULT_QUESTION_COUNT = int(os.environ.get("DEFAULT_QUESTION_COUNT", 10))
MIN_QUESTION_COUNT = 1
MAX_QUESTION_COUNT = 20
DEFAULT_DIFFICULTY = "beginner"
ANONYMOUS_USER_ID = "anonymous"

# Question generation
MAX_DERIVED_KEYWORDS = 5

# API configuration
CORS_ORIGINS = [o.strip() for o in os.environ.get("CORS_ORIGINS", "*").split(",") if o.strip()]
MAX_AUDIO_BYTES = int(os.environ.get("MAX_AUDIO_BYTES", 10 * 1024 * 1024))
AUDIO_PLACEHOLDER_TEXT = "Audio transcription would be processed here"

# Logging
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
LOG_FILE = os.environ.get("LOG_FILE")  # optional file handler in addition to the console

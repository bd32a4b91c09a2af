"""
Groq Cloud LLM service used as the scoring and question-generation oracle.

The oracle is optional: without an API key the application runs entirely
on its deterministic rubric and built-in question templates.

Key Features:
- Bounded wait per call (request timeout) with client-side retries
- Configurable model parameters
- Chains for answer evaluation and question generation that return JSON text
"""
import os
from typing import Optional

from langchain_groq import ChatGroq

# LangChain imports - use langchain_classic for chains
from langchain_core.prompts import PromptTemplate
from langchain_classic.chains import LLMChain
from ..utils.config import (
    GROQ_API_KEY,
    GROQ_MODEL_NAME,
    GROQ_TEMPERATURE,
    GROQ_MAX_TOKENS,
    ORACLE_TIMEOUT_SECONDS,
    ORACLE_MAX_RETRIES
)
from ..utils.logger import setup_logger

logger = setup_logger("groq_service")


def initialize_llm(
    api_key: str = None,
    model_name: str = None,
    temperature: float = None,
    max_tokens: int = None,
    timeout: float = None,
    max_retries: int = None
) -> ChatGroq:
    """
    Initialize Groq Cloud LLM.

    Args:
        api_key: Groq API key. If None, uses environment variable or config.
        model_name: Model name. If None, uses config default.
        temperature: Temperature setting. If None, uses config default.
        max_tokens: Max tokens. If None, uses config default.
        timeout: Seconds to wait for a response. If None, uses config default.
        max_retries: Retries (with backoff) on transient failures.

    Returns:
        ChatGroq LLM instance

    Raises:
        ValueError: If no API key is available
    """
    if api_key is None:
        api_key = os.environ.get("GROQ_API_KEY", GROQ_API_KEY)

    if not api_key or api_key == "":
        raise ValueError("GROQ_API_KEY not found. Please set it in environment or config.")

    if model_name is None:
        model_name = GROQ_MODEL_NAME
    if temperature is None:
        temperature = GROQ_TEMPERATURE
    if max_tokens is None:
        max_tokens = GROQ_MAX_TOKENS
    if timeout is None:
        timeout = ORACLE_TIMEOUT_SECONDS
    if max_retries is None:
        max_retries = ORACLE_MAX_RETRIES

    try:
        llm = ChatGroq(
            groq_api_key=api_key,
            model_name=model_name,
            temperature=temperature,
            max_tokens=max_tokens,
            request_timeout=timeout,
            max_retries=max_retries
        )
        logger.info(
            f"Groq Cloud LLM initialized: {model_name} "
            f"(temp={temperature}, max_tokens={max_tokens}, timeout={timeout}s, retries={max_retries})"
        )
        return llm
    except Exception as e:
        logger.error(f"Groq initialization failed: {e}")
        raise


def initialize_optional_llm(api_key: str = None) -> Optional[ChatGroq]:
    """
    Initialize the LLM if credentials are configured, otherwise return None.

    Used at application startup so a missing key degrades to the local
    fallbacks instead of preventing startup.
    """
    try:
        return initialize_llm(api_key=api_key)
    except ValueError:
        logger.warning("No GROQ_API_KEY configured - running without the LLM oracle")
        return None


def create_evaluation_chain(llm) -> LLMChain:
    """
    Create LLM chain for Excel answer evaluation.

    The chain's output (key "evaluation") is expected to be a single JSON object.

    Args:
        llm: Chat model instance

    Returns:
        LLMChain for evaluation
    """
    prompt = PromptTemplate(
        input_variables=["question", "expected_answer", "keywords", "answer", "context"],
        template=(
            "You are an Excel expert interviewing a candidate for a spreadsheet-heavy role.\n"
            "Evaluate the candidate's answer to the interview question.\n\n"
            "QUESTION:\n{question}\n\n"
            "EXPECTED ANSWER OUTLINE:\n{expected_answer}\n\n"
            "KEY CONCEPTS:\n{keywords}\n\n"
            "CANDIDATE ANSWER:\n{answer}\n\n"
            "INTERVIEW CONTEXT:\n{context}\n\n"
            "Score the answer from 0 to 100 for correctness and completeness. "
            "An answer passes at 60 or above.\n"
            "Respond with ONLY a JSON object, no other text, in exactly this shape:\n"
            "{{\"score\": <integer 0-100>, \"pass\": <true|false>, "
            "\"feedback\": \"<2-3 sentences of constructive feedback>\", "
            "\"follow_ups\": [\"<up to 3 follow-up questions>\"]}}"
        )
    )

    return LLMChain(llm=llm, prompt=prompt, output_key="evaluation")


def create_question_chain(llm) -> LLMChain:
    """
    Create LLM chain for Excel interview question generation.

    The chain's output (key "questions") is expected to be a JSON array.

    Args:
        llm: Chat model instance

    Returns:
        LLMChain for question generation
    """
    prompt = PromptTemplate(
        input_variables=["num_questions", "difficulty", "category"],
        template=(
            "You are an expert interviewer assessing Microsoft Excel skills.\n\n"
            "Generate {num_questions} distinct interview questions.\n"
            "DIFFICULTY: {difficulty}\n"
            "CATEGORY: {category}\n\n"
            "Each question must be answerable in a few spoken sentences and have a clear "
            "expected answer.\n"
            "Respond with ONLY a JSON array, no other text. Each element must be exactly:\n"
            "{{\"text\": \"<question>\", \"category\": \"<category>\", "
            "\"expected_answer\": \"<outline of a good answer>\", "
            "\"hints\": [\"<short hint>\"]}}"
        )
    )

    return LLMChain(llm=llm, prompt=prompt, output_key="questions")

"""
LLM service modules for Groq Cloud integration.
"""
from .groq_service import initialize_llm, create_evaluation_chain, create_question_chain

__all__ = ['initialize_llm', 'create_evaluation_chain', 'create_question_chain']

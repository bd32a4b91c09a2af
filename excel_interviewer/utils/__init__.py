"""
Utility modules for configuration, logging and text processing.
"""
from . import config, logger, scoring, text_utils
from .config import *
from .text_utils import *

__all__ = ['config', 'text_utils', 'scoring', 'logger']

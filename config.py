import os
import warnings
from dotenv import load_dotenv

# Constants
DEFAULT_DETAIL_LABEL = 'full'
DEFAULT_CHARS_PER_TOKEN = 4
DEFAULT_PRIORITY = 50
DEFAULT_TIKTOKEN_ENCODING = 'cl100k_base'
DEFAULT_LOG_LEVEL = 'INFO'

# Provider name reported for tokens served straight from the pantry
PANTRY_PROVIDER_NAME = 'pantry'

# Well-known priority tags (matched case-insensitively)
PRIORITY_TAG_SCORES = {
    'critical': 100,
    'must': 90,
    'high': 75,
    'normal': 50,
    'medium': 50,
    'low': 25,
    'optional': 10,
}


# Load environment variables
load_dotenv()

# Cook Defaults
DEFAULT_DETAIL = os.getenv('KITCHEN_DEFAULT_DETAIL', DEFAULT_DETAIL_LABEL)
DEFAULT_PRIORITY_SCORE = float(os.getenv('KITCHEN_DEFAULT_PRIORITY_SCORE', str(DEFAULT_PRIORITY)))

# Token Counting Configuration
CHARS_PER_TOKEN = int(os.getenv('KITCHEN_CHARS_PER_TOKEN', str(DEFAULT_CHARS_PER_TOKEN)))
USE_TIKTOKEN = os.getenv('KITCHEN_USE_TIKTOKEN', 'false').lower() in ('true', '1', 'yes', 'on')
TIKTOKEN_ENCODING = os.getenv('KITCHEN_TIKTOKEN_ENCODING', DEFAULT_TIKTOKEN_ENCODING)

# Cancellation - seconds a single cook/prepare call may take (0 disables the limit)
COOK_TIMEOUT = float(os.getenv('KITCHEN_COOK_TIMEOUT', '0'))

# Logging
LOG_LEVEL = os.getenv('KITCHEN_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper()

# HITL example
HITL_LOG_DIR = os.getenv('HITL_LOG_DIR', os.path.join('.', 'examples', 'hitl', 'logs'))
HITL_SUMMARY_MESSAGES = int(os.getenv('HITL_SUMMARY_MESSAGES', '5'))
HITL_BUDGET = int(os.getenv('HITL_BUDGET', '1000'))


# Validation
def _validate_config():
    """Validate configuration and warn about issues"""
    if not DEFAULT_DETAIL:
        warnings.warn("KITCHEN_DEFAULT_DETAIL should not be empty")

    if CHARS_PER_TOKEN <= 0:
        warnings.warn("KITCHEN_CHARS_PER_TOKEN should be positive")

    if COOK_TIMEOUT < 0:
        warnings.warn("KITCHEN_COOK_TIMEOUT should be non-negative (0 disables the timeout)")

    if USE_TIKTOKEN and not TIKTOKEN_ENCODING:
        warnings.warn("KITCHEN_USE_TIKTOKEN is true, but KITCHEN_TIKTOKEN_ENCODING is not set.")

    if LOG_LEVEL not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        warnings.warn(f"KITCHEN_LOG_LEVEL '{LOG_LEVEL}' is not a standard logging level")

    # HITL example validation
    if HITL_SUMMARY_MESSAGES < 1:
        warnings.warn("HITL_SUMMARY_MESSAGES should be at least 1")
    if HITL_BUDGET <= 0:
        warnings.warn("HITL_BUDGET should be positive")


# Perform validation
_validate_config()

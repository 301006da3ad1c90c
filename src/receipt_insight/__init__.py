"""
Date resolution and categorization for receipt text.
"""

from .models import (
    ReceiptCategory,
    DatePattern,
    DateParsingInfo,
    AlternativeCategory,
    ClassificationResult,
    ReceiptItem,
    ReceiptData,
    ProcessingResult,
)
from .dates import DateResolver, DatePatternError, DATE_PATTERNS
from .categorization import CategoryClassifier, KeywordTableError
from .processing import ReceiptProcessor
from .config import configure_logging

__all__ = [
    'ReceiptCategory',
    'DatePattern',
    'DateParsingInfo',
    'AlternativeCategory',
    'ClassificationResult',
    'ReceiptItem',
    'ReceiptData',
    'ProcessingResult',
    'DateResolver',
    'DatePatternError',
    'DATE_PATTERNS',
    'CategoryClassifier',
    'KeywordTableError',
    'ReceiptProcessor',
    'configure_logging'
]

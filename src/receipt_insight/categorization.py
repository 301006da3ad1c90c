"""
Receipt categorization using weighted keyword signals.
Scores every category on merchant name, line items and surrounding text,
then picks the best category and ranks the alternatives.
"""

import logging
from typing import Optional, Dict, List, Sequence

from .config import SIGNAL_WEIGHTS, MAX_ALTERNATIVES
from .keywords import KeywordTable, MERCHANT_PATTERNS, ITEM_KEYWORDS, CONTEXT_KEYWORDS
from .models import (
    ReceiptCategory, ReceiptData, ClassificationResult, AlternativeCategory, CategoryScore
)

logger = logging.getLogger(__name__)


class KeywordTableError(ValueError):
    """Raised when keyword tables or signal weights are malformed."""


class CategoryClassifier:
    """Assigns spending categories to receipts."""

    def __init__(
        self,
        merchant_patterns: Optional[KeywordTable] = None,
        item_keywords: Optional[KeywordTable] = None,
        context_keywords: Optional[KeywordTable] = None,
        weights: Optional[Dict[str, float]] = None,
    ):
        """Initialize the classifier.

        Args:
            merchant_patterns: Category to merchant-name substrings
            item_keywords: Category to item-name substrings
            context_keywords: Category to raw-text substrings
            weights: Channel weights keyed by 'merchant', 'items' and 'context'

        Raises:
            KeywordTableError: If a table or the weights are malformed
        """
        self.logger = logger
        self.merchant_patterns = self._validate_table(
            'merchant', MERCHANT_PATTERNS if merchant_patterns is None else merchant_patterns
        )
        self.item_keywords = self._validate_table(
            'item', ITEM_KEYWORDS if item_keywords is None else item_keywords
        )
        self.context_keywords = self._validate_table(
            'context', CONTEXT_KEYWORDS if context_keywords is None else context_keywords
        )
        self.weights = self._validate_weights(SIGNAL_WEIGHTS if weights is None else weights)

    @staticmethod
    def _validate_table(channel: str, table: KeywordTable) -> Dict[ReceiptCategory, tuple]:
        """Check a keyword table and normalize its entries to lower case."""
        fallback = ReceiptCategory.fallback()
        validated = {}

        for category in ReceiptCategory:
            keywords = table.get(category)
            if keywords is None:
                raise KeywordTableError(f"No {channel} keywords defined for {category.name}")
            if isinstance(keywords, str):
                raise KeywordTableError(f"{channel} keywords for {category.name} must be a sequence, not a string")

            if category is fallback:
                if keywords:
                    raise KeywordTableError(f"Fallback category {category.name} must not have {channel} keywords")
            elif not keywords:
                raise KeywordTableError(f"{channel} keywords for {category.name} are empty")

            for keyword in keywords:
                if not isinstance(keyword, str) or not keyword.strip():
                    raise KeywordTableError(f"Invalid {channel} keyword {keyword!r} for {category.name}")

            validated[category] = tuple(keyword.lower() for keyword in keywords)

        return validated

    @staticmethod
    def _validate_weights(weights: Dict[str, float]) -> Dict[str, float]:
        missing = {'merchant', 'items', 'context'} - set(weights)
        if missing:
            raise KeywordTableError(f"Missing signal weights: {sorted(missing)}")
        if any(weights[channel] < 0 for channel in ('merchant', 'items', 'context')):
            raise KeywordTableError("Signal weights must not be negative")
        return {channel: float(weights[channel]) for channel in ('merchant', 'items', 'context')}

    def merchant_score(self, merchant_name: Optional[str], category: ReceiptCategory) -> float:
        """Fraction of the category's merchant patterns found in the merchant name."""
        patterns = self.merchant_patterns[category]
        merchant = (merchant_name or "").lower()
        matches = sum(1 for pattern in patterns if pattern in merchant)
        return matches / max(len(patterns), 1)

    def item_score(self, item_names: Optional[Sequence[str]], category: ReceiptCategory) -> float:
        """Keyword hits across all items, normalized by items times keywords."""
        items = [(name or "").lower() for name in (item_names or [])]
        if not items:
            return 0.0

        keywords = self.item_keywords[category]
        matches = sum(
            1
            for item in items
            for keyword in keywords
            if keyword in item
        )
        return matches / (len(items) * max(len(keywords), 1))

    def context_score(self, raw_text: Optional[str], category: ReceiptCategory) -> float:
        """Fraction of the category's context keywords found in the raw text."""
        keywords = self.context_keywords[category]
        text = (raw_text or "").lower()
        matches = sum(1 for keyword in keywords if keyword in text)
        return matches / max(len(keywords), 1)

    def score(
        self,
        category: ReceiptCategory,
        merchant_name: Optional[str],
        item_names: Optional[Sequence[str]],
        raw_text: Optional[str],
    ) -> float:
        """Weighted confidence for one category, clamped to [0, 1]."""
        combined = (
            self.merchant_score(merchant_name, category) * self.weights['merchant']
            + self.item_score(item_names, category) * self.weights['items']
            + self.context_score(raw_text, category) * self.weights['context']
        )
        return max(0.0, min(1.0, combined))

    def score_all(
        self,
        merchant_name: Optional[str],
        item_names: Optional[Sequence[str]],
        raw_text: Optional[str],
    ) -> CategoryScore:
        """Score every category, keeping declaration order."""
        return {
            category: self.score(category, merchant_name, item_names, raw_text)
            for category in ReceiptCategory
        }

    def classify(
        self,
        merchant_name: Optional[str],
        item_names: Optional[Sequence[str]],
        raw_text: Optional[str],
    ) -> ReceiptCategory:
        """Return the best category for a receipt.

        Ties go to the category declared first. When nothing scores above
        zero the fallback category is returned.
        """
        scores = self.score_all(merchant_name, item_names, raw_text)
        best = max(scores, key=scores.get)

        if scores[best] <= 0.0:
            return ReceiptCategory.fallback()
        return best

    def classify_detailed(
        self,
        merchant_name: Optional[str],
        item_names: Optional[Sequence[str]],
        raw_text: Optional[str],
    ) -> ClassificationResult:
        """Return the best category with its confidence and ranked alternatives.

        Args:
            merchant_name: Merchant/store name, if known
            item_names: Line item names
            raw_text: Full OCR text

        Returns:
            ClassificationResult with up to three alternatives
        """
        scores = self.score_all(merchant_name, item_names, raw_text)
        ranked: List[tuple] = sorted(scores.items(), key=lambda entry: entry[1], reverse=True)

        if ranked[0][1] <= 0.0:
            fallback = ReceiptCategory.fallback()
            ranked = [(fallback, 0.0)] + [entry for entry in ranked if entry[0] is not fallback]

        primary, confidence = ranked[0]
        alternatives = [
            AlternativeCategory(category=category, confidence=value)
            for category, value in ranked[1:1 + MAX_ALTERNATIVES]
        ]

        self.logger.debug(
            f"Categorized receipt as {primary.display_name} ({confidence:.3f}), "
            f"merchant={merchant_name!r}"
        )
        return ClassificationResult(
            primary_category=primary,
            confidence=confidence,
            alternative_categories=alternatives
        )

    def categorize_receipt(self, receipt: ReceiptData) -> ReceiptCategory:
        """Classify an extracted receipt record."""
        return self.classify(receipt.merchant_name, receipt.item_names, receipt.raw_text)

    def detailed_categorization(self, receipt: ReceiptData) -> ClassificationResult:
        """Classify an extracted receipt record with alternatives."""
        return self.classify_detailed(receipt.merchant_name, receipt.item_names, receipt.raw_text)

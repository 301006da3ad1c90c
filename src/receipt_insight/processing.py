"""
Receipt processing that combines date resolution and categorization.
Takes fields already extracted from OCR text and produces a processing result.
"""

import logging
from datetime import datetime
from typing import Optional, List, Iterable

from .categorization import CategoryClassifier
from .config import DEFAULT_DATE_FORMAT, UNKNOWN_DATE
from .dates import DateResolver
from .models import ReceiptData, ProcessingResult, ClassificationResult, ReceiptCategory

logger = logging.getLogger(__name__)


class ReceiptProcessor:
    """Runs date resolution and categorization over extracted receipt data."""

    def __init__(
        self,
        date_resolver: Optional[DateResolver] = None,
        classifier: Optional[CategoryClassifier] = None,
        date_display_format: str = DEFAULT_DATE_FORMAT,
    ):
        """Initialize the receipt processor.

        Args:
            date_resolver: Resolver for date fragments
            classifier: Category classifier
            date_display_format: Layout used for the display date
        """
        self.logger = logger
        self.date_resolver = date_resolver or DateResolver()
        self.classifier = classifier or CategoryClassifier()
        self.date_display_format = date_display_format

    def process(self, receipt: ReceiptData) -> ProcessingResult:
        """Resolve the date and category of an extracted receipt.

        Args:
            receipt: Fields extracted from the receipt

        Returns:
            ProcessingResult with the resolved date, category and confidence
        """
        start_time = datetime.now()

        try:
            warnings = []

            transaction_date = self._resolve_date(receipt)
            if transaction_date is None:
                warnings.append("Could not determine transaction date")
                display_date = UNKNOWN_DATE
            else:
                display_date = self.date_resolver.format(transaction_date, self.date_display_format)

            if not receipt.merchant_name:
                warnings.append("No merchant name provided")

            category = self.classifier.detailed_categorization(receipt)
            categorized = category.primary_category is not ReceiptCategory.fallback()
            if not categorized:
                warnings.append("Receipt could not be categorized")

            confidence = self._calculate_confidence(receipt, transaction_date, category)
            processing_time = (datetime.now() - start_time).total_seconds()

            self.logger.info(
                f"Processed receipt from {receipt.merchant_name or 'unknown merchant'}: "
                f"date={display_date}, category={category.primary_category.display_name} "
                f"in {processing_time:.4f} seconds"
            )

            return ProcessingResult(
                success=transaction_date is not None or categorized,
                receipt=receipt,
                transaction_date=transaction_date,
                display_date=display_date,
                category=category,
                warnings=warnings,
                processing_time=processing_time,
                confidence_score=confidence
            )

        except Exception as e:
            self.logger.error(f"Failed to process receipt: {str(e)}")
            return ProcessingResult(
                success=False,
                receipt=receipt,
                errors=[f"Processing failed: {str(e)}"],
                processing_time=(datetime.now() - start_time).total_seconds()
            )

    def process_many(self, receipts: Iterable[ReceiptData]) -> List[ProcessingResult]:
        """Process several receipts in order."""
        return [self.process(receipt) for receipt in receipts]

    def _resolve_date(self, receipt: ReceiptData) -> Optional[int]:
        """Resolve the date fragment, falling back to the full receipt text."""
        timestamp = self.date_resolver.resolve(receipt.date)
        if timestamp is None and receipt.raw_text:
            timestamp = self.date_resolver.resolve(receipt.raw_text)
        return timestamp

    def _calculate_confidence(
        self,
        receipt: ReceiptData,
        transaction_date: Optional[int],
        category: ClassificationResult,
    ) -> float:
        """Calculate processing confidence score.

        Args:
            receipt: Input receipt fields
            transaction_date: Resolved timestamp, if any
            category: Categorization result

        Returns:
            Confidence score between 0 and 1
        """
        confidence = 0.0

        if receipt.merchant_name:
            confidence += 0.3
        if transaction_date is not None:
            confidence += 0.3
        if category.primary_category is not ReceiptCategory.fallback():
            confidence += 0.3

        # Bonus for text quality
        text_length = len(receipt.raw_text.strip())
        if text_length > 50:
            confidence += 0.05
        if text_length > 200:
            confidence += 0.05

        return max(0.0, min(1.0, confidence))

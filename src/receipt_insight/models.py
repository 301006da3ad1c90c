"""
Data models using Pydantic for receipt date resolution and categorization.
Provides validation and type checking for receipt inputs and results.
"""

import re
from enum import Enum
from typing import Optional, List, Dict

from pydantic import BaseModel, Field, field_validator


class ReceiptCategory(Enum):
    """Closed set of spending categories, in tie-breaking order."""

    GROCERIES = ("Groceries", "#4CAF50")
    DINING = ("Dining & Restaurants", "#FF9800")
    TRANSPORTATION = ("Transportation", "#2196F3")
    ELECTRONICS = ("Electronics", "#9C27B0")
    CLOTHING = ("Clothing & Fashion", "#E91E63")
    HEALTHCARE = ("Healthcare", "#F44336")
    ENTERTAINMENT = ("Entertainment", "#FF5722")
    HOME_GARDEN = ("Home & Garden", "#795548")
    AUTOMOTIVE = ("Automotive", "#607D8B")
    BUSINESS = ("Business", "#3F51B5")
    TRAVEL = ("Travel", "#009688")
    EDUCATION = ("Education", "#FFC107")
    UTILITIES = ("Utilities", "#8BC34A")
    MISCELLANEOUS = ("Miscellaneous", "#9E9E9E")

    def __init__(self, display_name: str, color: str):
        self.display_name = display_name
        self.color = color

    @classmethod
    def fallback(cls) -> "ReceiptCategory":
        """Category used when nothing else matches."""
        return cls.MISCELLANEOUS

    @classmethod
    def from_string(cls, category: Optional[str]) -> "ReceiptCategory":
        """Look up a category by display name or member name.

        Args:
            category: Free-form category label, e.g. "groceries" or "Home & Garden"

        Returns:
            Matching category, or the fallback category if none matches
        """
        if not category or not category.strip():
            return cls.fallback()

        wanted = category.strip().lower()
        for member in cls:
            if wanted == member.display_name.lower() or wanted == member.name.lower():
                return member
        return cls.fallback()

    def __str__(self) -> str:
        return self.display_name


class DatePattern(BaseModel):
    """A date grammar: regex with three capture groups plus its format tag."""

    pattern: re.Pattern = Field(..., description="Regex with day/month/year capture groups")
    format: str = Field(..., min_length=1, description="Tag naming the interpretation routine")
    description: str = Field(..., description="Human-readable description")

    model_config = {"frozen": True}

    @field_validator('pattern')
    @classmethod
    def validate_groups(cls, v):
        """Every grammar must capture exactly three fields."""
        if v.groups != 3:
            raise ValueError(f'Date pattern must have 3 capture groups, got {v.groups}')
        return v


class DateParsingInfo(BaseModel):
    """Summary of the date formats a resolver understands."""

    supported_patterns: int = Field(..., ge=0)
    year_normalization_threshold: int = Field(...)
    supported_formats: List[str] = Field(default_factory=list)
    example_formats: List[str] = Field(default_factory=list)


class AlternativeCategory(BaseModel):
    """A runner-up category with its confidence."""

    category: ReceiptCategory
    confidence: float = Field(..., ge=0, le=1)


class ClassificationResult(BaseModel):
    """Best category for a receipt plus ranked alternatives."""

    primary_category: ReceiptCategory = Field(..., description="Top-scoring category")
    confidence: float = Field(..., ge=0, le=1, description="Score of the primary category")
    alternative_categories: List[AlternativeCategory] = Field(
        default_factory=list, max_length=3, description="Runner-ups, best first"
    )

    @field_validator('alternative_categories')
    @classmethod
    def validate_ordering(cls, v):
        """Alternatives must be ranked by descending confidence."""
        for previous, current in zip(v, v[1:]):
            if current.confidence > previous.confidence:
                raise ValueError('Alternative categories must be sorted by descending confidence')
        return v

    model_config = {
        "json_schema_extra": {
            "example": {
                "primary_category": "GROCERIES",
                "confidence": 0.42,
                "alternative_categories": [
                    {"category": "DINING", "confidence": 0.08},
                    {"category": "HOME_GARDEN", "confidence": 0.02},
                    {"category": "TRANSPORTATION", "confidence": 0.0}
                ]
            }
        }
    }


class ReceiptItem(BaseModel):
    """A single line item read from a receipt."""

    name: str = Field(..., description="Item name as printed")
    quantity: Optional[str] = Field(None)
    price: Optional[str] = Field(None)
    total: Optional[str] = Field(None)


class ReceiptData(BaseModel):
    """Fields extracted from a receipt's OCR text by an upstream step."""

    merchant_name: Optional[str] = Field(None, description="Merchant/store name")
    merchant_address: Optional[str] = Field(None)
    phone_number: Optional[str] = Field(None)
    date: Optional[str] = Field(None, description="Date fragment as printed")
    time: Optional[str] = Field(None)
    items: List[ReceiptItem] = Field(default_factory=list, description="Line items")
    subtotal: Optional[str] = Field(None)
    tax: Optional[str] = Field(None)
    total: Optional[str] = Field(None)
    payment_method: Optional[str] = Field(None)
    raw_text: str = Field("", description="Full OCR text")

    @field_validator('raw_text', mode='before')
    @classmethod
    def validate_raw_text(cls, v):
        """Treat missing raw text as empty."""
        return v or ""

    @property
    def item_names(self) -> List[str]:
        return [item.name for item in self.items]

    model_config = {
        "json_schema_extra": {
            "example": {
                "merchant_name": "WALMART SUPERCENTER",
                "date": "17/07/2025",
                "items": [{"name": "Milk 2%", "price": "3.49"}],
                "total": "3.49",
                "raw_text": "WALMART SUPERCENTER\n17/07/2025\nMilk 2% 3.49\nTOTAL 3.49"
            }
        }
    }


class ProcessingResult(BaseModel):
    """Model for receipt processing results."""

    success: bool = Field(..., description="Whether a date or category was recovered")
    receipt: Optional[ReceiptData] = Field(None, description="Input receipt record")
    transaction_date: Optional[int] = Field(None, description="Resolved date in epoch milliseconds")
    display_date: str = Field("Unknown Date", description="Formatted transaction date")
    category: Optional[ClassificationResult] = Field(None, description="Categorization result")
    errors: List[str] = Field(default_factory=list, description="Processing errors")
    warnings: List[str] = Field(default_factory=list, description="Processing warnings")
    processing_time: Optional[float] = Field(None, description="Processing time in seconds")
    confidence_score: Optional[float] = Field(None, ge=0, le=1, description="Overall confidence")


CategoryScore = Dict[ReceiptCategory, float]

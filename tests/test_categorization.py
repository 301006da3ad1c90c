"""
Unit tests for keyword-based receipt categorization.
Tests channel scoring, weighting, tie-breaking and table validation.
"""

import random
import pytest

from receipt_insight.categorization import CategoryClassifier, KeywordTableError
from receipt_insight.keywords import MERCHANT_PATTERNS, ITEM_KEYWORDS, CONTEXT_KEYWORDS
from receipt_insight.models import ReceiptCategory, ReceiptData, ReceiptItem, ClassificationResult


def build_table(**overrides):
    """Keyword table with one unmatched keyword per category plus overrides."""
    table = {
        category: (f"kw-{category.name.lower()}",)
        for category in ReceiptCategory
        if category is not ReceiptCategory.MISCELLANEOUS
    }
    table[ReceiptCategory.MISCELLANEOUS] = ()
    for name, keywords in overrides.items():
        table[ReceiptCategory[name]] = keywords
    return table


class TestCategoryClassifier:
    """Test cases for CategoryClassifier."""

    @pytest.fixture
    def classifier(self):
        """Create classifier with the built-in tables."""
        return CategoryClassifier()

    def test_walmart_is_groceries(self, classifier):
        """Test a known grocery merchant with no other signals."""
        assert classifier.classify("Walmart", [], "") == ReceiptCategory.GROCERIES

        merchant = classifier.merchant_score("Walmart", ReceiptCategory.GROCERIES)
        score = classifier.score(ReceiptCategory.GROCERIES, "Walmart", [], "")
        assert merchant > 0
        assert score >= 0.5 * (1 / len(MERCHANT_PATTERNS[ReceiptCategory.GROCERIES]))

    def test_merchant_match_is_case_insensitive(self, classifier):
        assert classifier.classify("WALMART SUPERCENTER #1234", [], "") == ReceiptCategory.GROCERIES

    def test_dining_receipt(self, classifier):
        """Test merchant, item and context signals agreeing on dining."""
        result = classifier.classify_detailed(
            "Starbucks Coffee",
            ["Grande Latte Coffee", "Blueberry Muffin"],
            "STARBUCKS COFFEE\nDine in order #42\nThank you"
        )

        assert result.primary_category == ReceiptCategory.DINING
        assert result.confidence > 0

    def test_no_keywords_falls_back(self, classifier):
        """Test unmatched input yields the fallback category with zero confidence."""
        assert classifier.classify("Zzqx", ["qqq"], "xyz") == ReceiptCategory.MISCELLANEOUS

        result = classifier.classify_detailed("Zzqx", ["qqq"], "xyz")
        assert result.primary_category == ReceiptCategory.MISCELLANEOUS
        assert result.confidence == 0.0
        assert [alt.category for alt in result.alternative_categories] == [
            ReceiptCategory.GROCERIES,
            ReceiptCategory.DINING,
            ReceiptCategory.TRANSPORTATION,
        ]
        assert all(alt.confidence == 0.0 for alt in result.alternative_categories)

    def test_missing_inputs(self, classifier):
        """Test absent merchant, items and text degrade to the fallback."""
        assert classifier.classify(None, None, None) == ReceiptCategory.MISCELLANEOUS
        assert classifier.classify("", [], "") == ReceiptCategory.MISCELLANEOUS
        assert classifier.classify_detailed(None, None, None).confidence == 0.0

    def test_fallback_scores_zero(self, classifier):
        """Test the fallback category never scores on any channel."""
        everything = " ".join(kw for keywords in MERCHANT_PATTERNS.values() for kw in keywords)
        assert classifier.score(ReceiptCategory.MISCELLANEOUS, everything, [everything], everything) == 0.0

    def test_alternatives_ranked(self, classifier):
        """Test alternatives are sorted by non-increasing confidence."""
        result = classifier.classify_detailed(
            "Shell Gas Station Food Mart",
            ["Unleaded Gasoline", "Chips", "Coffee"],
            "Pump 4 gallon price fresh coffee order"
        )

        assert isinstance(result, ClassificationResult)
        assert len(result.alternative_categories) <= 3
        confidences = [result.confidence] + [alt.confidence for alt in result.alternative_categories]
        assert confidences == sorted(confidences, reverse=True)
        assert result.primary_category not in [alt.category for alt in result.alternative_categories]

    def test_score_all_covers_every_category(self, classifier):
        scores = classifier.score_all("Target", ["Milk"], "grocery")
        assert list(scores) == list(ReceiptCategory)

    def test_classify_matches_detailed(self, classifier):
        """Test both entry points agree on the primary category."""
        inputs = [
            ("Home Depot", ["Hammer", "Garden Seeds"], "home improvement"),
            ("CVS Pharmacy", ["Vitamins"], "prescription"),
            ("Unknown", [], ""),
        ]
        for merchant, items, text in inputs:
            detailed = classifier.classify_detailed(merchant, items, text)
            assert classifier.classify(merchant, items, text) == detailed.primary_category


class TestChannelScores:
    """Test cases for the individual signal channels."""

    @pytest.fixture
    def classifier(self):
        return CategoryClassifier()

    def test_merchant_score(self, classifier):
        """Test merchant score counts matching patterns over list size."""
        patterns = MERCHANT_PATTERNS[ReceiptCategory.GROCERIES]
        score = classifier.merchant_score("Whole Foods Market", ReceiptCategory.GROCERIES)
        # "whole foods", "market" and "food"
        assert score == pytest.approx(3 / len(patterns))

    def test_item_score(self, classifier):
        """Test item score is normalized by items times keywords."""
        keywords = ITEM_KEYWORDS[ReceiptCategory.GROCERIES]
        score = classifier.item_score(["MILK", "bread and butter"], ReceiptCategory.GROCERIES)
        assert score == pytest.approx(3 / (2 * len(keywords)))

    def test_item_score_without_items(self, classifier):
        assert classifier.item_score([], ReceiptCategory.GROCERIES) == 0.0
        assert classifier.item_score(None, ReceiptCategory.GROCERIES) == 0.0

    def test_context_score(self, classifier):
        keywords = CONTEXT_KEYWORDS[ReceiptCategory.GROCERIES]
        score = classifier.context_score("Fresh ORGANIC produce", ReceiptCategory.GROCERIES)
        assert score == pytest.approx(3 / len(keywords))

    def test_weighted_combination(self, classifier):
        """Test the channel weights of 0.5, 0.3 and 0.2."""
        category = ReceiptCategory.GROCERIES
        merchant, items, text = "Kroger", ["Eggs"], "dairy checkout"

        expected = (
            0.5 * classifier.merchant_score(merchant, category)
            + 0.3 * classifier.item_score(items, category)
            + 0.2 * classifier.context_score(text, category)
        )
        assert classifier.score(category, merchant, items, text) == pytest.approx(expected)

    def test_scores_are_clamped(self):
        """Test heavy weights cannot push a score above 1."""
        classifier = CategoryClassifier(weights={'merchant': 5.0, 'items': 5.0, 'context': 5.0})
        merchant = " ".join(MERCHANT_PATTERNS[ReceiptCategory.GROCERIES])

        assert classifier.score(ReceiptCategory.GROCERIES, merchant, [], "") == 1.0

    def test_random_inputs_stay_in_range(self, classifier):
        """Test scores stay within [0, 1] for random keyword soup."""
        rng = random.Random(1234)
        vocabulary = sorted({
            keyword
            for table in (MERCHANT_PATTERNS, ITEM_KEYWORDS, CONTEXT_KEYWORDS)
            for keywords in table.values()
            for keyword in keywords
        }) + ["zz", "12.99", "#", "", "TOTAL"]

        def soup(size):
            return " ".join(rng.choice(vocabulary) for _ in range(size))

        for _ in range(200):
            merchant = soup(rng.randint(0, 8))
            items = [soup(rng.randint(0, 5)) for _ in range(rng.randint(0, 6))]
            text = soup(rng.randint(0, 40))

            for category, value in classifier.score_all(merchant, items, text).items():
                assert 0.0 <= value <= 1.0, f"{category} scored {value}"

            result = classifier.classify_detailed(merchant, items, text)
            confidences = [result.confidence] + [alt.confidence for alt in result.alternative_categories]
            assert confidences == sorted(confidences, reverse=True)


class TestTieBreaking:
    """Test cases for equal scores."""

    def test_first_declared_category_wins(self):
        """Test ties go to the category declared first."""
        classifier = CategoryClassifier(
            merchant_patterns=build_table(GROCERIES=("shared",), DINING=("shared",)),
            item_keywords=build_table(),
            context_keywords=build_table(),
        )

        assert classifier.classify("shared", [], "") == ReceiptCategory.GROCERIES

        result = classifier.classify_detailed("shared", [], "")
        assert result.primary_category == ReceiptCategory.GROCERIES
        assert result.alternative_categories[0].category == ReceiptCategory.DINING
        assert result.alternative_categories[0].confidence == result.confidence

    def test_later_category_with_higher_score_wins(self):
        classifier = CategoryClassifier(
            merchant_patterns=build_table(GROCERIES=("shared", "other"), TRAVEL=("shared",)),
            item_keywords=build_table(),
            context_keywords=build_table(),
        )

        assert classifier.classify("shared", [], "") == ReceiptCategory.TRAVEL


class TestKeywordTableValidation:
    """Test cases for configuration errors raised at construction."""

    def test_builtin_tables_are_valid(self):
        CategoryClassifier()

    def test_builtin_tables_are_read_only(self):
        with pytest.raises(TypeError):
            MERCHANT_PATTERNS[ReceiptCategory.GROCERIES] = ("changed",)

    def test_missing_category(self):
        table = build_table()
        del table[ReceiptCategory.TRAVEL]

        with pytest.raises(KeywordTableError) as exc_info:
            CategoryClassifier(merchant_patterns=table)
        assert "TRAVEL" in str(exc_info.value)

    def test_empty_keywords(self):
        with pytest.raises(KeywordTableError):
            CategoryClassifier(item_keywords=build_table(GROCERIES=()))

    def test_fallback_with_keywords(self):
        with pytest.raises(KeywordTableError):
            CategoryClassifier(context_keywords=build_table(MISCELLANEOUS=("misc",)))

    def test_string_instead_of_sequence(self):
        with pytest.raises(KeywordTableError):
            CategoryClassifier(merchant_patterns=build_table(DINING="cafe"))

    def test_blank_keyword(self):
        with pytest.raises(KeywordTableError):
            CategoryClassifier(merchant_patterns=build_table(DINING=("cafe", "  ")))

    def test_invalid_weights(self):
        with pytest.raises(KeywordTableError):
            CategoryClassifier(weights={'merchant': 0.5, 'items': 0.5})
        with pytest.raises(KeywordTableError):
            CategoryClassifier(weights={'merchant': 0.5, 'items': -0.3, 'context': 0.2})

    def test_keywords_normalized_to_lower_case(self):
        classifier = CategoryClassifier(merchant_patterns=build_table(DINING=("Joe's Diner",)))
        assert classifier.classify("JOE'S DINER", [], "") == ReceiptCategory.DINING


class TestReceiptDataCategorization:
    """Test cases for categorizing ReceiptData records."""

    @pytest.fixture
    def classifier(self):
        return CategoryClassifier()

    @pytest.fixture
    def receipt(self):
        return ReceiptData(
            merchant_name="Best Buy",
            items=[ReceiptItem(name="USB-C Charger", price="19.99"), ReceiptItem(name="Laptop Sleeve")],
            raw_text="BEST BUY\nUSB-C Charger 19.99\nLaptop Sleeve 24.99\nProtection plan warranty"
        )

    def test_categorize_receipt(self, classifier, receipt):
        assert classifier.categorize_receipt(receipt) == ReceiptCategory.ELECTRONICS

    def test_detailed_categorization(self, classifier, receipt):
        result = classifier.detailed_categorization(receipt)
        assert result.primary_category == ReceiptCategory.ELECTRONICS
        assert result == classifier.classify_detailed(
            receipt.merchant_name, receipt.item_names, receipt.raw_text
        )


if __name__ == "__main__":
    pytest.main([__file__])

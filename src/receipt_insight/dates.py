"""
Date resolution for receipt text.
Turns free-text date fragments of unknown format into epoch-millisecond
timestamps and formats timestamps back into display strings.
"""

import re
import logging
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Dict, Callable, Sequence, Tuple

from .config import (
    CENTURY_THRESHOLD,
    PLAUSIBILITY_WINDOW_DAYS,
    DEFAULT_DATE_FORMAT,
    UNKNOWN_DATE,
)
from .models import DatePattern, DateParsingInfo

logger = logging.getLogger(__name__)

_ABBREVIATED_MONTHS = r'(Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)'
_FULL_MONTHS = (
    r'(January|February|March|April|May|June|July|August|'
    r'September|October|November|December)'
)

# Order matters: the numeric grammars overlap with each other
DATE_PATTERNS: Tuple[DatePattern, ...] = (
    DatePattern(
        pattern=re.compile(r'\b(\d{1,2})[-/.](\d{1,2})[-/.](\d{2,4})\b'),
        format="flexible",
        description="Numeric date with separators"
    ),
    DatePattern(
        pattern=re.compile(r'\b(\d{4})[-/.](\d{1,2})[-/.](\d{1,2})\b'),
        format="yyyy-MM-dd",
        description="ISO-like date format"
    ),
    DatePattern(
        pattern=re.compile(r'\b(\d{1,2})\s+' + _ABBREVIATED_MONTHS + r'\s+(\d{2,4})\b', re.IGNORECASE),
        format="dd MMM yyyy",
        description="Day month year with abbreviated month"
    ),
    DatePattern(
        pattern=re.compile(r'\b' + _ABBREVIATED_MONTHS + r'\s+(\d{1,2}),?\s+(\d{2,4})\b', re.IGNORECASE),
        format="MMM dd yyyy",
        description="Month day year format"
    ),
    DatePattern(
        pattern=re.compile(r'\b(\d{1,2})-' + _ABBREVIATED_MONTHS + r'-(\d{2,4})\b', re.IGNORECASE),
        format="dd-MMM-yyyy",
        description="Day-month-year with dashes"
    ),
    DatePattern(
        pattern=re.compile(r'\b(\d{1,2})\s+' + _FULL_MONTHS + r'\s+(\d{2,4})\b', re.IGNORECASE),
        format="dd MMMM yyyy",
        description="Day month year with full month name"
    ),
)

ABBREVIATED_MONTH_NUMBERS = {
    'jan': 1, 'feb': 2, 'mar': 3, 'apr': 4, 'may': 5, 'jun': 6,
    'jul': 7, 'aug': 8, 'sep': 9, 'oct': 10, 'nov': 11, 'dec': 12
}

FULL_MONTH_NUMBERS = {
    'january': 1, 'february': 2, 'march': 3, 'april': 4,
    'may': 5, 'june': 6, 'july': 7, 'august': 8,
    'september': 9, 'october': 10, 'november': 11, 'december': 12
}

FULL_MONTH_NAMES = {number: name.capitalize() for name, number in FULL_MONTH_NUMBERS.items()}

# Longest tokens first so "MMMM" is not read as "MM" twice
_FORMAT_TOKENS = re.compile(r"'[^']*'|yyyy|yy|MMMM|MMM|MM|M|dd|d|HH|mm|ss")

EXAMPLE_FORMATS = [
    "17/07/25 -> 17/07/2025",
    "2025-07-17",
    "17 Jul 2025",
    "Jul 17, 2025",
    "17-Jul-25",
    "17 January 2025",
]


class DatePatternError(ValueError):
    """Raised when a date pattern has no interpretation routine."""


class DateResolver:
    """Resolves receipt date fragments into epoch-millisecond timestamps."""

    def __init__(
        self,
        patterns: Optional[Sequence[DatePattern]] = None,
        century_threshold: int = CENTURY_THRESHOLD,
        plausibility_days: int = PLAUSIBILITY_WINDOW_DAYS,
        clock: Optional[Callable[[], datetime]] = None,
        tz: Optional[tzinfo] = None,
    ):
        """Initialize the date resolver.

        Args:
            patterns: Ordered date grammars; defaults to the built-in six
            century_threshold: Two-digit years below this map to 20xx, others to 19xx
            plausibility_days: Half-width of the window ambiguous dates must fall in
            clock: Callable returning the current time
            tz: Timezone of resolved midnights; local time when None

        Raises:
            DatePatternError: If a pattern's format tag has no interpretation routine
        """
        self.logger = logger
        self.patterns = tuple(DATE_PATTERNS if patterns is None else patterns)
        self.century_threshold = century_threshold
        self.plausibility_window = timedelta(days=plausibility_days)
        self.clock = clock or datetime.now
        self.tz = tz

        self._extractors: Dict[str, Callable[[re.Match], Optional[int]]] = {
            "flexible": self._parse_flexible_date,
            "yyyy-MM-dd": self._parse_iso_like_date,
            "dd MMM yyyy": self._parse_day_month_year,
            "MMM dd yyyy": self._parse_month_day_year,
            "dd-MMM-yyyy": self._parse_day_month_year,
            "dd MMMM yyyy": self._parse_day_full_month_year,
        }

        for date_pattern in self.patterns:
            if date_pattern.format not in self._extractors:
                raise DatePatternError(
                    f"No interpretation routine for date format '{date_pattern.format}' "
                    f"({date_pattern.description})"
                )

    def resolve(self, text: Optional[str]) -> Optional[int]:
        """Resolve a date fragment to a timestamp.

        The fragment may be embedded in surrounding text. Grammars are tried
        in priority order and the first accepted date wins.

        Args:
            text: Free text containing a date

        Returns:
            Epoch milliseconds of the date's midnight, or None if nothing matched
        """
        if text is None or not text.strip():
            self.logger.debug("Date string is empty")
            return None

        candidate_text = text.strip()

        for date_pattern in self.patterns:
            match = date_pattern.pattern.search(candidate_text)
            if not match:
                continue

            try:
                timestamp = self._extractors[date_pattern.format](match)
            except (ValueError, OverflowError, OSError) as e:
                self.logger.warning(
                    f"Failed to parse date with pattern {date_pattern.description}: {candidate_text!r}: {e}"
                )
                continue

            if timestamp is not None:
                self.logger.debug(f"Parsed date {candidate_text!r} using {date_pattern.description}")
                return timestamp

        self.logger.debug(f"No pattern matched for date: {candidate_text!r}")
        return None

    def normalize_year(self, year: int) -> int:
        """Expand a two-digit year to four digits.

        Args:
            year: Year as captured from the text

        Returns:
            Four-digit year
        """
        if year >= 1900:
            return year
        if year < self.century_threshold:
            return 2000 + year
        return 1900 + year

    def create_date(self, day: int, month: int, year: int) -> Optional[int]:
        """Build a timestamp for a calendar day, rejecting impossible dates.

        Args:
            day: Day of month
            month: Month number (1-12)
            year: Four-digit year

        Returns:
            Epoch milliseconds of midnight on that day, or None if invalid
        """
        if not 1 <= month <= 12 or not 1 <= day <= 31:
            return None

        try:
            constructed = datetime(year, month, day, tzinfo=self.tz)
        except ValueError:
            return None

        # Reject anything the calendar would have rolled over
        if (constructed.day, constructed.month, constructed.year) != (day, month, year):
            return None

        return int(constructed.timestamp()) * 1000

    def is_plausible(self, timestamp: int) -> bool:
        """Check that a timestamp lies within the receipt plausibility window."""
        now_ms = int(self.clock().timestamp() * 1000)
        window_ms = int(self.plausibility_window.total_seconds() * 1000)
        return now_ms - window_ms < timestamp < now_ms + window_ms

    def _parse_flexible_date(self, match: re.Match) -> Optional[int]:
        """Parse DD/MM/YYYY or MM/DD/YYYY, preferring day-first."""
        first, second = int(match.group(1)), int(match.group(2))
        year = self.normalize_year(int(match.group(3)))

        for day, month in ((first, second), (second, first)):
            timestamp = self.create_date(day, month, year)
            if timestamp is not None and self.is_plausible(timestamp):
                return timestamp
        return None

    def _parse_iso_like_date(self, match: re.Match) -> Optional[int]:
        year, month, day = (int(group) for group in match.groups())
        return self.create_date(day, month, year)

    def _parse_day_month_year(self, match: re.Match) -> Optional[int]:
        month = ABBREVIATED_MONTH_NUMBERS.get(match.group(2).lower())
        if month is None:
            return None
        return self.create_date(int(match.group(1)), month, self.normalize_year(int(match.group(3))))

    def _parse_month_day_year(self, match: re.Match) -> Optional[int]:
        month = ABBREVIATED_MONTH_NUMBERS.get(match.group(1).lower())
        if month is None:
            return None
        return self.create_date(int(match.group(2)), month, self.normalize_year(int(match.group(3))))

    def _parse_day_full_month_year(self, match: re.Match) -> Optional[int]:
        month = FULL_MONTH_NUMBERS.get(match.group(2).lower())
        if month is None:
            return None
        return self.create_date(int(match.group(1)), month, self.normalize_year(int(match.group(3))))

    def format(self, timestamp: Optional[int], pattern: str = DEFAULT_DATE_FORMAT) -> str:
        """Format a timestamp for display.

        Args:
            timestamp: Epoch milliseconds
            pattern: Layout using dd, d, MM, M, MMM, MMMM, yyyy, yy, HH, mm, ss;
                text in single quotes is copied literally

        Returns:
            Formatted date, or "Unknown Date" if formatting fails
        """
        try:
            moment = datetime.fromtimestamp(timestamp / 1000, tz=self.tz)
            return _FORMAT_TOKENS.sub(lambda m: self._render_token(m.group(0), moment), pattern)
        except (TypeError, ValueError, OverflowError, OSError) as e:
            self.logger.warning(f"Failed to format date {timestamp!r} with {pattern!r}: {e}")
            return UNKNOWN_DATE

    @staticmethod
    def _render_token(token: str, moment: datetime) -> str:
        if token.startswith("'"):
            # '' is an escaped quote
            return token[1:-1] or "'"

        month_name = FULL_MONTH_NAMES[moment.month]
        renderings = {
            'yyyy': f"{moment.year:04d}",
            'yy': f"{moment.year % 100:02d}",
            'MMMM': month_name,
            'MMM': month_name[:3],
            'MM': f"{moment.month:02d}",
            'M': str(moment.month),
            'dd': f"{moment.day:02d}",
            'd': str(moment.day),
            'HH': f"{moment.hour:02d}",
            'mm': f"{moment.minute:02d}",
            'ss': f"{moment.second:02d}",
        }
        return renderings[token]

    def get_parsing_info(self) -> DateParsingInfo:
        """Describe the grammars this resolver understands."""
        return DateParsingInfo(
            supported_patterns=len(self.patterns),
            year_normalization_threshold=self.century_threshold,
            supported_formats=[p.description for p in self.patterns],
            example_formats=list(EXAMPLE_FORMATS)
        )

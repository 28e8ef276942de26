from __future__ import annotations

import logging
import re
from typing import List, Optional, Union

from .errors import ExtractionFailure
from .models import UNAVAILABLE, MetricRecord, MetricValue, Provider, empty_record
from .providers import ProviderRules, get_rules

logger = logging.getLogger(__name__)

_NUMBER_PREFIX = re.compile(r"\s*([-+]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][-+]?\d+)?)")


def parse_number(text: str) -> float:
    """Read a displayed number such as "1,234.56".

    Thousands separators are dropped and the longest leading numeric prefix
    is used, so "12.5%" reads as 12.5 and text with no digits reads as 0.0."""
    match = _NUMBER_PREFIX.match(text.replace(",", ""))
    return float(match.group(1)) if match else 0.0


def parse_rank(text: str) -> Union[int, float]:
    """Read a rank such as "#42".

    Whole numbers come back as int; anything else, "7.5" or an overflowing
    "1e400", keeps its float value."""
    text = text.strip()
    if text.startswith("#"):
        text = text[1:]
    value = parse_number(text)
    return int(value) if value.is_integer() else value


def _read_metric(name: str, text: Optional[str]) -> MetricValue:
    # An empty capture and a bare "0" both count as nothing captured.
    if not text or text == "0":
        return UNAVAILABLE
    try:
        if name == "rank":
            return parse_rank(text)
        return parse_number(text)
    except (OverflowError, ValueError):
        return UNAVAILABLE


def extract_table_body(page: str, provider: Union[Provider, str]) -> str:
    """Return the price table body of a fetched page.

    The match is greedy: on a page with more than one table body the result
    spans from the first opening tag to the last closing tag."""
    rules = get_rules(provider)
    match = rules.table_pattern.search(page or "")
    if match is None or not match.group(1):
        raise ExtractionFailure(f"No table body found in page from {rules.base_url}")
    return match.group(1)


def split_rows(table_body: str, rules: ProviderRules) -> List[str]:
    """Break a table body into row fragments, in document order."""
    # Rows are matched line by line, so each row end starts a new line.
    text = table_body.replace(rules.row_end, rules.row_end + "\n")
    return [m.group(0) for m in rules.row_pattern.finditer(text)]


def parse_rows(table_body: str, provider: Union[Provider, str]) -> MetricRecord:
    """Map the leading rows of a table body to metrics by position.

    Row N always feeds the metric(s) of field rule N; nothing checks that the
    row actually holds that metric, so a reordered page assigns values to the
    wrong names. Rows past the last rule are ignored and missing rows leave
    their metrics at the zero defaults."""
    rules = get_rules(provider)
    record = empty_record()
    rows = split_rows(table_body, rules)[: rules.row_count]

    for rule, row in zip(rules.field_rules, rows):
        match = rule.pattern.search(row)
        for group, name in enumerate(rule.metrics, start=1):
            record[name] = _read_metric(name, match.group(group) if match else None)

    logger.debug("Parsed %d of %d rows: %r", len(rows), rules.row_count, record)
    return record

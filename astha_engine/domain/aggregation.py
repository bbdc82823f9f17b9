"""Transaction aggregation by user and destination country"""

from typing import Dict, Iterable
from astha_engine.domain.models import (
    CHANNEL_ALL,
    CHANNEL_POS,
    AggregationResult,
    CountryAggregate,
    Transaction,
    UserAggregate,
)
from astha_engine.utils.date_utils import period_key as period_key_of


def matches_channel(transaction: Transaction, channel_filter: str) -> bool:
    """True when the filter is the 'all' sentinel or names the transaction's channel"""
    if channel_filter.lower() == CHANNEL_ALL:
        return True
    return transaction.channel == channel_filter


def aggregate(
    transactions: Iterable[Transaction],
    period_key: str,
    channel_filter: str = CHANNEL_ALL,
) -> AggregationResult:
    """
    Group one period's transactions per user and per country.

    Requirements:
    - Only transactions in `period_key` (YYYY-MM) and matching `channel_filter`
    - Users and countries keep the order in which they were first seen
    - Per-user country hit counters keep first-seen order too, which is what
      breaks ties when picking a user's top country
    - Unknown period or filter simply yields empty totals
    """
    per_user: Dict[str, UserAggregate] = {}
    per_country: Dict[str, CountryAggregate] = {}
    period_total = 0

    for txn in transactions:
        if period_key_of(txn.timestamp) != period_key or not matches_channel(txn, channel_filter):
            continue

        is_pos = txn.channel == CHANNEL_POS

        user = per_user.setdefault(txn.user_id, UserAggregate(user_id=txn.user_id))
        user.total += txn.amount
        if is_pos:
            user.pos_total += txn.amount
        user.country_hits[txn.country] = user.country_hits.get(txn.country, 0) + 1

        country = per_country.setdefault(txn.country, CountryAggregate(code=txn.country))
        if is_pos:
            country.pos_total += txn.amount
        else:
            country.ecom_total += txn.amount
        country.total += txn.amount

        period_total += txn.amount

    return AggregationResult(per_user=per_user, per_country=per_country, period_total=period_total)

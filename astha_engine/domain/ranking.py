"""Leaderboard ranking, badges and reward tiers"""

from typing import Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
from astha_engine.domain.aggregation import aggregate
from astha_engine.domain.exceptions import InvalidTierLadderError
from astha_engine.domain.models import (
    AggregateRow,
    Leaderboard,
    Tier,
    TierProgress,
    Transaction,
    User,
    UserAggregate,
)

BadgePredicate = Callable[[UserAggregate, float], bool]
BadgeRule = Tuple[str, BadgePredicate]


class TierLadder:
    """Ordered reward tiers; the first tier is the floor every total reaches"""

    def __init__(self, tiers: Sequence[Tier]):
        if not tiers:
            raise InvalidTierLadderError("Tier ladder needs at least one tier")
        for lower, upper in zip(tiers, tiers[1:]):
            if upper.threshold <= lower.threshold:
                raise InvalidTierLadderError(
                    f"Tier thresholds must be strictly increasing: "
                    f"{lower.name}={lower.threshold}, {upper.name}={upper.threshold}"
                )
        self.tiers: Tuple[Tier, ...] = tuple(tiers)

    @property
    def floor(self) -> Tier:
        return self.tiers[0]

    def __iter__(self):
        return iter(self.tiers)

    def __len__(self) -> int:
        return len(self.tiers)


# Reward tiers scaled for BD cardholders (monthly totals in USD)
DEFAULT_LADDER = TierLadder(
    [
        Tier("Explorer", 100),
        Tier("Voyager", 500),
        Tier("Globetrotter", 1200),
        Tier("Platinum Traveller", 2000),
    ]
)

HIGH_ROLLER_TOTAL = 1000
POS_PRO_FRACTION = 0.6


def badge_rules(high_value_country: str = "SA", high_value_badge: str = "KSA Shopper") -> List[BadgeRule]:
    """Badge table in display order; each rule is evaluated on its own"""
    return [
        ("High Roller", lambda agg, pos_fraction: agg.total > HIGH_ROLLER_TOTAL),
        ("POS Pro", lambda agg, pos_fraction: pos_fraction > POS_PRO_FRACTION),
        (high_value_badge, lambda agg, pos_fraction: agg.top_country == high_value_country),
    ]


DEFAULT_BADGE_RULES = badge_rules()


def tier_for(total: float, ladder: TierLadder = DEFAULT_LADDER) -> TierProgress:
    """
    Resolve the current tier and the distance to the next one.

    - current: last tier whose threshold <= total (floor tier below the first threshold)
    - next: first tier whose threshold > total, None at the top of the ladder
    - remaining: max(0, next.threshold - total), 0 when there is no next tier
    """
    current = ladder.floor.name
    next_tier: Optional[Tier] = None
    for tier in ladder:
        if total >= tier.threshold:
            current = tier.name
        else:
            next_tier = tier
            break

    remaining = max(0, next_tier.threshold - total) if next_tier else 0
    return TierProgress(current=current, next=next_tier, remaining=remaining)


def pos_fraction(agg: UserAggregate) -> float:
    """Share of the user's spend made at POS terminals (0 when nothing was spent)"""
    return agg.pos_total / agg.total if agg.total > 0 else 0.0


def rank(
    per_user: Mapping[str, UserAggregate],
    users: Optional[Mapping[str, User]] = None,
    ladder: TierLadder = DEFAULT_LADDER,
    rules: Sequence[BadgeRule] = DEFAULT_BADGE_RULES,
) -> List[AggregateRow]:
    """
    Rank users by total spend, highest first.

    sorted() is stable, so users with equal totals keep the aggregator's
    enumeration order. Ranks are 1..N without gaps.
    """
    users = users or {}
    ordered = sorted(per_user.values(), key=lambda agg: agg.total, reverse=True)

    rows = []
    for position, agg in enumerate(ordered, start=1):
        fraction = pos_fraction(agg)
        user = users.get(agg.user_id)
        rows.append(
            AggregateRow(
                rank=position,
                user_id=agg.user_id,
                alias=user.alias if user else agg.user_id,
                total=agg.total,
                top_country=agg.top_country,
                pos_fraction=fraction,
                badges=tuple(label for label, applies in rules if applies(agg, fraction)),
                tier=tier_for(agg.total, ladder).current,
            )
        )
    return rows


def build_leaderboard(
    transactions: Iterable[Transaction],
    period_key: str,
    channel_filter: str,
    users: Iterable[User] = (),
    ladder: TierLadder = DEFAULT_LADDER,
    rules: Sequence[BadgeRule] = DEFAULT_BADGE_RULES,
) -> Leaderboard:
    """
    Main entry point: aggregate a period and rank its users.

    Returns rows, per-country totals, the period total and the user count.
    """
    result = aggregate(transactions, period_key, channel_filter)
    users_by_id: Dict[str, User] = {user.id: user for user in users}

    return Leaderboard(
        rows=rank(result.per_user, users_by_id, ladder, rules),
        countries=list(result.per_country.values()),
        period_total=result.period_total,
        user_count=len(result.per_user),
    )

"""GET /v1/leaderboard and /v1/tiers - cross-border spend leaderboard and reward tiers"""

import time
from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from astha_engine.api.dependencies import SpendDataset, get_dataset, get_request_id
from astha_engine.api.v1.schemas import (
    CountryTotals,
    LeaderboardResponse,
    LeaderboardRow,
    PeriodsResponse,
    TierProgressResponse,
    TierSchema,
)
from astha_engine.config import settings
from astha_engine.domain.models import CHANNEL_ALL
from astha_engine.domain.ranking import DEFAULT_LADDER, badge_rules, build_leaderboard, tier_for
from astha_engine.infrastructure.observability.logging import log_leaderboard_query
from astha_engine.infrastructure.observability.metrics import record_leaderboard_query

router = APIRouter()

BADGE_RULES = badge_rules(settings.high_value_country, settings.high_value_badge)


@router.get("/leaderboard", response_model=LeaderboardResponse)
def get_leaderboard(
    period: Optional[str] = Query(None, description="Period key YYYY-MM; defaults to the latest period"),
    channel: str = Query(CHANNEL_ALL, description="all, POS or E-COM"),
    dataset: SpendDataset = Depends(get_dataset),
    request_id: str = Depends(get_request_id),
):
    """
    Rank cardholders by cross-border spend for a period and channel.

    Unknown periods or channels return an empty leaderboard.
    """
    start_time = time.time()
    period = period or (dataset.periods[-1] if dataset.periods else "")

    board = build_leaderboard(dataset.transactions, period, channel, dataset.users, rules=BADGE_RULES)

    duration_ms = (time.time() - start_time) * 1000
    record_leaderboard_query(channel)
    log_leaderboard_query(request_id, period, channel, board.user_count, duration_ms)

    return LeaderboardResponse(
        period=period,
        channel=channel,
        rows=[
            LeaderboardRow(
                rank=row.rank,
                user_id=row.user_id,
                alias=row.alias,
                total=row.total,
                top_country=row.top_country,
                pos_fraction=row.pos_fraction,
                badges=list(row.badges),
                tier=row.tier,
            )
            for row in board.rows
        ],
        countries=[
            CountryTotals(code=c.code, pos_total=c.pos_total, ecom_total=c.ecom_total, total=c.total)
            for c in board.countries
        ],
        period_total=board.period_total,
        user_count=board.user_count,
    )


@router.get("/leaderboard/periods", response_model=PeriodsResponse)
def get_periods(dataset: SpendDataset = Depends(get_dataset)):
    """List the periods covered by the dataset, oldest first"""
    return PeriodsResponse(
        periods=dataset.periods,
        latest=dataset.periods[-1] if dataset.periods else None,
    )


@router.get("/tiers", response_model=List[TierSchema])
def get_tiers():
    """Reward tier ladder in ascending order"""
    return [TierSchema(name=t.name, threshold=t.threshold) for t in DEFAULT_LADDER]


@router.get("/tiers/progress", response_model=TierProgressResponse)
def get_tier_progress(total: float = Query(..., ge=0, description="Spend total to place on the ladder")):
    progress = tier_for(total)
    next_tier = progress.next
    return TierProgressResponse(
        total=total,
        current=progress.current,
        next=TierSchema(name=next_tier.name, threshold=next_tier.threshold) if next_tier else None,
        remaining=progress.remaining,
    )

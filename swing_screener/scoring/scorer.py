"""
Swing-trading scorer: converts one ``Snapshot`` into a bounded score, a
discrete signal, and a per-rule breakdown.

Score formula (additive, base 50, clamped to 0–100)
---------------------------------------------------
    RSI bracket (first match wins):
        30 <= rsi <= 70   +20   healthy momentum range
        rsi < 30          +30   oversold
        otherwise         -20   overbought (also any rsi that compares false)

    Trend (independent):
        price > sma20     +15
        price > sma50     +10
        sma20 > sma50     +15   short-term average above long-term

    Liquidity (first match wins):
        volume > 1,000,000  +10
        volume >   500,000   +5

    Volatility:
        |change_percent| > 2.0   +10

The unclamped sum ranges from 30 to 150; the clamp keeps the published score
inside [0, 100] regardless.

Signal determination (if/elif chain on the clamped score, in order)
-------------------------------------------------------------------
    1. STRONG_BUY : score >= 80
    2. BUY        : score >= 65
    3. SELL       : score <= 35
    4. WEAK       : score <= 50
    5. HOLD       : everything else, including (50, 65)

All functions here are pure: no I/O, no randomness, no shared state.
"""

from __future__ import annotations

from dataclasses import dataclass

from swing_screener.models.result import ScoreResult
from swing_screener.models.snapshot import Snapshot
from swing_screener.taxonomy.signal_taxonomy import Signal

BASE_SCORE = 50
MIN_SCORE = 0
MAX_SCORE = 100

RSI_OVERSOLD = 30.0
RSI_OVERBOUGHT = 70.0
RSI_HEALTHY_POINTS = 20
RSI_OVERSOLD_POINTS = 30
RSI_OVERBOUGHT_POINTS = -20

SMA20_POINTS = 15
SMA50_POINTS = 10
TREND_POINTS = 15

HIGH_VOLUME = 1_000_000
MEDIUM_VOLUME = 500_000
HIGH_VOLUME_POINTS = 10
MEDIUM_VOLUME_POINTS = 5

VOLATILITY_PCT = 2.0
VOLATILITY_POINTS = 10

STRONG_BUY_THRESHOLD = 80
BUY_THRESHOLD = 65
SELL_THRESHOLD = 35
WEAK_THRESHOLD = 50


@dataclass(frozen=True)
class ScoreComponents:
    """Points contributed by each scoring rule for one snapshot.

    Attributes:
        rsi_points:        +20, +30 or -20 from the RSI bracket.
        sma20_points:      15 if price > sma20 else 0.
        sma50_points:      10 if price > sma50 else 0.
        trend_points:      15 if sma20 > sma50 else 0.
        volume_points:     10, 5 or 0 from the liquidity bracket.
        volatility_points: 10 if |change_percent| > 2 else 0.
    """

    rsi_points:        int
    sma20_points:      int
    sma50_points:      int
    trend_points:      int
    volume_points:     int
    volatility_points: int

    @property
    def raw_total(self) -> int:
        """Unclamped sum including the base score."""
        return (
            BASE_SCORE
            + self.rsi_points
            + self.sma20_points
            + self.sma50_points
            + self.trend_points
            + self.volume_points
            + self.volatility_points
        )

    @property
    def total(self) -> int:
        """Score clamped to [0, 100]."""
        return _clamp(self.raw_total, MIN_SCORE, MAX_SCORE)


def compute_components(snapshot: Snapshot) -> ScoreComponents:
    """Apply every scoring rule to ``snapshot`` and return the breakdown.

    Out-of-range or NaN ``rsi`` values never raise; they fail both range
    comparisons and land in the overbought branch.
    """
    rsi = snapshot.rsi
    if RSI_OVERSOLD <= rsi <= RSI_OVERBOUGHT:
        rsi_points = RSI_HEALTHY_POINTS
    elif rsi < RSI_OVERSOLD:
        rsi_points = RSI_OVERSOLD_POINTS
    else:
        rsi_points = RSI_OVERBOUGHT_POINTS

    sma20_points = SMA20_POINTS if snapshot.price > snapshot.sma20 else 0
    sma50_points = SMA50_POINTS if snapshot.price > snapshot.sma50 else 0
    trend_points = TREND_POINTS if snapshot.sma20 > snapshot.sma50 else 0

    if snapshot.volume > HIGH_VOLUME:
        volume_points = HIGH_VOLUME_POINTS
    elif snapshot.volume > MEDIUM_VOLUME:
        volume_points = MEDIUM_VOLUME_POINTS
    else:
        volume_points = 0

    volatility_points = (
        VOLATILITY_POINTS if abs(snapshot.change_percent) > VOLATILITY_PCT else 0
    )

    return ScoreComponents(
        rsi_points=rsi_points,
        sma20_points=sma20_points,
        sma50_points=sma50_points,
        trend_points=trend_points,
        volume_points=volume_points,
        volatility_points=volatility_points,
    )


def determine_signal(score: int) -> Signal:
    """Map a clamped score to its trading signal.

    Rules (evaluated in order, first match wins):
        1. STRONG_BUY : score >= 80
        2. BUY        : score >= 65
        3. SELL       : score <= 35
        4. WEAK       : score <= 50
        5. HOLD       : everything else

    A score strictly between 50 and 65 matches none of the four thresholds
    and therefore stays HOLD.
    """
    if score >= STRONG_BUY_THRESHOLD:
        return Signal.STRONG_BUY
    if score >= BUY_THRESHOLD:
        return Signal.BUY
    if score <= SELL_THRESHOLD:
        return Signal.SELL
    if score <= WEAK_THRESHOLD:
        return Signal.WEAK
    return Signal.HOLD


def evaluate(snapshot: Snapshot) -> ScoreResult:
    """Score one snapshot.

    Args:
        snapshot: Well-formed market snapshot.

    Returns:
        ``ScoreResult`` with the clamped score and the signal derived from it.
    """
    score = compute_components(snapshot).total
    return ScoreResult(
        symbol=snapshot.symbol,
        score=score,
        signal=determine_signal(score),
    )


def build_reasoning(snapshot: Snapshot, components: ScoreComponents) -> str:
    """Assemble a human-readable explanation of a snapshot's score.

    Returns a semicolon-separated list of tokens such as:
        "Oversold RSI (24.0); Price above SMA 20; Moderate volume (600.0K)"

    Display only: the text never influences the score.
    """
    reasons: list[str] = []

    if components.rsi_points == RSI_OVERSOLD_POINTS:
        reasons.append(f"Oversold RSI ({snapshot.rsi:.1f})")
    elif components.rsi_points == RSI_HEALTHY_POINTS:
        reasons.append(f"RSI in swing range ({snapshot.rsi:.1f})")
    else:
        reasons.append(f"Overbought RSI ({snapshot.rsi:.1f})")

    if components.sma20_points and components.sma50_points:
        reasons.append("Price above SMA 20 and SMA 50")
    elif components.sma20_points:
        reasons.append("Price above SMA 20")
    elif components.sma50_points:
        reasons.append("Price above SMA 50")
    else:
        reasons.append("Price below both moving averages")

    if components.trend_points:
        reasons.append("Uptrend (SMA 20 > SMA 50)")

    if components.volume_points == HIGH_VOLUME_POINTS:
        reasons.append(f"High volume ({snapshot.volume / 1e6:.1f}M)")
    elif components.volume_points == MEDIUM_VOLUME_POINTS:
        reasons.append(f"Moderate volume ({snapshot.volume / 1e3:.1f}K)")
    else:
        reasons.append("Thin volume")

    if components.volatility_points:
        reasons.append(f"Active mover ({snapshot.change_percent:+.2f}%)")

    return "; ".join(reasons)


# ── Helper ────────────────────────────────────────────────────────────────────

def _clamp(value: int, lo: int, hi: int) -> int:
    return max(lo, min(hi, value))

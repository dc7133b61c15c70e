"""Built-in datasets for the background-grid figures.

Deterministic generators (fixed seed) that stand in for the flat files
the figures are normally drawn from. Every call returns an identical,
freshly allocated DataFrame that satisfies the matching
:class:`~gridfigs.data.schemas.TableSchema`.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from gridfigs.config.defaults import DATASET_SEED

# ---------------------------------------------------------------------------
# Stock prices
# ---------------------------------------------------------------------------

# ticker -> (closing price on the first week, price multiple after five years)
_STOCK_PROFILES: dict[str, tuple[float, float]] = {
    "AAPL": (80.2, 1.80),
    "FB": (27.1, 5.60),
    "GOOG": (285.2, 3.40),
    "MSFT": (28.5, 2.50),
}

_STOCK_START = "2012-06-01"
_STOCK_END = "2017-06-30"
_WEEKLY_VOLATILITY = 0.03


def stock_prices(seed: int = DATASET_SEED) -> pd.DataFrame:
    """Weekly closing prices of four tech stocks, June 2012 to June 2017.

    Returns
    -------
    DataFrame with columns ``date``, ``ticker``, ``price``, ordered by
    ticker then date.
    """
    rng = np.random.default_rng(seed)
    dates = pd.date_range(_STOCK_START, _STOCK_END, freq="W-FRI")
    n_weeks = len(dates)

    frames = []
    for ticker, (start, multiple) in _STOCK_PROFILES.items():
        drift = np.log(multiple) / (n_weeks - 1)
        steps = rng.normal(drift, _WEEKLY_VOLATILITY, n_weeks - 1)
        log_path = np.concatenate([[0.0], np.cumsum(steps)])
        frames.append(
            pd.DataFrame(
                {
                    "date": dates,
                    "ticker": ticker,
                    "price": np.round(start * np.exp(log_path), 2),
                }
            )
        )
    return pd.concat(frames, ignore_index=True)


# ---------------------------------------------------------------------------
# Athletes
# ---------------------------------------------------------------------------

# (sex, sport, count, mean height cm, sd height, mean % body fat, sd % body fat)
_ATHLETE_PROFILES: list[tuple[str, str, int, float, float, float, float]] = [
    ("female", "basketball", 13, 182.0, 8.0, 13.5, 3.0),
    ("female", "field", 7, 172.5, 6.0, 19.0, 5.0),
    ("female", "gymnastics", 4, 153.8, 4.0, 10.5, 2.0),
    ("female", "netball", 23, 176.1, 5.0, 18.9, 3.0),
    ("female", "rowing", 22, 178.9, 6.0, 14.1, 3.0),
    ("female", "swimming", 9, 173.2, 5.0, 14.2, 3.0),
    ("female", "tennis", 7, 174.8, 7.0, 16.3, 4.0),
    ("female", "track (400m)", 11, 169.9, 6.0, 11.0, 2.5),
    ("female", "track (sprint)", 4, 168.1, 5.0, 12.0, 2.5),
    ("male", "basketball", 12, 197.4, 8.0, 9.5, 2.0),
    ("male", "field", 12, 185.3, 6.0, 13.0, 5.0),
    ("male", "rowing", 15, 187.5, 5.0, 9.3, 2.0),
    ("male", "swimming", 13, 185.6, 5.0, 8.8, 2.0),
    ("male", "tennis", 4, 183.6, 6.0, 8.5, 2.0),
    ("male", "track (400m)", 18, 179.2, 5.0, 7.0, 1.5),
    ("male", "track (sprint)", 11, 179.0, 6.0, 7.5, 1.5),
    ("male", "water polo", 17, 188.7, 6.0, 10.6, 2.0),
]

_MIN_BODY_FAT = 4.0

# Raw sport label -> sport shown in the figures
SPORT_GROUPS: dict[str, str] = {
    "basketball": "basketball",
    "field": "field",
    "gymnastics": "gymnastics",
    "netball": "netball",
    "rowing": "rowing",
    "swimming": "swimming",
    "tennis": "tennis",
    "track (400m)": "track",
    "track (sprint)": "track",
    "water polo": "water polo",
}


def athletes(seed: int = DATASET_SEED) -> pd.DataFrame:
    """Height and percent body fat of male and female professional athletes.

    Returns
    -------
    DataFrame with columns ``sex``, ``sport``, ``height`` (cm) and
    ``pcBfat`` (percent body fat).
    """
    rng = np.random.default_rng(seed)
    rows = []
    for sex, sport, count, height, height_sd, bfat, bfat_sd in _ATHLETE_PROFILES:
        heights = rng.normal(height, height_sd, count)
        fats = np.maximum(rng.normal(bfat, bfat_sd, count), _MIN_BODY_FAT)
        for h, f in zip(heights, fats, strict=True):
            rows.append(
                {
                    "sex": sex,
                    "sport": sport,
                    "height": round(float(h), 1),
                    "pcBfat": round(float(f), 2),
                }
            )
    return pd.DataFrame(rows)


# ---------------------------------------------------------------------------
# Protein correlation pairs
# ---------------------------------------------------------------------------

_N_SAME_COMPLEX = 60
_N_DIFFERENT_COMPLEX = 180
_CORRELATION_RANGE = (-0.35, 0.98)


def protein_pairs(seed: int = DATASET_SEED) -> pd.DataFrame:
    """Abundance correlations of protein pairs under two conditions.

    Pairs whose members sit in the same protein complex correlate strongly
    in both conditions; other pairs scatter around zero.

    Returns
    -------
    DataFrame with columns ``pair``, ``class``, ``cor_a`` and ``cor_b``.
    """
    rng = np.random.default_rng(seed)
    lo, hi = _CORRELATION_RANGE

    same = rng.normal(0.70, 0.12, _N_SAME_COMPLEX)
    different = rng.normal(0.10, 0.15, _N_DIFFERENT_COMPLEX)
    cor_a = np.clip(np.concatenate([same, different]), lo, hi)
    cor_b = np.clip(cor_a + rng.normal(0.0, 0.08, cor_a.size), lo, hi)
    classes = ["same complex"] * _N_SAME_COMPLEX + [
        "different complex"
    ] * _N_DIFFERENT_COMPLEX

    return pd.DataFrame(
        {
            "pair": [f"pair_{i:03d}" for i in range(cor_a.size)],
            "class": classes,
            "cor_a": np.round(cor_a, 3),
            "cor_b": np.round(cor_b, 3),
        }
    )

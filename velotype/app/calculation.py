from typing import Sequence
import math

from velotype.app.state import CharCounts

LIVE_MIN_SECONDS = 0.5
CHARS_PER_WORD = 5.0


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def wpm(chars: int, seconds: float) -> float:
    """WPM = (chars / 5) * (60 / seconds). Zero for a non-positive duration."""
    if seconds <= 0:
        return 0.0
    return (chars / CHARS_PER_WORD) * (60.0 / seconds)


def accuracy(counts: CharCounts) -> float:
    # missed letters are not part of the denominator
    total = counts.typed
    if total == 0:
        return 100.0
    return 100.0 * counts.correct / total


# -------- live (cumulative + in-progress word) --------
def live_wpm(cumulative: CharCounts, in_progress: CharCounts, seconds: float) -> float:
    if seconds < LIVE_MIN_SECONDS:
        return 0.0
    return wpm(cumulative.correct + in_progress.correct, seconds)


def live_raw_wpm(cumulative: CharCounts, in_progress: CharCounts, seconds: float) -> float:
    if seconds < LIVE_MIN_SECONDS:
        return 0.0
    return wpm(cumulative.typed + in_progress.typed, seconds)


def live_accuracy(cumulative: CharCounts, in_progress: CharCounts) -> float:
    return accuracy(cumulative + in_progress)


# -------- final (finalized words only) --------
def final_wpm(cumulative: CharCounts, seconds: float) -> int:
    return round_half_up(wpm(cumulative.correct, seconds))


def final_raw_wpm(cumulative: CharCounts, seconds: float) -> int:
    return round_half_up(wpm(cumulative.typed, seconds))


def final_accuracy(cumulative: CharCounts) -> int:
    return round_half_up(accuracy(cumulative))


def consistency(samples: Sequence[float]) -> int:
    """
    Steadiness of the sampled WPM series, 0..100.
    100 - coefficient of variation (population stddev / mean, in percent).
    """
    n = len(samples)
    if n < 2:
        return 100
    mean = sum(samples) / n
    variance = sum((v - mean) ** 2 for v in samples) / n
    std_dev = math.sqrt(variance)
    cv = (std_dev / mean) * 100.0 if mean > 0 else 0.0
    return max(0, round_half_up(100.0 - cv))

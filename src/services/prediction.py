"""
Forward prediction of the next period and ovulation.
"""
from datetime import date, timedelta

from src.models.cycle import Prediction
from src.services.constants import LUTEAL_PHASE_DAYS

def predict_next(last_episode_start: date, avg_cycle_length: int) -> Prediction:
    """
    Predict the next period and ovulation from the last period start.

    Ovulation is placed a fixed luteal length before the next period,
    whatever the cycle length.

    Args:
        last_episode_start: First day of the most recent period
        avg_cycle_length: Cycle length in days to project forward

    Returns:
        Prediction with next period and next ovulation dates

    Example:
        >>> p = predict_next(date(2024, 1, 1), 28)
        >>> p.next_period, p.next_ovulation
        (datetime.date(2024, 1, 29), datetime.date(2024, 1, 15))
    """
    next_period = last_episode_start + timedelta(days=avg_cycle_length)
    return Prediction(
        next_period=next_period,
        next_ovulation=next_period - timedelta(days=LUTEAL_PHASE_DAYS)
    )

"""
Derived cycle models returned by the analyzer services.
"""
from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field

from src.models.entry import Symptom

class CyclePhase(str, Enum):
    """
    Model-derived position of a calendar date within the cycle.
    """
    MENSTRUAL = "menstrual"
    FOLLICULAR = "follicular"
    OVULATORY = "ovulatory"
    LUTEAL = "luteal"
    UNKNOWN = "unknown"

class Episode(BaseModel):
    """
    A maximal run of consecutive flow days.
    """
    start_date: date
    end_date: date

    @property
    def duration(self) -> int:
        """Inclusive length in days."""
        return (self.end_date - self.start_date).days + 1

class SymptomCount(BaseModel):
    symptom: Symptom
    count: int

class CycleStatistics(BaseModel):
    """
    Historical averages derived from logged entries.

    Averages are ``None`` when there is not enough data, never 0.
    """
    average_cycle_length: Optional[int] = None
    average_period_duration: Optional[int] = None
    predicted_next_period: Optional[date] = None
    predicted_next_ovulation: Optional[date] = None
    common_symptoms: List[SymptomCount] = Field(default_factory=list)
    total_episodes: int = 0

class ManualOverride(BaseModel):
    """
    User-entered averages that replace computed ones for prediction.
    """
    avg_cycle_length: Optional[int] = Field(None, gt=0)
    avg_period_duration: Optional[int] = Field(None, gt=0)

    @property
    def is_complete(self) -> bool:
        return self.avg_cycle_length is not None and self.avg_period_duration is not None

class Prediction(BaseModel):
    next_period: date
    next_ovulation: date

class CycleSummary(BaseModel):
    """
    What display collaborators render: historical statistics plus the
    prediction for the current cycle.
    """
    statistics: CycleStatistics
    prediction: Optional[Prediction] = None
    prediction_cycle_length: Optional[int] = None
    prediction_period_duration: Optional[int] = None
    prediction_source: Optional[str] = None  # "manual" | "computed"

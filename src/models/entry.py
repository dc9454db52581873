"""
Entry model definition for daily cycle logs.
"""
from datetime import date
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator

class FlowLevel(str, Enum):
    """
    Menstrual flow recorded for a day.
    """
    NONE = "None"
    LIGHT = "Light"
    MEDIUM = "Medium"
    HEAVY = "Heavy"

class Symptom(str, Enum):
    """
    Symptom tags a user can attach to a day.
    """
    CRAMPS = "Cramps"
    HEADACHE = "Headache"
    BLOATING = "Bloating"
    MOOD_SWINGS = "Mood Swings"
    NAUSEA = "Nausea"
    BACK_PAIN = "Back Pain"
    BREAST_TENDERNESS = "Breast Tenderness"
    FATIGUE = "Fatigue"
    ACNE = "Acne"
    FOOD_CRAVINGS = "Food Cravings"
    INSOMNIA = "Insomnia"
    ANXIETY = "Anxiety"

class Entry(BaseModel):
    """
    One logged day. Only ``date``, ``flow`` and ``symptoms`` are read by the
    analyzer; the remaining fields are carried through untouched.
    """
    date: date
    flow: FlowLevel = FlowLevel.NONE
    symptoms: List[Symptom] = Field(default_factory=list)
    mood: Optional[str] = None
    sleep: Optional[str] = None
    steps: Optional[str] = None
    exercise: Optional[str] = None
    diet: Optional[str] = None
    cervical: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("symptoms")
    @classmethod
    def _unique_symptoms(cls, value: List[Symptom]) -> List[Symptom]:
        # Keep first occurrence so tallies see each tag once per day
        return list(dict.fromkeys(value))

    @property
    def is_flow_day(self) -> bool:
        """Check if any flow was recorded for this day."""
        return self.flow != FlowLevel.NONE

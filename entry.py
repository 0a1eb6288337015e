import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ParsedFields(BaseModel):
    """Optional values read from one CSV row before resolution."""

    model_config = ConfigDict(frozen=True)

    date: Optional[dt.date] = Field(None, description="Calendar date of the entry.")
    start_time: Optional[dt.time] = Field(None, description="Time of day work started.")
    end_time: Optional[dt.time] = Field(None, description="Time of day work ended.")
    duration: Optional[dt.timedelta] = Field(
        None, description="Net time worked, pause already excluded."
    )
    pause: Optional[dt.timedelta] = Field(
        None, description="Break time subtracted from the end time."
    )


class Entry(BaseModel):
    """A resolved work time interval, ready to be logged."""

    model_config = ConfigDict(frozen=True)

    start: dt.datetime = Field(..., description="Start date and time (local).")
    end: dt.datetime = Field(
        ..., description="End date and time (local). Not required to be after start."
    )

    @property
    def duration(self) -> dt.timedelta:
        return self.end - self.start

"""
Configuration management using Pydantic models loaded from YAML.

The configuration describes a business calendar - opening hours, working
days and public holidays - which is turned into a temporal expression by
``AppConfig.build_schedule``.
"""

import logging
from datetime import date, time
from pathlib import Path
from typing import List

import pendulum
import yaml
from pendulum import Date, DateTime
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .domain.composites import IntersectionTemporalExpression, NotTemporalExpression
from .domain.exceptions import ConfigurationError
from .domain.leaves import DayOfWeekExpression, SpecificDatesExpression, TimeOfDayExpression

logger = logging.getLogger(__name__)


class BusinessHoursConfig(BaseModel):
    """Daily opening hours as whole hours on the wall clock."""
    start_hour: int = 9
    end_hour: int = 17

    @model_validator(mode="after")
    def check_window(self) -> "BusinessHoursConfig":
        """Accept only windows the time-of-day rule can represent."""
        self.to_expression()
        return self

    def to_expression(self) -> TimeOfDayExpression:
        """The opening hours as a ``[start, end)`` time-of-day rule."""
        try:
            return TimeOfDayExpression(start=time(self.start_hour), end=time(self.end_hour))
        except ValueError as exc:
            # time() rejects hours outside 0..23, the rule rejects inverted windows
            raise ValueError(
                f"Invalid business hours {self.start_hour}-{self.end_hour}: {exc}"
            ) from exc


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Berlin"
    business_hours: BusinessHoursConfig = Field(default_factory=BusinessHoursConfig)
    exclude_days: List[int] = Field(default_factory=lambda: [5, 6])  # Saturday, Sunday
    holidays: List[date] = Field(default_factory=list)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA identifier."""
        try:
            pendulum.timezone(value)
        except (ValueError, KeyError) as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @field_validator("exclude_days")
    @classmethod
    def validate_exclude_days(cls, value: List[int]) -> List[int]:
        """Weekdays run 0..6; repeats are dropped, first occurrence wins."""
        for day in value:
            if day not in range(7):
                raise ValueError(f"exclude_days must be between 0 and 6, got {day}")
        return list(dict.fromkeys(value))

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            ConfigurationError: If the file is missing, unreadable or invalid
        """
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}\n"
                f"Please create a temporalrules.yaml file. "
                f"See temporalrules.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            config = cls(**data)
        except ValidationError as exc:
            raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

        logger.debug("Loaded calendar configuration from %s", config_path)
        return config

    def working_days(self) -> List[int]:
        """Weekdays (0=Monday) that are not excluded."""
        return [day for day in range(7) if day not in self.exclude_days]

    def build_schedule(self) -> IntersectionTemporalExpression:
        """
        Build the business calendar as a temporal expression.

        Working days AND business hours AND NOT a holiday.
        """
        schedule = IntersectionTemporalExpression(
            DayOfWeekExpression(self.working_days()),
            self.business_hours.to_expression(),
        )
        if self.holidays:
            schedule.add(NotTemporalExpression(SpecificDatesExpression(self.holidays)))
        return schedule

    def parse_date(self, value: str) -> DateTime:
        """
        Parse an ISO-8601 date or datetime in the configured timezone.

        A bare date means midnight of that day. A bare time is rejected
        rather than being pinned to today.

        Raises:
            ConfigurationError: If the value is not a point in time
        """
        try:
            parsed = pendulum.parse(value, tz=self.timezone, exact=True)
        except ValueError as exc:
            raise ConfigurationError(f"Cannot parse date '{value}': {exc}") from exc

        # DateTime subclasses Date, so it has to be checked first
        if isinstance(parsed, DateTime):
            return parsed
        if isinstance(parsed, Date):
            return pendulum.datetime(parsed.year, parsed.month, parsed.day, tz=self.timezone)
        raise ConfigurationError(f"'{value}' is not a date or datetime")


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for temporalrules.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "temporalrules.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "temporalrules.yaml"

    return config_path

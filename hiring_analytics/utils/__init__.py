"""Shared utilities for the tracker pipeline."""

from hiring_analytics.utils.io import read_tracker_file, write_output
from hiring_analytics.utils.parsing import parse_date, parse_number, time_difference_hours
from hiring_analytics.utils.validators import check_round_slots, validate_dataframe
from hiring_analytics.utils.types import FinalStatus, InterviewStatus, ScreeningStatus

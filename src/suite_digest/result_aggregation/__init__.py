"""Result aggregation exports."""

from .error_extraction import FailureDetails, extract_failure_details, strip_ansi_codes
from .result_aggregator import ResultAggregator, build_test_record
from .result_models import UNGROUPED_SUITE_NAME, UNKNOWN_LOCATION, SuiteGroup, TestRecord

__all__ = [
    "FailureDetails",
    "ResultAggregator",
    "SuiteGroup",
    "TestRecord",
    "UNGROUPED_SUITE_NAME",
    "UNKNOWN_LOCATION",
    "build_test_record",
    "extract_failure_details",
    "strip_ansi_codes",
]

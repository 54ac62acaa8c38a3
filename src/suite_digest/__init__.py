"""Post-run test result aggregation, reporting and notification."""

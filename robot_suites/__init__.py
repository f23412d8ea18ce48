"""Robot Framework suites for the signup flow."""

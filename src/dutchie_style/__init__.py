"""dutchie-style: LaunchDarkly default and migration safety checks for Ruby code."""

__version__ = "0.1.0"

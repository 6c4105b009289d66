"""Exception hierarchy for dutchie-style."""


class DutchieStyleError(Exception):
    """Base class for every error raised by dutchie-style."""


class MatchContractError(DutchieStyleError):
    """A matcher produced captures its classifier cannot work with (a matcher bug)."""


class RubySyntaxError(DutchieStyleError):
    """The Ruby source could not be parsed."""

    def __init__(self, file_path: str, line: int, column: int) -> None:
        self.file_path = file_path
        self.line = line
        self.column = column
        super().__init__(f"{file_path}:{line}:{column}: unparsable Ruby source")


class InfiniteCorrectionLoopError(DutchieStyleError):
    """Auto-correction kept producing a source it had already seen."""

    def __init__(self, file_path: str, passes: int) -> None:
        self.file_path = file_path
        self.passes = passes
        super().__init__(f"Infinite correction loop detected in {file_path} after {passes} passes")


class ConfigurationError(DutchieStyleError):
    """A configuration file is malformed."""

"""Reporters: render a LintResult as text or JSON."""

import json
from typing import Protocol

from dutchie_style.domain.entities import FileReport, LintResult
from dutchie_style.domain.rules import Offense


class LintReporter(Protocol):
    """Protocol for rendering lint results."""

    def render(self, result: LintResult) -> str:
        """Return the full report as a string."""
        ...


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


class TextReporter(LintReporter):
    """One line per offense, RuboCop style, followed by a summary line."""

    def render(self, result: LintResult) -> str:
        lines: list[str] = []
        for report in result.files:
            lines.extend(self._file_lines(report))
        if lines:
            lines.append("")
        lines.append(self.summary(result))
        return "\n".join(lines)

    def _file_lines(self, report: FileReport) -> list[str]:
        if report.failure is not None:
            return [f"{report.file_path}: E: {report.failure}"]
        corrected = {id(o) for o in report.corrected}
        lines = [self._offense_line(o, id(o) in corrected) for o in report.offenses]
        lines.extend(
            f"{error.location}: E: An error occurred while {error.rule} was inspecting: {error.detail}"
            for error in report.errors
        )
        return lines

    @staticmethod
    def _offense_line(offense: Offense, corrected: bool) -> str:
        if corrected:
            tag = "[Corrected] "
        elif offense.correctable:
            tag = "[Correctable] "
        else:
            tag = ""
        return f"{offense.location}: C: {tag}{offense.rule}: {offense.message}"

    @staticmethod
    def summary(result: LintResult) -> str:
        parts = [
            f"{_plural(len(result.files), 'file')} inspected",
            f"{_plural(result.offense_count, 'offense')} detected",
        ]
        if result.corrected_count:
            parts.append(f"{_plural(result.corrected_count, 'offense')} corrected")
        else:
            correctable = sum(1 for f in result.files for o in f.offenses if o.correctable)
            if correctable:
                parts.append(f"{_plural(correctable, 'offense')} autocorrectable")
        if result.failed_files:
            parts.append(f"{_plural(len(result.failed_files), 'file')} could not be processed")
        return ", ".join(parts)


class JsonReporter(LintReporter):
    """Machine readable report."""

    def render(self, result: LintResult) -> str:
        files = []
        for report in result.files:
            corrected = {id(o) for o in report.corrected}
            files.append({
                "path": report.file_path,
                "failure": report.failure,
                "modified": report.modified,
                "offenses": [
                    {
                        "rule": o.rule,
                        "message": o.message,
                        "line": o.line,
                        "column": o.column,
                        "correctable": o.correctable,
                        "corrected": id(o) in corrected,
                    }
                    for o in report.offenses
                ],
                "errors": [
                    {"rule": e.rule, "location": e.location, "detail": e.detail}
                    for e in report.errors
                ],
            })
        payload = {
            "files": files,
            "summary": {
                "inspected_file_count": len(result.files),
                "offense_count": result.offense_count,
                "corrected_count": result.corrected_count,
                "failed_file_count": len(result.failed_files),
            },
        }
        return json.dumps(payload, indent=2)

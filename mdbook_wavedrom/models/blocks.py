from dataclasses import dataclass


@dataclass(frozen=True)
class TargetSpan:
    """One matched fenced block and the text that replaces it.

    `start`/`end` form a half-open range into the source document, running
    from the first fence character of the opening line to the end of the
    closing fence line (its line terminator stays in the document).
    """

    start: int
    end: int
    replacement: str

    def apply(self, document: str) -> str:
        return document[: self.start] + self.replacement + document[self.end :]

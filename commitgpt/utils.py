from typing import List, Sequence


def label(candidate: str) -> str:
    """Return the first line of *candidate*, used for display only."""

    first_line, _, _ = candidate.partition("\n")
    return first_line.rstrip("\r")


def labels(candidates: Sequence[str]) -> List[str]:
    return [label(candidate) for candidate in candidates]

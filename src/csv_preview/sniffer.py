"""Heuristic CSV detection for content without a declared file type."""

DEFAULT_SAMPLE_LINES = 5


def looks_like_csv(
    text: str, sample_lines: int = DEFAULT_SAMPLE_LINES, delimiter: str = ","
) -> bool:
    """
    Check whether text plausibly holds delimiter-separated records.

    Samples the first few lines and requires every one of them to split into
    the same number of fields as the first line. Quoting is ignored, so a
    quoted delimiter can produce a false negative. The empty segment after a
    trailing newline is sampled like any other line, so short files ending in
    a newline are rejected.

    Args:
        text: Raw file content
        sample_lines: Number of leading lines to compare
        delimiter: Field separator to count

    Returns:
        True if at least two lines were sampled and all share the field count
    """
    if not delimiter:
        return False

    lines = text.split("\n")[:sample_lines]

    # One line cannot establish consistency
    if len(lines) < 2:
        return False

    field_count = len(lines[0].split(delimiter))
    return all(len(line.split(delimiter)) == field_count for line in lines)

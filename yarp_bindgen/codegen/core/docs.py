"""
Documentation formatting for generated code.

Node comments in the schema are free text in which lines indented by
four spaces are source examples. Runs of such lines are wrapped in
fenced blocks so documentation tooling renders them as code.
"""

from typing import Iterable, List

EXAMPLE_INDENT = "    "
CLOSE_FENCE = "```"


def open_fence(example_language: str = "ruby") -> str:
    return f"```{example_language}"


def fence_examples(
    lines: Iterable[str],
    open_marker: str = "```ruby",
    close_marker: str = CLOSE_FENCE,
) -> List[str]:
    """
    Wrap runs of indented example lines in fence markers.

    Args:
        lines: Documentation lines
        open_marker: Line emitted before an example run
        close_marker: Line emitted after an example run

    Returns:
        The lines with example indentation stripped and fences inserted.
        Markers are always balanced.
    """
    result = []
    example = False

    for line in lines:
        if line.startswith(EXAMPLE_INDENT):
            if not example:
                result.append(open_marker)
                example = True
            result.append(line[len(EXAMPLE_INDENT):])
        else:
            if example:
                result.append(close_marker)
                example = False
            result.append(line)

    if example:
        result.append(close_marker)

    return result


def docstring_lines(text: str, example_language: str = "ruby") -> List[str]:
    """Fenced documentation lines for a block of free text."""
    return fence_examples(text.splitlines(), open_fence(example_language))


def doc_comment(text: str, prefix: str = "/// ", example_language: str = "ruby") -> str:
    """
    Render free text as a line comment block.

    Every line, fences included, gets the comment prefix. Empty lines keep
    the prefix with trailing whitespace removed.
    """
    return "\n".join(
        f"{prefix}{line}".rstrip() for line in docstring_lines(text, example_language)
    )

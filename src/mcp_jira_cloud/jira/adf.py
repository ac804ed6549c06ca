"""
Atlassian Document Format (ADF) utilities.

Jira Cloud's v3 API expects rich-text fields (descriptions, comment bodies)
as ADF documents rather than plain strings.
"""

import json
from typing import Any

from ..exceptions import MCPJiraInvalidInputError

ADF_VERSION = 1


def text_to_adf(text: str) -> dict[str, Any]:
    """
    Wrap plain text in a minimal ADF document.

    The document holds exactly one paragraph containing one text node; the
    text is passed through untouched (no markup conversion).

    Args:
        text: Plain text to wrap

    Returns:
        ADF document dict
    """
    return {
        "type": "doc",
        "version": ADF_VERSION,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def parse_adf_json(value: str, field_name: str = "description") -> Any:
    """
    Parse a caller-supplied ADF JSON string.

    Args:
        value: JSON text of an ADF document
        field_name: Field name used in the error message

    Returns:
        The decoded JSON value

    Raises:
        MCPJiraInvalidInputError: If the string is not valid JSON
    """
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise MCPJiraInvalidInputError(
            f"Invalid ADF JSON provided for {field_name}: {e}"
        ) from e

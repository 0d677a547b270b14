import os
import logging

from zls_gen.exceptions import ReadmeSectionNotFoundError

logger = logging.getLogger(__name__)


def save_file(path, content):
    """
    Save content to a file, creating parent folders as needed.

    Files are written with `\\n` line endings on every platform.

    Args:
        path (str): The file path.
        content (str): The content to write to the file.

    Returns:
        str: The path that was written.

    Raises:
        OSError: If the file could not be written.
    """
    try:
        folder = os.path.dirname(path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(path, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        return path
    except OSError as e:
        logger.error(f"Error saving file {path}: {e}")
        raise


def replace_section(text, start_indicator, end_indicator, replacement):
    """
    Replace the text between two marker comments.

    The markers themselves are kept.

    Args:
        text (str): The document to edit.
        start_indicator (str): Marker opening the generated section.
        end_indicator (str): Marker closing the generated section.
        replacement (str): New section content.

    Returns:
        str: The edited document.

    Raises:
        ReadmeSectionNotFoundError: If either marker is missing.
    """
    start = text.find(start_indicator)
    if start == -1:
        raise ReadmeSectionNotFoundError(f"start marker not found: {start_indicator}")
    start += len(start_indicator)

    end = text.find(end_indicator, start)
    if end == -1:
        raise ReadmeSectionNotFoundError(f"end marker not found: {end_indicator}")

    return text[:start] + replacement + text[end:]

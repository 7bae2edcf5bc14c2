"""Filename bookkeeping and AWS error helpers."""

from __future__ import annotations

import os
import re

from botocore.exceptions import ClientError

ANALYZED = "analyzed"


def append_to_filename(filename: str, addendum: str) -> str:
    """Insert ``_<addendum>`` before the final extension.

    >>> append_to_filename("posts.json", "analyzed")
    'posts_analyzed.json'
    """
    stem, extension = os.path.splitext(filename)
    return f"{stem}_{addendum}{extension}"


def is_analysis_filename(filename: str) -> bool:
    return ANALYZED in filename.lower()


def source_filename(filename: str) -> str:
    """Name of the raw posts file an analysis file was derived from."""
    return re.sub(f"_{ANALYZED}", "", filename, count=1, flags=re.IGNORECASE)


def output_filename(filename: str) -> str:
    """Name the analysis of ``filename`` is uploaded under."""
    if is_analysis_filename(filename):
        return filename
    return append_to_filename(filename, ANALYZED)


def describe_client_error(error: ClientError) -> tuple[str, str]:
    """Extract the AWS error code and message."""
    err = error.response.get("Error", {})
    return err.get("Code", ""), err.get("Message", "")

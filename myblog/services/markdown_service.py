"""
Markdown Service - turns the on-disk markdown tree into passage records.

Source files live at ``<root>/<year>/<month>/<day>/<title>.md``. Each file
yields its title (first ``# `` heading), the rendered XHTML, a plain-text
summary and the creation date taken from the directory names. Files whose
name disagrees with their title are renamed in place.
"""
from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional

import markdown

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "未命名文档"
SUMMARY_LENGTH = 100
INVALID_FILENAME_CHARS = ("/", "\\", ":", "*", "?", '"', "<", ">", "|")
RENAME_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"

# year/month/day/file.md
PATH_DEPTH = 4

# GitHub-flavored extras on top of the core syntax: tables and fenced code
# (extra), strikethrough, task lists, bare-URL autolinks.
MD_EXTENSIONS = [
    "extra",
    "nl2br",
    "sane_lists",
    "pymdownx.tilde",
    "pymdownx.tasklist",
    "pymdownx.magiclink",
]
MD_EXTENSION_CONFIGS = {
    "pymdownx.tilde": {"subscript": False},
}

_TAG_RE = re.compile(r"<[^>]*>")


@dataclass
class MarkdownDocument:
    """One imported markdown file, ready to be stored as a passage."""

    title: str
    content: str
    original_content: str
    summary: str
    file_path: str
    created_at: datetime
    source: Path


def extract_title(content: str) -> str:
    """Return the text of the first ``# `` heading, or the default title."""
    for line in content.split("\n"):
        trimmed = line.strip()
        if trimmed.startswith("# "):
            return trimmed[2:]
    return DEFAULT_TITLE


def _markdown_renderer() -> markdown.Markdown:
    return markdown.Markdown(
        extensions=MD_EXTENSIONS,
        extension_configs=MD_EXTENSION_CONFIGS,
        output_format="xhtml",
    )


def convert_markdown_to_html(content: str) -> str:
    """Render markdown to XHTML with hard line breaks."""
    # Markdown instances keep per-document state; one per conversion.
    return _markdown_renderer().convert(content)


def extract_summary(html_content: str, length: int = SUMMARY_LENGTH) -> str:
    """Strip tags and whitespace, truncating to ``length`` characters plus an ellipsis."""
    summary = _TAG_RE.sub("", html_content).strip()
    if len(summary) > length:
        summary = summary[:length] + "..."
    return summary


def sanitize_filename(name: str) -> str:
    """
    Make a title safe to use as a file name.

    Each of ``/ \\ : * ? " < > |`` becomes ``_``; surrounding whitespace is
    removed; an empty result becomes the default title.
    """
    result = name
    for char in INVALID_FILENAME_CHARS:
        result = result.replace(char, "_")
    result = result.strip()
    return result or DEFAULT_TITLE


def parse_path_date(
    year: str, month: str, day: str, now: Optional[datetime] = None
) -> datetime:
    """Date from the directory names; ``now`` when they do not form a valid date."""
    try:
        return datetime.strptime(f"{year}-{month}-{day}", "%Y-%m-%d")
    except ValueError:
        logger.debug(f"Invalid date directories {year}/{month}/{day}, using now")
        return now or datetime.now()


class MarkdownImporter:
    """
    Walks a markdown root and produces :class:`MarkdownDocument` objects.

    Args:
        root: The markdown directory
        clock: Source of "now", used for rename timestamps and date fallback
    """

    def __init__(
        self, root: str | Path, clock: Callable[[], datetime] = datetime.now
    ):
        self.root = Path(root)
        self.clock = clock

    def iter_files(self) -> Iterator[Path]:
        """
        Yield every ``.md`` file at exactly ``year/month/day/file.md``.

        Markdown files at any other depth are rejected with a warning. Output
        order is sorted so imports are reproducible.
        """
        if not self.root.is_dir():
            logger.info(f"Markdown directory not found: {self.root}")
            return

        for dirpath, dirnames, filenames in os.walk(self.root):
            dirnames.sort()
            for filename in sorted(filenames):
                if not filename.endswith(".md"):
                    continue
                path = Path(dirpath) / filename
                depth = len(path.relative_to(self.root).parts)
                if depth != PATH_DEPTH:
                    logger.warning(
                        f"Rejected markdown file {path}: expected "
                        f"<year>/<month>/<day>/<title>.md, found depth {depth}"
                    )
                    continue
                yield path

    def load(self, path: Path) -> MarkdownDocument:
        """
        Read and render one file, renaming it when its name and title disagree.

        Raises:
            OSError: if the file cannot be read
        """
        raw = path.read_bytes()
        original = raw.decode("utf-8", errors="replace")
        title = extract_title(original)
        html = convert_markdown_to_html(original)

        year, month, day = path.relative_to(self.root).parts[:3]
        created_at = parse_path_date(year, month, day, now=self.clock())

        path = self._rename_to_title(path, sanitize_filename(title))
        file_path = "/".join((year, month, day, path.stem))

        return MarkdownDocument(
            title=title,
            content=html,
            original_content=original,
            summary=extract_summary(html),
            file_path=file_path,
            created_at=created_at,
            source=path,
        )

    def load_all(self) -> list[MarkdownDocument]:
        """Load every importable file; unreadable files are logged and skipped."""
        documents = []
        for path in self.iter_files():
            try:
                documents.append(self.load(path))
            except OSError as e:
                logger.warning(f"Failed to import markdown file {path}: {e}")
        return documents

    def _rename_to_title(self, path: Path, cleaned_title: str) -> Path:
        # Case-only differences are left alone; case-insensitive filesystems
        # would report the target as already existing.
        if cleaned_title.casefold() == path.stem.casefold():
            return path

        target = path.with_name(f"{cleaned_title}.md")
        if target.exists():
            timestamp = self.clock().strftime(RENAME_TIMESTAMP_FORMAT)
            target = path.with_name(f"{cleaned_title}-{timestamp}.md")

        try:
            path.rename(target)
        except OSError as e:
            logger.warning(f"Failed to rename {path} to {target}: {e}")
            return path

        logger.info(f"Renamed markdown file: {path.name} -> {target.name}")
        return target

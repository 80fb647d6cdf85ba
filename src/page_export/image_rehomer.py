"""Download a page's images next to an output file and relink them.

Images referenced by the page markup are fetched one at a time through an
attachment-fetch callable and written to ``<output stem>_images/`` beside the
output file. Markdown image references whose path contains a downloaded
filename are then rewritten to the local copy.

A failed fetch or write only costs that one image: it is logged as a warning
and its reference is left untouched. Failing to create the image directory
is fatal.
"""

import logging
import os
import re
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Union
from urllib.parse import quote

from src.content_extractor import extract_images

from .errors import ImageDirectoryError
from .models import RehomeResult

logger = logging.getLogger(__name__)

# (page_id, filename) -> attachment bytes
FetchAttachment = Callable[[str, str], bytes]

IMAGE_EXTENSIONS = frozenset({'.png', '.jpg', '.jpeg', '.gif', '.svg', '.webp'})

# ![alt](path) with the three parts captured separately
MARKDOWN_IMAGE_PATTERN = re.compile(r'(!\[[^\]]*\]\()([^)]*)(\))')


# Characters that end or split a bare Markdown link destination
_DESTINATION_ESCAPES = str.maketrans({ch: quote(ch) for ch in ' \t\n()<>'})


def markdown_destination(path: str) -> str:
    """Percent-encode the characters a bare link destination cannot hold.

    Example:
        >>> markdown_destination("page_images/my chart (1).png")
        'page_images/my%20chart%20%281%29.png'
    """
    return path.translate(_DESTINATION_ESCAPES)


def is_image_filename(filename: str) -> bool:
    """Check the filename extension against the image allow-list."""
    return os.path.splitext(filename)[1].lower() in IMAGE_EXTENSIONS


def image_dir_for(output_path: Union[str, Path]) -> Path:
    """Directory that holds the images of ``output_path``.

    Example:
        >>> image_dir_for("docs/guide.md")
        PosixPath('docs/guide_images')
    """
    output_path = Path(output_path)
    return output_path.parent / f"{output_path.stem}_images"


def _image_candidates(markup: str) -> List[str]:
    """Image filenames worth fetching, in document order, each once."""
    candidates = []
    seen = set()
    for image in extract_images(markup):
        if not is_image_filename(image.filename):
            logger.debug(f"Skipping non-image reference: {image.filename}")
            continue
        if image.filename in seen:
            continue
        seen.add(image.filename)
        candidates.append(image.filename)
    return candidates


def _is_within(path: Path, directory: Path) -> bool:
    return path.resolve().is_relative_to(directory.resolve())


def rewrite_image_references(markdown: str, replacements: Dict[str, str]) -> str:
    """Point Markdown image references at their downloaded copies.

    A reference is rewritten when its path contains one of the filenames
    (or a percent-encoded form of it) as a literal substring. Only the path
    is replaced; the ``![alt](`` prefix and closing ``)`` are kept verbatim.
    The longest matching filename wins, and each reference is rewritten
    at most once. New paths are written through markdown_destination().

    Args:
        markdown: Markdown text
        replacements: filename -> new relative path

    Returns:
        The rewritten Markdown
    """
    if not replacements:
        return markdown

    needles = []
    for filename, new_path in replacements.items():
        destination = markdown_destination(new_path)
        for form in {filename, quote(filename, safe='/'), quote(filename, safe="/()+")}:
            needles.append((form, destination))
    needles.sort(key=lambda item: len(item[0]), reverse=True)

    def _replace(match: re.Match) -> str:
        path = match.group(2)
        for needle, new_path in needles:
            if needle in path:
                return match.group(1) + new_path + match.group(3)
        return match.group(0)

    return MARKDOWN_IMAGE_PATTERN.sub(_replace, markdown)


def rehome_images(
    page_id: str,
    markup: str,
    markdown_body: str,
    output_path: Union[str, Path],
    fetch_attachment: FetchAttachment,
) -> RehomeResult:
    """Download the images of a page and relink them in its Markdown.

    Args:
        page_id: Page owning the attachments
        markup: Page markup (storage format, or view format as fallback)
        markdown_body: Markdown already converted from the page
        output_path: File the Markdown will be saved to
        fetch_attachment: Callable returning the bytes of an attachment

    Returns:
        RehomeResult with the rewritten Markdown and per-image outcomes

    Raises:
        ImageDirectoryError: If the image directory cannot be created
    """
    candidates = _image_candidates(markup)
    result = RehomeResult(markdown=markdown_body)
    if not candidates:
        return result

    image_dir = image_dir_for(output_path)
    try:
        image_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ImageDirectoryError(str(image_dir), str(e)) from e
    result.image_dir = str(image_dir)

    for filename in candidates:
        try:
            data = fetch_attachment(page_id, filename)
        except Exception as e:
            logger.warning(f"Failed to download {filename}: {e}")
            result.failed[filename] = str(e)
            continue

        image_path = image_dir / filename
        if not _is_within(image_path, image_dir):
            logger.warning(f"Failed to save {filename}: path escapes {image_dir}")
            result.failed[filename] = f"path escapes {image_dir}"
            continue

        try:
            image_path.write_bytes(data)
        except (OSError, TypeError) as e:
            logger.warning(f"Failed to save {image_path}: {e}")
            result.failed[filename] = str(e)
            continue

        logger.info(f"Downloaded {image_path}")
        result.downloaded[filename] = PurePosixPath(image_dir.name, filename).as_posix()

    result.markdown = rewrite_image_references(markdown_body, result.downloaded)
    return result

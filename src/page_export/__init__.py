"""Page export: output formats, tables of contents and image rehoming."""

from .content_formatter import format_content
from .errors import ImageDirectoryError, PageExportError, UnsupportedFormatError
from .image_rehomer import (
    IMAGE_EXTENSIONS,
    image_dir_for,
    is_image_filename,
    rehome_images,
    rewrite_image_references,
)
from .models import OutputFormat, RehomeResult
from .toc_builder import add_toc, build_toc

__all__ = [
    'format_content',
    'ImageDirectoryError',
    'PageExportError',
    'UnsupportedFormatError',
    'IMAGE_EXTENSIONS',
    'image_dir_for',
    'is_image_filename',
    'rehome_images',
    'rewrite_image_references',
    'OutputFormat',
    'RehomeResult',
    'add_toc',
    'build_toc',
]

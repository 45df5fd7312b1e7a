"""
Content source implementations for page corpora.

Provides iterators over pages:
- FileSource: Read saved pages from a directory
- MappingSource: Serve pages from an in-memory {identifier: text} mapping
"""
from pathlib import Path
from typing import Iterator, Mapping, Optional
from .protocols import Document, ContentSource


class CorpusReadError(RuntimeError):
    """A page in the corpus could not be read. Aborts the run."""


class FileSource(ContentSource):
    """
    Reads saved pages from a directory.

    The identifier is the file's path relative to the input directory, in
    POSIX form, so a page saved as ``tag/this`` matches links normalized to
    ``tag/this``. Hidden files are skipped.
    """

    def __init__(
        self,
        input_dir: Path,
        extension: Optional[str] = None,
        recursive: bool = False,
        strip_extension: bool = False,
        encoding: str = 'utf-8',
    ):
        """
        Args:
            input_dir: Directory containing the saved pages
            extension: Only read files with this extension (e.g. '.html'). None reads every file.
            recursive: If True, search subdirectories recursively
            strip_extension: Drop the file extension from identifiers ('index.html' -> 'index')
            encoding: Text encoding of the pages
        """
        self.input_dir = Path(input_dir)
        if extension:
            extension = extension if extension.startswith('.') else f'.{extension}'
        self.extension = extension
        self.recursive = recursive
        self.strip_extension = strip_extension
        self.encoding = encoding

        if not self.input_dir.is_dir():
            raise ValueError(f"Input directory does not exist: {self.input_dir}")

    def iter_documents(self) -> Iterator[Document]:
        """
        Yield a Document for each matching file, in sorted path order.

        Raises:
            CorpusReadError: If a file cannot be read or decoded
        """
        pattern = f'*{self.extension or ""}'
        paths = self.input_dir.rglob(pattern) if self.recursive else self.input_dir.glob(pattern)

        for filepath in sorted(paths):
            relative = filepath.relative_to(self.input_dir)
            if not filepath.is_file() or any(part.startswith('.') for part in relative.parts):
                continue

            try:
                content = filepath.read_text(encoding=self.encoding)
            except (OSError, UnicodeDecodeError) as e:
                raise CorpusReadError(f"Could not read {filepath}: {e}") from e

            yield Document(
                identifier=self._identifier_for(relative),
                content=content,
                metadata={'filepath': str(filepath)}
            )

    def _identifier_for(self, relative: Path) -> str:
        if self.strip_extension:
            relative = relative.with_suffix('')
        return relative.as_posix()


class MappingSource(ContentSource):
    """
    Serves pages already held in memory.

    Used when the caller has read the corpus itself, and in tests.
    """

    def __init__(self, pages: Mapping[str, str]):
        """
        Args:
            pages: Page identifier -> raw page text
        """
        self.pages = pages

    def iter_documents(self) -> Iterator[Document]:
        """Yield a Document per entry, in the mapping's iteration order."""
        for identifier, content in self.pages.items():
            yield Document(identifier=identifier, content=content)

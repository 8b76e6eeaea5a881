"""Partial providers.

A provider turns a partial name into a parsed Template. A partial that
cannot be found is not an error: providers return an empty template and
the tag renders nothing.
"""

from collections.abc import Mapping
import logging
from pathlib import Path

from pydantic import BaseModel
from pydantic import Field

from pydantic_mustache.core.errors import ProviderError
from pydantic_mustache.template import Template

logger = logging.getLogger(__name__)


class FileProvider(BaseModel):
    """Provide partials from files on disk.

    For a partial named NAME, every path is searched for a file named NAME
    followed by each extension in turn; the first existing file wins.

    Attributes:
        paths: Directories to search, in order. Default is the current
            working directory.
        extensions: Suffixes to try, in order. Default is no extension,
            then ".mustache", then ".stache".

    """

    model_config = {"frozen": True}

    paths: tuple[Path, ...] = Field(default=(Path(),))
    extensions: tuple[str, ...] = Field(default=("", ".mustache", ".stache"))

    def find(self, name: str) -> Path | None:
        """Return the file providing name, or None when there is none."""
        for directory in self.paths:
            for extension in self.extensions:
                candidate = directory / f"{name}{extension}"
                if candidate.is_file():
                    return candidate
        return None

    def get(self, name: str) -> Template:
        """Load and parse the partial named name.

        Args:
            name: Partial name

        Returns:
            Parsed partial, or an empty template when no file matches

        Raises:
            ProviderError: When a matching file cannot be read
            ParseError: When the partial is malformed

        """
        path = self.find(name)
        if path is None:
            logger.debug("Partial %r not found in %s", name, self.paths)
            return Template.parse("", partials=self)

        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            msg = f"Could not read partial {name!r} from {path}: {e}"
            raise ProviderError(msg) from e
        logger.debug("Loaded partial %r from %s", name, path)
        return Template.parse(source, partials=self)


class StaticProvider(BaseModel):
    """Provide partials from an in-memory mapping of name to source."""

    model_config = {"frozen": True}

    partials: Mapping[str, str] = Field(default_factory=dict)

    def get(self, name: str) -> Template:
        """Parse the partial named name.

        Args:
            name: Partial name

        Returns:
            Parsed partial, or an empty template when name is unknown

        Raises:
            ParseError: When the partial is malformed

        """
        source = self.partials.get(name)
        if source is None:
            logger.debug("Partial %r not found", name)
            return Template.parse("", partials=self)
        return Template.parse(source, partials=self)

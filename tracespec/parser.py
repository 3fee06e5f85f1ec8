"""Syntax Tree Source — C++ text to tree-sitter tree."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from . import constants

logger = logging.getLogger(__name__)


class ParserFactory(ABC):
    """Abstract factory for obtaining a tree-sitter parser for a grammar."""

    @abstractmethod
    def get_parser(self, language: str): ...


class TreeSitterParserFactory(ParserFactory):
    """Concrete factory backed by tree-sitter-language-pack.

    Every call hands out a new parser, so independent analyses never share
    parser state.
    """

    def get_parser(self, language: str):
        import tree_sitter_language_pack as tslp

        return tslp.get_parser(language)


class Parser:
    """Parses source text with the grammar chosen at construction."""

    def __init__(
        self,
        parser_factory: ParserFactory,
        language: str = constants.DEFAULT_LANGUAGE,
    ):
        self._factory = parser_factory
        self._language = language

    @property
    def language(self) -> str:
        return self._language

    def parse(self, source: str | bytes):
        """Return the syntax tree for *source*; parser errors propagate."""
        source_bytes = source if isinstance(source, bytes) else source.encode("utf-8")
        logger.debug("Parsing %d bytes as %s", len(source_bytes), self._language)
        return self._factory.get_parser(self._language).parse(source_bytes)
